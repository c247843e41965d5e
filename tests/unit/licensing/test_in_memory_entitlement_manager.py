"""
Unit tests for InMemoryEntitlementManager.
"""

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import LicenseActivationError
from licensing.domain.constants import LicenseFeature
from licensing.infrastructure.in_memory_entitlement_manager import InMemoryEntitlementManager
from licensing.ports.entitlement_manager import (
    EntitlementManagerCallbacks,
    EntitlementManagerOptions,
)


class CallbackRecorder:
    """Callbacks backed by a single certificate slot."""

    def __init__(self, certificate=""):
        self.certificate = certificate
        self.saved = []
        self.feature_changes = []

    async def load_certificate(self):
        return self.certificate

    async def save_certificate(self, value):
        self.saved.append(value)
        self.certificate = value

    def on_feature_change(self, features):
        self.feature_changes.append(features)

    async def collect_usage_metrics(self):
        return [{"name": "enabledUsers", "value": 3}]

    async def collect_passthrough_data(self):
        return {}

    def callbacks(self):
        return EntitlementManagerCallbacks(
            load_certificate=self.load_certificate,
            save_certificate=self.save_certificate,
            on_feature_change=self.on_feature_change,
            device_fingerprint=lambda: "device",
            collect_usage_metrics=self.collect_usage_metrics,
            collect_passthrough_data=self.collect_passthrough_data,
        )


def _options(offline=False, renew_on_init=False):
    return EntitlementManagerOptions(
        server_url="https://license.test/v1",
        tenant_id=1,
        product_identifier="test-product",
        auto_renew_enabled=renew_on_init,
        renew_on_init=renew_on_init,
        auto_renew_offset=3600,
        offline_mode=offline,
        logger=logging.getLogger("tests"),
    )


@pytest.mark.asyncio
class TestInMemoryEntitlementManager:
    """Tests for InMemoryEntitlementManager."""

    async def test_initialize_reads_certificate(self, certificate_factory):
        """Test features and entitlements come from the loaded certificate."""
        recorder = CallbackRecorder(certificate_factory({LicenseFeature.SHARING: True}))
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})

        await manager.initialize()

        assert manager.has_feature_enabled(LicenseFeature.SHARING) is True
        assert manager.get_feature_value(LicenseFeature.SHARING) is True
        assert [e.id for e in manager.get_current_entitlements()] == ["ent-1"]
        assert manager.get_management_jwt() == "management-jwt"
        assert recorder.feature_changes == [{LicenseFeature.SHARING: True}]

    async def test_invalid_certificate_grants_nothing(self, caplog):
        """Test a certificate that cannot be parsed is ignored."""
        recorder = CallbackRecorder("not-json")
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})

        await manager.initialize()

        assert manager.get_current_entitlements() == []
        assert manager.has_feature_enabled(LicenseFeature.SHARING) is False
        assert "not valid JSON" in caplog.text

    async def test_expired_entitlement_grants_nothing(self, certificate_factory):
        """Test entitlements past their validity are not granted."""
        recorder = CallbackRecorder(
            certificate_factory({LicenseFeature.SHARING: True}, valid_to="2000-01-01T00:00:00+00:00")
        )
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})

        await manager.initialize()

        assert len(manager.get_current_entitlements()) == 1
        assert manager.has_feature_enabled(LicenseFeature.SHARING) is False

    async def test_entitlement_within_validity_is_granted(self, certificate_factory):
        """Test an entitlement valid until a timezone-aware future date is granted."""
        recorder = CallbackRecorder(
            certificate_factory({LicenseFeature.SHARING: True}, valid_to="2999-01-01T00:00:00+00:00")
        )
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})

        await manager.initialize()

        assert manager.has_feature_enabled(LicenseFeature.SHARING) is True
        assert manager.get_consumer_id() == "consumer-1"

    async def test_reload_without_changes_does_not_notify(self, certificate_factory):
        """Test feature change callbacks fire only when features change."""
        recorder = CallbackRecorder(certificate_factory({LicenseFeature.SHARING: True}))
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})
        await manager.initialize()

        await manager.reload()

        assert len(recorder.feature_changes) == 1

    async def test_activate_unknown_key(self):
        """Test unknown activation keys are rejected."""
        recorder = CallbackRecorder()
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})
        await manager.initialize()

        with pytest.raises(LicenseActivationError):
            await manager.activate("unknown-key")
        assert recorder.saved == []

    async def test_activate_offline(self, certificate_factory):
        """Test activation is unavailable offline."""
        recorder = CallbackRecorder()
        manager = InMemoryEntitlementManager(
            _options(offline=True),
            recorder.callbacks(),
            activation_keys={"key": certificate_factory({LicenseFeature.SHARING: True})},
        )

        with pytest.raises(LicenseActivationError):
            await manager.activate("key")

    async def test_activate_saves_certificate(self, certificate_factory):
        """Test activation saves the issued certificate."""
        certificate = certificate_factory({LicenseFeature.LDAP: True})
        recorder = CallbackRecorder()
        manager = InMemoryEntitlementManager(
            _options(), recorder.callbacks(), activation_keys={"key": certificate}
        )
        await manager.initialize()

        await manager.activate("key")

        assert recorder.saved == [certificate]
        assert manager.has_feature_enabled(LicenseFeature.LDAP) is True

    async def test_renew_on_init(self, certificate_factory):
        """Test renewal on init re-issues the certificate."""
        recorder = CallbackRecorder(certificate_factory({LicenseFeature.SHARING: True}))
        manager = InMemoryEntitlementManager(
            _options(renew_on_init=True), recorder.callbacks(), activation_keys={}
        )

        await manager.initialize()

        assert len(recorder.saved) == 1
        issued_at = datetime.fromisoformat(json.loads(recorder.saved[0])["issuedAt"])
        assert issued_at.tzinfo is None
        assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - issued_at) < timedelta(minutes=5)

    async def test_renew_offline_is_skipped(self, certificate_factory):
        """Test offline instances do not renew."""
        recorder = CallbackRecorder(certificate_factory({LicenseFeature.SHARING: True}))
        manager = InMemoryEntitlementManager(
            _options(offline=True), recorder.callbacks(), activation_keys={}
        )
        await manager.initialize()

        await manager.renew()

        assert recorder.saved == []

    async def test_reset_drops_state(self, certificate_factory):
        """Test reset forgets the certificate."""
        recorder = CallbackRecorder(certificate_factory({LicenseFeature.SHARING: True}))
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})
        await manager.initialize()

        manager.reset()

        assert manager.get_current_entitlements() == []
        assert manager.has_feature_enabled(LicenseFeature.SHARING) is False
        assert manager.get_management_jwt() == ""
        assert manager.get_consumer_id() == ""

    async def test_shutdown_without_floating_entitlements(self, certificate_factory):
        """Test shutdown leaves fixed entitlements in place."""
        recorder = CallbackRecorder(certificate_factory({LicenseFeature.SHARING: True}))
        manager = InMemoryEntitlementManager(_options(), recorder.callbacks(), activation_keys={})
        await manager.initialize()

        await manager.shutdown()
        await manager.shutdown()

        assert recorder.saved == []
