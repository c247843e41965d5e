"""
Pytest configuration and shared fixtures.
"""

import json
from dataclasses import replace
from typing import Any, Dict, List, Optional

import pytest
from asgiref.sync import async_to_sync
from django.apps import apps

from core.domain.exceptions import CommandPublishError
from core.infrastructure.command_channel import (
    CommandChannel,
    InMemoryCommandBroker,
    InMemoryCommandChannel,
)
from licensing.application.config import LicenseConfig
from licensing.application.services.certificate_store import CertificateStore
from licensing.application.services.feature_change_reactor import FeatureChangeReactor
from licensing.application.services.lifecycle import LicenseLifecycle
from licensing.application.services.metrics_service import LicenseMetricsService
from licensing.container import build_license_services
from licensing.domain.setting import SettingEntry
from licensing.infrastructure.in_memory_entitlement_manager import InMemoryEntitlementManager
from licensing.infrastructure.object_store import ObjectStoreService
from licensing.infrastructure.orchestration import OrchestrationService
from licensing.ports.settings_repository import SettingsRepository


class InMemorySettingsRepository(SettingsRepository):
    """Settings repository keeping rows in a dict and counting calls."""

    def __init__(self):
        self.rows: Dict[str, SettingEntry] = {}
        self.find_calls = 0
        self.upsert_calls = 0

    async def find_one(self, key: str) -> Optional[SettingEntry]:
        self.find_calls += 1
        return self.rows.get(key)

    async def upsert(self, entry: SettingEntry) -> SettingEntry:
        self.upsert_calls += 1
        self.rows[entry.key] = entry
        return entry

    async def delete(self, key: str) -> bool:
        return self.rows.pop(key, None) is not None


class RecordingCommandChannel(CommandChannel):
    """Command channel recording published commands."""

    def __init__(self, sender_id: str = "test-instance", fail: bool = False):
        super().__init__(sender_id)
        self.published: List[Dict[str, Any]] = []
        self.fail = fail

    async def publish(self, command: Dict[str, Any]) -> None:
        if self.fail:
            raise CommandPublishError("broker unreachable")
        self.published.append(self._envelope(command))

    async def listen(self, stop_event) -> None:
        await stop_event.wait()


class RecordingObjectStore(ObjectStoreService):
    """Object store recording read-only toggles."""

    def __init__(self):
        super().__init__()
        self.calls: List[bool] = []

    def set_readonly(self, readonly: bool) -> None:
        self.calls.append(readonly)
        super().set_readonly(readonly)


class RecordingManagerFactory:
    """Entitlement manager factory recording every construction."""

    def __init__(self, manager_class=InMemoryEntitlementManager, activation_keys=None):
        self.manager_class = manager_class
        self.activation_keys = activation_keys or {}
        self.managers = []
        self.options = []
        self.callbacks = []

    def __call__(self, options, callbacks):
        manager = self.manager_class(options, callbacks, activation_keys=self.activation_keys)
        self.managers.append(manager)
        self.options.append(options)
        self.callbacks.append(callbacks)
        return manager


def make_certificate(
    features: Dict[str, Any],
    entitlement_id: str = "ent-1",
    product_id: str = "enterprise",
    main_plan: bool = True,
    floating: bool = False,
    valid_to: Optional[str] = None,
    management_jwt: str = "management-jwt",
    consumer_id: str = "consumer-1",
) -> str:
    """Build a certificate understood by the in-memory entitlement manager."""
    entitlement = {
        "id": entitlement_id,
        "productId": product_id,
        "features": features,
        "productMetadata": {"terms": {"isMainPlan": main_plan}},
        "floating": floating,
    }
    if valid_to:
        entitlement["validTo"] = valid_to
    return json.dumps(
        {"entitlements": [entitlement], "managementJwt": management_jwt, "consumerId": consumer_id}
    )


BASE_CONFIG = LicenseConfig(
    server_url="https://license.test/v1",
    tenant_id=1,
    product_identifier="test-product",
    auto_renew_enabled=False,
    auto_renew_offset=3600,
    instance_id="test-instance",
)


@pytest.fixture
def certificate_factory():
    """Fixture for building certificates."""
    return make_certificate


@pytest.fixture
def make_config():
    """Fixture for building a LicenseConfig with overrides."""

    def _make(**overrides) -> LicenseConfig:
        return replace(BASE_CONFIG, **overrides)

    return _make


@pytest.fixture
def settings_repository():
    """Fixture for an in-memory SettingsRepository."""
    return InMemorySettingsRepository()


@pytest.fixture
def command_channel():
    """Fixture for a recording CommandChannel."""
    return RecordingCommandChannel()


@pytest.fixture
def object_store():
    """Fixture for a recording object store."""
    return RecordingObjectStore()


@pytest.fixture
def manager_factory():
    """Fixture for a recording entitlement manager factory."""
    return RecordingManagerFactory(
        activation_keys={
            "valid-key": json.loads(make_certificate({"feat:sharing": True, "quota:users": 5})),
        }
    )


@pytest.fixture
def make_manager_factory():
    """Fixture for building recording factories around other manager classes."""
    return RecordingManagerFactory


@pytest.fixture
def build_lifecycle(settings_repository, command_channel, object_store, manager_factory):
    """Fixture wiring a LicenseLifecycle around the in-memory fakes."""

    def _build(config: LicenseConfig = BASE_CONFIG, factory=None, orchestration=None):
        orchestration = orchestration or OrchestrationService(
            multi_main_configured=config.multi_main_enabled,
            role=config.multi_main_role,
        )
        return LicenseLifecycle(
            config=config,
            certificate_store=CertificateStore(settings_repository, ephemeral_cert=config.ephemeral_cert),
            reactor=FeatureChangeReactor(
                config=config,
                orchestration=orchestration,
                object_store=object_store,
                command_channel=command_channel,
            ),
            metrics_service=LicenseMetricsService(),
            orchestration=orchestration,
            manager_factory=factory or manager_factory,
        )

    return _build


@pytest.fixture
def license_services(db, monkeypatch):
    """Fixture installing a fresh licensing container on the licensing app."""
    services = build_license_services(
        command_channel=InMemoryCommandChannel(
            sender_id="test-instance", broker=InMemoryCommandBroker()
        ),
    )
    monkeypatch.setattr(apps.get_app_config("licensing"), "services", services)
    yield services
    async_to_sync(services.shutdown)()


@pytest.fixture
def ready_license_services(license_services):
    """Fixture for a licensing container with an initialized lifecycle."""
    async_to_sync(license_services.lifecycle.init)()
    return license_services


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
