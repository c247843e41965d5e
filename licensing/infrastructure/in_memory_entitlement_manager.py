"""
In-memory entitlement manager.

A local stand-in for the vendor entitlement manager, used in development and
tests. Certificates are plain JSON documents and activation keys are looked
up in ``settings.LICENSE["DEV_ACTIVATION_KEYS"]``; nothing is signed and no
license server is contacted.

Certificate format::

    {
        "entitlements": [
            {
                "id": "ent-1",
                "productId": "enterprise",
                "features": {"feat:sharing": true, "quota:users": 10},
                "productMetadata": {"terms": {"isMainPlan": true}},
                "validFrom": "2024-01-01T00:00:00",
                "validTo": "2030-01-01T00:00:00",
                "floating": false
            }
        ],
        "managementJwt": "...",
        "consumerId": "...",
        "issuedAt": "2024-01-01T00:00:00"
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from django.conf import settings

from core.domain.exceptions import LicenseActivationError
from licensing.domain.entitlement import Entitlement
from licensing.ports.entitlement_manager import (
    EntitlementManager,
    EntitlementManagerCallbacks,
    EntitlementManagerOptions,
    FeatureMap,
)

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class InMemoryEntitlementManager(EntitlementManager):
    """
    In-memory entitlement manager implementation.
    """

    def __init__(
        self,
        options: EntitlementManagerOptions,
        callbacks: EntitlementManagerCallbacks,
        activation_keys: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the manager.

        Args:
            options: Construction options
            callbacks: Application callbacks
            activation_keys: Activation key to certificate document mapping
                (defaults to ``settings.LICENSE["DEV_ACTIVATION_KEYS"]``)
        """
        self.options = options
        self.callbacks = callbacks
        self.logger = options.logger or logger
        if activation_keys is None:
            activation_keys = settings.LICENSE.get("DEV_ACTIVATION_KEYS", {})
        self._activation_keys = activation_keys
        self._certificate: Dict[str, Any] = {}
        self._entitlements: List[Entitlement] = []
        self._features: Optional[FeatureMap] = None
        self._is_shut_down = False

    async def initialize(self) -> None:
        raw = await self.callbacks.load_certificate()
        self._apply_certificate(raw)
        self.logger.debug(
            "License initialized for device %s (offline=%s)",
            self.callbacks.device_fingerprint(),
            self.options.offline_mode,
        )
        if self.options.renew_on_init and not self.options.offline_mode and self._certificate:
            await self.renew()

    async def activate(self, activation_key: str) -> None:
        if self.options.offline_mode:
            raise LicenseActivationError("License activation is not available in offline mode")
        document = self._activation_keys.get(activation_key)
        if document is None:
            raise LicenseActivationError("Activation key is invalid or has already been used")

        raw = document if isinstance(document, str) else json.dumps(document)
        self._apply_certificate(raw)
        await self.callbacks.save_certificate(raw)
        self.logger.info("License activated")

    async def reload(self) -> None:
        raw = await self.callbacks.load_certificate()
        self._apply_certificate(raw)

    async def renew(self) -> None:
        if self.options.offline_mode:
            self.logger.debug("Skipping license renewal in offline mode")
            return
        if not self._certificate:
            self.logger.debug("No license certificate to renew")
            return

        usage = await self.callbacks.collect_usage_metrics()
        passthrough = await self.callbacks.collect_passthrough_data()
        self.logger.debug(
            "Reporting %d usage metric(s) and %d passthrough field(s) on renewal",
            len(usage),
            len(passthrough),
        )

        document = dict(self._certificate)
        document["issuedAt"] = datetime.now(timezone.utc).replace(tzinfo=None).isoformat()
        raw = json.dumps(document)
        self._apply_certificate(raw)
        await self.callbacks.save_certificate(raw)
        self.logger.info("License renewed")

    async def shutdown(self) -> None:
        if self._is_shut_down:
            return
        self._is_shut_down = True
        if self.options.offline_mode or not self._certificate:
            return

        floating = [e for e in self._certificate.get("entitlements", []) if e.get("floating")]
        if not floating:
            return

        # Floating entitlements go back to the pool; the rest stay in the certificate
        document = dict(self._certificate)
        document["entitlements"] = [
            e for e in self._certificate.get("entitlements", []) if not e.get("floating")
        ]
        await self.callbacks.save_certificate(json.dumps(document))
        self.logger.info("Released %d floating entitlement(s)", len(floating))

    def reset(self) -> None:
        self._certificate = {}
        self._entitlements = []
        self._features = None

    def has_feature_enabled(self, feature: str) -> bool:
        return bool((self._features or {}).get(feature, False))

    def get_feature_value(self, feature: str) -> Any:
        return (self._features or {}).get(feature)

    def get_current_entitlements(self) -> List[Entitlement]:
        return list(self._entitlements)

    def get_management_jwt(self) -> str:
        return self._certificate.get("managementJwt", "")

    def get_consumer_id(self) -> str:
        return self._certificate.get("consumerId", "")

    def __str__(self) -> str:
        return (
            f"InMemoryEntitlementManager(tenant={self.options.tenant_id}, "
            f"product={self.options.product_identifier}, "
            f"entitlements={len(self._entitlements)}, "
            f"offline={self.options.offline_mode})"
        )

    def _apply_certificate(self, raw: str) -> None:
        """Parse a certificate and notify on feature changes."""
        document: Dict[str, Any] = {}
        if raw:
            try:
                document = json.loads(raw)
            except ValueError:
                self.logger.warning("Ignoring license certificate that is not valid JSON")

        entitlements = [
            Entitlement(
                id=item.get("id", ""),
                product_id=item.get("productId", ""),
                features=item.get("features", {}),
                product_metadata=item.get("productMetadata", {}),
                valid_from=_parse_datetime(item.get("validFrom")),
                valid_to=_parse_datetime(item.get("validTo")),
            )
            for item in document.get("entitlements", [])
        ]

        features: FeatureMap = {}
        for entitlement in entitlements:
            if entitlement.is_active():
                features.update(entitlement.features)

        self._certificate = document
        self._entitlements = entitlements
        previous, self._features = self._features, features
        if previous != features:
            # The returned reaction is not awaited
            self.callbacks.on_feature_change(dict(features))
