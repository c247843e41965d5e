"""
Entitlement manager port (interface).

The entitlement manager verifies certificates, talks to the license server
and tracks the current entitlements. It is an external capability: this
module only describes what the lifecycle needs from it and what the lifecycle
hands to it on construction.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from licensing.domain.entitlement import Entitlement

FeatureMap = Dict[str, Any]


@dataclass(frozen=True)
class EntitlementManagerCallbacks:
    """
    Functions the entitlement manager calls back into the application.

    ``on_feature_change`` returns the scheduled reaction without awaiting it;
    the manager only waits for the callback itself to return.
    """

    load_certificate: Callable[[], Awaitable[str]]
    save_certificate: Callable[[str], Awaitable[None]]
    on_feature_change: Callable[[FeatureMap], Optional[Awaitable[None]]]
    device_fingerprint: Callable[[], str]
    collect_usage_metrics: Callable[[], Awaitable[List[Dict[str, Any]]]]
    collect_passthrough_data: Callable[[], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class EntitlementManagerOptions:
    """Construction options of an entitlement manager."""

    server_url: str
    tenant_id: int
    product_identifier: str
    auto_renew_enabled: bool
    renew_on_init: bool
    auto_renew_offset: int
    offline_mode: bool
    logger: logging.Logger


class EntitlementManager(ABC):
    """
    Abstract entitlement manager.

    Implementations are constructed with ``(options, callbacks)``.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Load the certificate, verify it and, if enabled, renew it."""
        pass

    @abstractmethod
    async def activate(self, activation_key: str) -> None:
        """
        Exchange an activation key for a certificate.

        Args:
            activation_key: Key entered by the user

        Raises:
            LicenseActivationError: If the key is rejected
        """
        pass

    @abstractmethod
    async def reload(self) -> None:
        """Re-read the certificate through ``load_certificate``."""
        pass

    @abstractmethod
    async def renew(self) -> None:
        """Renew the certificate with the license server."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Release floating entitlements and stop background work."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Drop local state (certificate, entitlements, timers)."""
        pass

    @abstractmethod
    def has_feature_enabled(self, feature: str) -> bool:
        pass

    @abstractmethod
    def get_feature_value(self, feature: str) -> Any:
        pass

    @abstractmethod
    def get_current_entitlements(self) -> List[Entitlement]:
        pass

    @abstractmethod
    def get_management_jwt(self) -> str:
        pass

    @abstractmethod
    def get_consumer_id(self) -> str:
        """Identifier the license server assigned to this installation."""
        pass

    @abstractmethod
    def __str__(self) -> str:
        """Human readable summary of the license."""
        pass


EntitlementManagerFactory = Callable[
    [EntitlementManagerOptions, EntitlementManagerCallbacks], EntitlementManager
]
