"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from typing import Iterable, Optional

from core.domain.value_objects import InstanceRole, MultiMainRole
from licensing.domain.entitlement import Entitlement


class RenewalPolicy:
    """Domain service deciding whether this instance may renew the license."""

    @staticmethod
    def is_renewal_enabled(
        role: InstanceRole,
        auto_renew_enabled: bool,
        multi_main_enabled: bool,
        multi_main_role: MultiMainRole,
    ) -> bool:
        """
        Whether this instance should renew the license, on init and periodically.

        In a multi-main setup every main starts with an unset role, so renewal
        stays disabled until leader election makes it the leader. Followers
        never renew, which keeps the mains from being rate limited by the
        license server.

        Args:
            role: Role of this process
            auto_renew_enabled: Auto-renew configuration flag
            multi_main_enabled: Whether multi-main coordination is enabled
            multi_main_role: Leader election outcome of this instance

        Returns:
            True if renewal is enabled
        """
        if role is not InstanceRole.MAIN:
            return False
        if not auto_renew_enabled:
            return False
        if multi_main_enabled:
            return multi_main_role is MultiMainRole.LEADER
        return True


class MainPlanSelector:
    """Domain service picking the main plan among entitlements."""

    @staticmethod
    def select(entitlements: Iterable[Entitlement]) -> Optional[Entitlement]:
        """
        Return the first entitlement marked as main plan.

        Args:
            entitlements: Current entitlements

        Returns:
            Main plan entitlement or None
        """
        for entitlement in entitlements:
            if entitlement.is_main_plan:
                return entitlement
        return None
