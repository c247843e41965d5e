"""
License handlers.

Handlers behind the license API. Each one waits for the feature change
reactions its operation scheduled before returning, so callers on a
short-lived event loop see them completed.
"""

from core.domain.exceptions import LicenseManagerNotReadyError
from licensing.application.commands.activate_license import ActivateLicenseCommand
from licensing.application.dto.license_info_dto import EntitlementDTO, LicenseInfoDTO
from licensing.application.services.lifecycle import LicenseLifecycle
from licensing.domain.lifecycle_state import LifecycleState


def build_license_info(lifecycle: LicenseLifecycle) -> LicenseInfoDTO:
    """
    Snapshot the current license.

    Args:
        lifecycle: License lifecycle

    Returns:
        LicenseInfoDTO
    """
    return LicenseInfoDTO(
        state=str(lifecycle.state),
        plan_name=lifecycle.get_plan_name(),
        info=lifecycle.get_info(),
        users_limit=lifecycle.get_users_limit(),
        is_within_users_limit=lifecycle.is_within_users_limit(),
        entitlements=[EntitlementDTO.from_entity(e) for e in lifecycle.get_current_entitlements()],
    )


def _require_ready(lifecycle: LicenseLifecycle) -> None:
    if lifecycle.state is not LifecycleState.READY:
        raise LicenseManagerNotReadyError(f"License manager is {lifecycle.state}")


class GetLicenseInfoHandler:
    """Handler for license information queries."""

    def __init__(self, lifecycle: LicenseLifecycle):
        """Initialize handler with the license lifecycle."""
        self.lifecycle = lifecycle

    async def handle(self) -> LicenseInfoDTO:
        """
        Handle license information query.

        Returns:
            LicenseInfoDTO
        """
        return build_license_info(self.lifecycle)


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(self, lifecycle: LicenseLifecycle):
        """Initialize handler with the license lifecycle."""
        self.lifecycle = lifecycle

    async def handle(self, command: ActivateLicenseCommand) -> LicenseInfoDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            LicenseInfoDTO after activation

        Raises:
            LicenseManagerNotReadyError: If the license manager is not running
            LicenseActivationError: If the key is rejected
        """
        _require_ready(self.lifecycle)
        await self.lifecycle.activate(command.activation_key)
        await self.lifecycle.flush()
        return build_license_info(self.lifecycle)


class RenewLicenseHandler:
    """Handler for license renewal."""

    def __init__(self, lifecycle: LicenseLifecycle):
        """Initialize handler with the license lifecycle."""
        self.lifecycle = lifecycle

    async def handle(self) -> LicenseInfoDTO:
        """
        Handle renew license command.

        Returns:
            LicenseInfoDTO after renewal

        Raises:
            LicenseManagerNotReadyError: If the license manager is not running
        """
        _require_ready(self.lifecycle)
        await self.lifecycle.renew()
        await self.lifecycle.flush()
        return build_license_info(self.lifecycle)
