"""
Licensing service container.

Wires the licensing services of this process. ``LicensingConfig.ready()``
builds one container; tests build their own.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.apps import apps
from django.utils.module_loading import import_string

from core.infrastructure.command_channel import CommandChannel, build_command_channel
from licensing.application.config import LicenseConfig
from licensing.application.services.certificate_store import CertificateStore
from licensing.application.services.feature_change_reactor import FeatureChangeReactor
from licensing.application.services.license_state import LicenseState
from licensing.application.services.lifecycle import LicenseLifecycle
from licensing.application.services.metrics_service import LicenseMetricsService
from licensing.domain.constants import RELOAD_LICENSE_COMMAND
from licensing.infrastructure.object_store import ObjectStoreService
from licensing.infrastructure.orchestration import OrchestrationService
from licensing.infrastructure.repositories.django_settings_repository import (
    DjangoSettingsRepository,
)
from licensing.ports.entitlement_manager import EntitlementManagerFactory
from licensing.ports.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


@dataclass
class LicenseServices:
    """Licensing services of one process."""

    config: LicenseConfig
    lifecycle: LicenseLifecycle
    license_state: LicenseState
    command_channel: CommandChannel
    orchestration: OrchestrationService
    object_store: ObjectStoreService
    metrics_service: LicenseMetricsService

    async def shutdown(self) -> None:
        """Shut the license down and detach from the command channel."""
        try:
            await self.lifecycle.shutdown()
        finally:
            self.command_channel.close()


def build_license_services(
    config: Optional[LicenseConfig] = None,
    manager_factory: Optional[EntitlementManagerFactory] = None,
    settings_repository: Optional[SettingsRepository] = None,
    command_channel: Optional[CommandChannel] = None,
    license_state: Optional[LicenseState] = None,
) -> LicenseServices:
    """
    Build and wire the licensing services.

    Args:
        config: Licensing configuration (defaults to Django settings)
        manager_factory: Entitlement manager factory (defaults to ``LICENSE["MANAGER_CLASS"]``)
        settings_repository: Settings table access (defaults to the Django ORM)
        command_channel: Channel to peer instances (defaults to ``COMMAND_CHANNEL``)
        license_state: State facade to bind (defaults to a new one)

    Returns:
        LicenseServices
    """
    config = config or LicenseConfig.from_settings()
    manager_factory = manager_factory or import_string(config.manager_class)
    settings_repository = settings_repository or DjangoSettingsRepository()
    command_channel = command_channel or build_command_channel(sender_id=config.instance_id)

    orchestration = OrchestrationService(
        multi_main_configured=config.multi_main_enabled,
        role=config.multi_main_role,
    )
    object_store = ObjectStoreService()
    metrics_service = LicenseMetricsService.with_default_collectors()

    lifecycle = LicenseLifecycle(
        config=config,
        certificate_store=CertificateStore(settings_repository, ephemeral_cert=config.ephemeral_cert),
        reactor=FeatureChangeReactor(
            config=config,
            orchestration=orchestration,
            object_store=object_store,
            command_channel=command_channel,
        ),
        metrics_service=metrics_service,
        orchestration=orchestration,
        manager_factory=manager_factory,
    )

    async def handle_reload_license(payload: Dict[str, Any]) -> None:
        logger.info("Received reload-license command from a peer instance")
        await lifecycle.reload()

    command_channel.subscribe(RELOAD_LICENSE_COMMAND, handle_reload_license)

    license_state = license_state or LicenseState()
    license_state.set_provider(lifecycle)

    return LicenseServices(
        config=config,
        lifecycle=lifecycle,
        license_state=license_state,
        command_channel=command_channel,
        orchestration=orchestration,
        object_store=object_store,
        metrics_service=metrics_service,
    )


def get_license_services() -> LicenseServices:
    """Return the container built by the licensing app."""
    return apps.get_app_config("licensing").services
