"""
Licensing configuration.

Snapshot of the Django settings the licensing app reads. Built once when
the service container is wired.
"""
import socket
from dataclasses import dataclass, field
from typing import Tuple

from django.conf import settings

from core.domain.value_objects import ExecutionMode, InstanceRole, MultiMainRole
from licensing.domain.constants import BINARY_DATA_MODE_S3


@dataclass(frozen=True)
class LicenseConfig:
    """Licensing configuration."""

    server_url: str
    tenant_id: int
    product_identifier: str
    auto_renew_enabled: bool
    auto_renew_offset: int
    ephemeral_cert: str = ""
    manager_class: str = "licensing.infrastructure.in_memory_entitlement_manager.InMemoryEntitlementManager"
    init_on_startup: bool = False
    instance_role: InstanceRole = InstanceRole.MAIN
    instance_id: str = ""
    execution_mode: ExecutionMode = ExecutionMode.REGULAR
    multi_main_enabled: bool = False
    multi_main_role: MultiMainRole = MultiMainRole.UNSET
    binary_data_mode: str = "default"
    binary_data_available_modes: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls) -> "LicenseConfig":
        """
        Build the configuration from Django settings.

        Returns:
            LicenseConfig instance
        """
        license_settings = settings.LICENSE
        return cls(
            server_url=license_settings["SERVER_URL"],
            tenant_id=int(license_settings["TENANT_ID"]),
            product_identifier=license_settings["PRODUCT_IDENTIFIER"],
            auto_renew_enabled=bool(license_settings["AUTO_RENEW_ENABLED"]),
            auto_renew_offset=int(license_settings["AUTO_RENEW_OFFSET"]),
            ephemeral_cert=license_settings.get("CERT") or "",
            manager_class=license_settings["MANAGER_CLASS"],
            init_on_startup=bool(license_settings.get("INIT_ON_STARTUP", False)),
            instance_role=InstanceRole(settings.INSTANCE["ROLE"]),
            instance_id=settings.INSTANCE.get("ID") or socket.gethostname(),
            execution_mode=ExecutionMode(settings.EXECUTIONS_MODE),
            multi_main_enabled=bool(settings.MULTI_MAIN_SETUP["ENABLED"]),
            multi_main_role=MultiMainRole(settings.MULTI_MAIN_SETUP["INSTANCE_TYPE"]),
            binary_data_mode=settings.BINARY_DATA["MODE"],
            binary_data_available_modes=tuple(settings.BINARY_DATA["AVAILABLE_MODES"]),
        )

    @property
    def is_main(self) -> bool:
        return self.instance_role is InstanceRole.MAIN

    @property
    def is_queue_mode(self) -> bool:
        return self.execution_mode is ExecutionMode.QUEUE

    @property
    def is_s3_configured(self) -> bool:
        """Binary data is set to use object storage."""
        return self.binary_data_mode == BINARY_DATA_MODE_S3

    @property
    def is_s3_available(self) -> bool:
        return BINARY_DATA_MODE_S3 in self.binary_data_available_modes
