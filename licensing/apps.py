"""
App configuration for the licensing app.
"""

import atexit
import logging

from asgiref.sync import async_to_sync
from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicensingConfig(AppConfig):
    """App configuration for licensing."""

    name = "licensing"
    verbose_name = "Licensing"
    default_auto_field = "django.db.models.BigAutoField"

    services = None

    def ready(self):
        """Wire the licensing services and bind the license state."""
        from InstanceLicenseService.apps import is_setup_skipped
        from licensing.application.services.license_state import license_state
        from licensing.container import build_license_services

        self.services = build_license_services(license_state=license_state)

        if self.services.config.init_on_startup and not is_setup_skipped():
            self._init_license()
            atexit.register(self._shutdown_license)

    def _init_license(self):
        lifecycle = self.services.lifecycle

        async def init_and_flush():
            await lifecycle.init()
            await lifecycle.flush()

        async_to_sync(init_and_flush)()
        logger.info("License state: %s, plan: %s", lifecycle.state, lifecycle.get_plan_name())

    def _shutdown_license(self):
        try:
            async_to_sync(self.services.shutdown)()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error shutting down license: %s", e, exc_info=True)
