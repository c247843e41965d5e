"""
App configuration for Instance License Service.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that must not start exporters or background services
SKIP_SETUP_COMMANDS = [
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "test",
    "check",
    "createsuperuser",
]


def is_setup_skipped() -> bool:
    """Whether the current process is a one-off management command."""
    if len(sys.argv) > 1 and sys.argv[1] in SKIP_SETUP_COMMANDS:
        return True
    # Django's autoreloader runs the project twice; only the child serves requests
    return os.environ.get("RUN_MAIN") == "false"


class InstanceLicenseServiceConfig(AppConfig):
    """App configuration for InstanceLicenseService."""

    name = "InstanceLicenseService"
    verbose_name = "Instance License Service"

    def ready(self):
        """Called when Django starts."""
        if is_setup_skipped():
            return

        if not hasattr(self, "_initialized"):
            try:
                logger.info("Setting up observability...")
                from core.instrumentation import setup_opentelemetry

                setup_opentelemetry()
                self._initialized = True
                logger.info("Observability setup complete")
            except Exception as e:  # pylint: disable=broad-exception-caught
                # The service keeps running without tracing
                logger.error("Error in AppConfig.ready(): %s", e, exc_info=True)
