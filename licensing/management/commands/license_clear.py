"""
Django management command to remove the stored license certificate.

Floating entitlements are released to the license server before the
certificate row is deleted.
"""

import asyncio
import logging

from django.core.management.base import BaseCommand

from licensing.container import get_license_services
from licensing.domain.constants import SETTINGS_LICENSE_CERT_KEY
from licensing.infrastructure.repositories.django_settings_repository import (
    DjangoSettingsRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to clear the license certificate."""

    help = "Clear license"

    def handle(self, *args, **options):
        """Execute the command."""
        lifecycle = get_license_services().lifecycle
        repository = DjangoSettingsRepository()

        async def clear():
            await lifecycle.init()
            await lifecycle.shutdown()
            return await repository.delete(SETTINGS_LICENSE_CERT_KEY)

        deleted = asyncio.run(clear())
        logger.info("License certificate cleared (row deleted: %s)", deleted)

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS("Successfully cleared license. Restart the instance to apply.")
        )
