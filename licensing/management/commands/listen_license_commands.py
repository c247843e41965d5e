"""
Django management command to listen for license commands from peer instances.

Initializes the license and reloads it on every ``reload-license`` command
until interrupted.
"""

import asyncio
import logging
import signal

from django.core.management.base import BaseCommand

from licensing.container import get_license_services

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to run the license command listener."""

    help = "Listen for reload-license commands from peer instances"

    def handle(self, *args, **options):
        """Execute the command."""
        services = get_license_services()

        async def listen():
            stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(sig, stop_event.set)

            await services.lifecycle.init()
            self.stdout.write(f"Listening for license commands as {services.config.instance_id}")
            try:
                await services.command_channel.listen(stop_event)
            finally:
                await services.shutdown()

        asyncio.run(listen())

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("License command listener stopped"))
