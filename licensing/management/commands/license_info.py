"""
Django management command to print license information.
"""

import asyncio

from django.core.management.base import BaseCommand

from licensing.container import get_license_services


class Command(BaseCommand):
    """Command to print license information."""

    help = "Print license information"

    def handle(self, *args, **options):
        """Execute the command."""
        lifecycle = get_license_services().lifecycle

        async def load():
            await lifecycle.init()
            await lifecycle.flush()

        asyncio.run(load())

        self.stdout.write("Printing license information:")
        self.stdout.write(lifecycle.get_info())
        self.stdout.write(f"Plan: {lifecycle.get_plan_name()}")
        self.stdout.write(f"Consumer: {lifecycle.get_consumer_id()}")

        main_plan = lifecycle.get_main_plan()
        if main_plan:
            self.stdout.write(f"Main plan: {main_plan.product_id} ({main_plan.id})")
