"""
License usage metrics service.

Collects the usage metrics and passthrough data the entitlement manager
reports to the license server on renewal.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List

from asgiref.sync import sync_to_async
from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)

UsageCollector = Callable[[], Awaitable[Any]]


@sync_to_async
def count_enabled_users() -> int:
    """Count active user accounts."""
    return get_user_model().objects.filter(is_active=True).count()


class LicenseMetricsService:
    """Registry of async usage collectors."""

    def __init__(self):
        self._usage_collectors: Dict[str, UsageCollector] = {}
        self._passthrough_collectors: Dict[str, UsageCollector] = {}

    @classmethod
    def with_default_collectors(cls) -> "LicenseMetricsService":
        service = cls()
        service.register_usage_collector("enabledUsers", count_enabled_users)
        return service

    def register_usage_collector(self, name: str, collector: UsageCollector) -> None:
        """
        Register a usage metric.

        Args:
            name: Metric name reported to the license server
            collector: Coroutine function returning the metric value
        """
        self._usage_collectors[name] = collector

    def register_passthrough_collector(self, name: str, collector: UsageCollector) -> None:
        """
        Register a passthrough field.

        Args:
            name: Field name reported to the license server
            collector: Coroutine function returning the field value
        """
        self._passthrough_collectors[name] = collector

    async def collect_usage_metrics(self) -> List[Dict[str, Any]]:
        """
        Collect all usage metrics.

        Collectors that fail are left out of the report.

        Returns:
            List of ``{"name": ..., "value": ...}`` dicts
        """
        results = await self._collect(self._usage_collectors)
        return [{"name": name, "value": value} for name, value in results.items()]

    async def collect_passthrough_data(self) -> Dict[str, Any]:
        """
        Collect all passthrough fields.

        Returns:
            Field name to value mapping
        """
        return await self._collect(self._passthrough_collectors)

    async def _collect(self, collectors: Dict[str, UsageCollector]) -> Dict[str, Any]:
        names = list(collectors)
        values = await asyncio.gather(
            *(collectors[name]() for name in names), return_exceptions=True
        )
        collected = {}
        for name, value in zip(names, values):
            if isinstance(value, Exception):
                logger.warning(f"Failed to collect license metric {name}: {value}")
                continue
            collected[name] = value
        return collected
