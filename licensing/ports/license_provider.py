"""
License provider port (interface).

Backend answering feature queries for ``LicenseState``.
"""
from abc import ABC, abstractmethod
from typing import Any


class LicenseProvider(ABC):
    """Abstract source of feature flags and quotas."""

    @abstractmethod
    def is_licensed(self, feature: str) -> bool:
        """
        Check whether a boolean feature is granted.

        Args:
            feature: Feature identifier (e.g. ``feat:sharing``)

        Returns:
            True if granted
        """
        pass

    @abstractmethod
    def get_value(self, feature: str) -> Any:
        """
        Get the raw value of a feature or quota.

        Args:
            feature: Feature identifier (e.g. ``quota:users``)

        Returns:
            Value, or None when the license does not define it
        """
        pass
