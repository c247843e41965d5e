"""
Settings repository port (interface).

This defines the contract for key/value settings persistence.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional

from licensing.domain.setting import SettingEntry


class SettingsRepository(ABC):
    """
    Abstract repository for settings rows.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_one(self, key: str) -> Optional[SettingEntry]:
        """
        Find a setting by key.

        Args:
            key: Setting key

        Returns:
            SettingEntry or None if not found
        """
        pass

    @abstractmethod
    async def upsert(self, entry: SettingEntry) -> SettingEntry:
        """
        Insert a setting or overwrite the row with the same key.

        Args:
            entry: Setting to store

        Returns:
            Stored setting
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a setting by key.

        Args:
            key: Setting key

        Returns:
            True if a row was deleted
        """
        pass
