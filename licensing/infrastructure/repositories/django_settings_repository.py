"""
Django implementation of SettingsRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from licensing.domain.setting import SettingEntry
from licensing.infrastructure.models import Setting as SettingModel
from licensing.ports.settings_repository import SettingsRepository


class DjangoSettingsRepository(SettingsRepository):
    """
    Django ORM implementation of SettingsRepository.
    """

    def _to_domain(self, model: SettingModel) -> SettingEntry:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Setting model

        Returns:
            SettingEntry domain entity
        """
        return SettingEntry(
            key=model.key,
            value=model.value,
            load_on_startup=model.load_on_startup,
        )

    @sync_to_async
    def find_one(self, key: str) -> Optional[SettingEntry]:
        """
        Find a setting by key.

        Args:
            key: Setting key

        Returns:
            SettingEntry or None if not found
        """
        try:
            model = SettingModel.objects.get(key=key)
            return self._to_domain(model)
        except SettingModel.DoesNotExist:
            return None

    @sync_to_async
    def upsert(self, entry: SettingEntry) -> SettingEntry:
        """
        Insert a setting or overwrite the row with the same key.

        Args:
            entry: Setting to store

        Returns:
            Stored setting
        """
        model, _ = SettingModel.objects.update_or_create(
            key=entry.key,
            defaults={
                "value": entry.value,
                "load_on_startup": entry.load_on_startup,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def delete(self, key: str) -> bool:
        """
        Delete a setting by key.

        Args:
            key: Setting key

        Returns:
            True if a row was deleted
        """
        deleted, _ = SettingModel.objects.filter(key=key).delete()
        return deleted > 0
