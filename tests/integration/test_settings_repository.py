"""
Integration tests for the Django settings repository.
"""

import pytest

from licensing.domain.setting import SettingEntry
from licensing.infrastructure.models import Setting
from licensing.infrastructure.repositories.django_settings_repository import (
    DjangoSettingsRepository,
)


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestDjangoSettingsRepository:
    """Integration tests for DjangoSettingsRepository."""

    @pytest.mark.asyncio
    async def test_find_missing_key(self):
        """Test finding a key that was never stored."""
        found = await DjangoSettingsRepository().find_one("license.cert")
        assert found is None

    @pytest.mark.asyncio
    async def test_upsert_inserts_and_overwrites(self):
        """Test upsert keeps a single row per key."""
        repository = DjangoSettingsRepository()

        await repository.upsert(SettingEntry(key="license.cert", value="first"))
        await repository.upsert(SettingEntry(key="license.cert", value="second"))
        found = await repository.find_one("license.cert")

        assert found.value == "second"
        assert found.load_on_startup is False

    @pytest.mark.asyncio
    async def test_delete(self):
        """Test deleting a stored key."""
        repository = DjangoSettingsRepository()
        await repository.upsert(SettingEntry(key="license.cert", value="certificate"))

        assert await repository.delete("license.cert") is True
        assert await repository.delete("license.cert") is False

    def test_rows_use_settings_table(self):
        """Test the model maps to the settings table."""
        Setting.objects.create(key="license.cert", value="certificate")

        assert Setting._meta.db_table == "settings"
        assert Setting.objects.get(key="license.cert").load_on_startup is False
