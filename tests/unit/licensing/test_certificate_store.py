"""
Unit tests for CertificateStore.
"""

import pytest

from licensing.application.services.certificate_store import CertificateStore
from licensing.domain.certificate import CertificateSource
from licensing.domain.constants import SETTINGS_LICENSE_CERT_KEY
from licensing.domain.setting import SettingEntry


@pytest.mark.asyncio
class TestCertificateStore:
    """Tests for CertificateStore."""

    async def test_load_without_stored_certificate(self, settings_repository):
        """Test that a missing row is an empty certificate, not an error."""
        store = CertificateStore(settings_repository)

        certificate = await store.load()

        assert certificate.is_empty
        assert certificate.source is CertificateSource.PERSISTED_STORE
        assert settings_repository.find_calls == 1

    async def test_save_then_load(self, settings_repository):
        """Test that a saved certificate is loaded back."""
        store = CertificateStore(settings_repository)

        await store.save("signed-certificate")
        certificate = await store.load()

        assert certificate.value == "signed-certificate"
        entry = settings_repository.rows[SETTINGS_LICENSE_CERT_KEY]
        assert entry.load_on_startup is False

    async def test_save_is_idempotent(self, settings_repository):
        """Test repeated saves of the same value leave one identical row."""
        store = CertificateStore(settings_repository)

        await store.save("signed-certificate")
        await store.save("signed-certificate")

        assert list(settings_repository.rows) == [SETTINGS_LICENSE_CERT_KEY]
        assert settings_repository.rows[SETTINGS_LICENSE_CERT_KEY].value == "signed-certificate"

    async def test_load_reads_storage_every_time(self, settings_repository):
        """Test that loads are not cached."""
        store = CertificateStore(settings_repository)

        await store.load()
        await settings_repository.upsert(SettingEntry(key=SETTINGS_LICENSE_CERT_KEY, value="new"))
        certificate = await store.load()

        assert certificate.value == "new"
        assert settings_repository.find_calls == 2

    async def test_ephemeral_certificate_wins(self, settings_repository):
        """Test that a configured certificate bypasses storage."""
        await settings_repository.upsert(
            SettingEntry(key=SETTINGS_LICENSE_CERT_KEY, value="stored-certificate")
        )
        store = CertificateStore(settings_repository, ephemeral_cert="ephemeral-certificate")

        certificate = await store.load()

        assert certificate.value == "ephemeral-certificate"
        assert certificate.is_ephemeral
        assert settings_repository.find_calls == 0

    async def test_save_with_ephemeral_certificate_does_not_write(self, settings_repository):
        """Test that storage is unchanged after saving over an ephemeral certificate."""
        await settings_repository.upsert(
            SettingEntry(key=SETTINGS_LICENSE_CERT_KEY, value="stored-certificate")
        )
        store = CertificateStore(settings_repository, ephemeral_cert="ephemeral-certificate")

        await store.save("renewed-certificate")

        assert settings_repository.upsert_calls == 1
        assert settings_repository.rows[SETTINGS_LICENSE_CERT_KEY].value == "stored-certificate"
