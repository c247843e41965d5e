"""
Certificate store.

Loads and saves the license certificate in the settings table. A certificate
supplied through configuration (``LICENSE["CERT"]``) takes precedence and is
never written back.
"""
import logging

from core import metrics
from licensing.domain.certificate import Certificate, CertificateSource
from licensing.domain.constants import SETTINGS_LICENSE_CERT_KEY
from licensing.domain.setting import SettingEntry
from licensing.ports.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class CertificateStore:
    """Service for reading and writing the license certificate."""

    def __init__(self, settings_repository: SettingsRepository, ephemeral_cert: str = ""):
        """
        Initialize store.

        Args:
            settings_repository: Settings table access
            ephemeral_cert: Certificate from configuration, empty if none
        """
        self.settings_repository = settings_repository
        self.ephemeral_cert = ephemeral_cert

    async def load(self) -> Certificate:
        """
        Load the current certificate.

        Every call reads storage again unless an ephemeral certificate is set.

        Returns:
            Certificate, empty if no license has been stored yet
        """
        if self.ephemeral_cert:
            return Certificate(value=self.ephemeral_cert, source=CertificateSource.EPHEMERAL_CONFIG)

        entry = await self.settings_repository.find_one(SETTINGS_LICENSE_CERT_KEY)
        return Certificate(
            value=entry.value if entry else "",
            source=CertificateSource.PERSISTED_STORE,
        )

    async def save(self, value: str) -> None:
        """
        Persist a certificate.

        Args:
            value: Certificate issued by the entitlement manager
        """
        if self.ephemeral_cert:
            logger.debug("Ephemeral license certificate configured, not saving certificate")
            metrics.license_certificate_saves_total.labels(outcome="skipped").inc()
            return

        await self.settings_repository.upsert(
            SettingEntry(key=SETTINGS_LICENSE_CERT_KEY, value=value, load_on_startup=False)
        )
        metrics.license_certificate_saves_total.labels(outcome="saved").inc()
        logger.debug("License certificate saved")
