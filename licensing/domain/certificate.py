"""
License certificate value object.

A certificate is an opaque signed string issued by the license server. Only
the entitlement manager understands its contents.
"""
from dataclasses import dataclass
from enum import Enum


class CertificateSource(Enum):
    """Where a certificate was read from."""

    EPHEMERAL_CONFIG = "ephemeral-config"
    PERSISTED_STORE = "persisted-store"

    def __str__(self) -> str:
        """Return source as string."""
        return self.value


@dataclass(frozen=True)
class Certificate:
    """License certificate value object."""

    value: str
    source: CertificateSource

    def __post_init__(self):
        """Validate certificate."""
        if self.value is None:
            raise ValueError("Certificate value cannot be None, use an empty string")

    @property
    def is_empty(self) -> bool:
        """An empty certificate means no license has been activated yet."""
        return self.value == ""

    @property
    def is_ephemeral(self) -> bool:
        return self.source is CertificateSource.EPHEMERAL_CONFIG

    def __str__(self) -> str:
        """Return certificate as string."""
        return self.value
