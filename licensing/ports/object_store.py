"""
Object store port (interface).
"""
from abc import ABC, abstractmethod


class ObjectStorePort(ABC):
    """Abstract object store used for binary data."""

    @abstractmethod
    def set_readonly(self, readonly: bool) -> None:
        """
        Block or allow writes. Reads stay available either way.

        Args:
            readonly: True to block writes
        """
        pass

    @property
    @abstractmethod
    def is_readonly(self) -> bool:
        pass
