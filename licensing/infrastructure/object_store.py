"""
Object store used for binary data.

Only the write-blocking flag is modelled here; the storage client itself is
configured by the binary data layer.
"""
import logging

from core import metrics
from licensing.ports.object_store import ObjectStorePort

logger = logging.getLogger(__name__)


class ObjectStoreService(ObjectStorePort):
    """Object store write gate."""

    def __init__(self, readonly: bool = False):
        self._readonly = readonly

    def set_readonly(self, readonly: bool) -> None:
        self._readonly = readonly
        metrics.object_store_readonly_toggles_total.labels(
            readonly=str(readonly).lower()
        ).inc()
        if readonly:
            logger.info("Object store is now read-only, writes are blocked")
        else:
            logger.info("Object store is now writable")

    @property
    def is_readonly(self) -> bool:
        return self._readonly
