"""
Lifecycle states of the entitlement manager owned by this process.
"""
from enum import Enum


class LifecycleState(Enum):
    """
    Entitlement manager lifecycle state.

    Only READY carries a manager handle. SHUTTING_DOWN and SHUT_DOWN are
    terminal for ``init``.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    SHUTTING_DOWN = "shutting_down"
    SHUT_DOWN = "shut_down"

    @property
    def is_terminating(self) -> bool:
        return self in (LifecycleState.SHUTTING_DOWN, LifecycleState.SHUT_DOWN)

    def __str__(self) -> str:
        """Return state as string."""
        return self.value
