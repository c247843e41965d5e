"""
Value objects for the domain.

Enumerations describing how this process is deployed. They are read from
configuration once and then passed around by value.
"""
from enum import Enum


class InstanceRole(Enum):
    """Role of this process in the deployment."""

    MAIN = "main"
    WORKER = "worker"
    WEBHOOK = "webhook"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value


class MultiMainRole(Enum):
    """Leader election outcome for a main instance in a multi-main setup."""

    UNSET = "unset"
    LEADER = "leader"
    FOLLOWER = "follower"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value


class ExecutionMode(Enum):
    """How workflow executions are distributed."""

    REGULAR = "regular"
    QUEUE = "queue"

    def __str__(self) -> str:
        """Return mode as string."""
        return self.value
