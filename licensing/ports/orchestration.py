"""
Orchestration port (interface).

Coordination state of a multi-main deployment as seen by licensing.
Leader election itself happens elsewhere.
"""
from abc import ABC, abstractmethod


class OrchestrationPort(ABC):
    """Abstract multi-main coordination component."""

    @abstractmethod
    def set_multi_main_setup_licensed(self, licensed: bool) -> None:
        """
        Record whether the current license allows a multi-main setup.

        Args:
            licensed: Whether multi-main is licensed
        """
        pass

    @property
    @abstractmethod
    def is_multi_main_setup_enabled(self) -> bool:
        """Multi-main is configured and licensed."""
        pass

    @property
    @abstractmethod
    def is_leader(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_follower(self) -> bool:
        pass
