"""
Multi-main orchestration state.

Holds the configured multi-main flag, whether the license allows it, and the
leader election outcome of this instance. Leader election runs outside this
service and reports through ``set_role``.
"""
import logging

from core.domain.value_objects import MultiMainRole
from licensing.ports.orchestration import OrchestrationPort

logger = logging.getLogger(__name__)


class OrchestrationService(OrchestrationPort):
    """In-process orchestration state."""

    def __init__(self, multi_main_configured: bool, role: MultiMainRole = MultiMainRole.UNSET):
        self._multi_main_configured = multi_main_configured
        self._multi_main_licensed = False
        self._role = role

    def set_multi_main_setup_licensed(self, licensed: bool) -> None:
        if licensed != self._multi_main_licensed:
            logger.info("Multi-main setup licensed: %s", licensed)
        self._multi_main_licensed = licensed

    def set_role(self, role: MultiMainRole) -> None:
        """
        Record the leader election outcome.

        Args:
            role: New role of this instance
        """
        logger.info("Instance role in multi-main setup changed from %s to %s", self._role, role)
        self._role = role

    @property
    def role(self) -> MultiMainRole:
        return self._role

    @property
    def is_multi_main_setup_enabled(self) -> bool:
        return self._multi_main_configured and self._multi_main_licensed

    @property
    def is_leader(self) -> bool:
        return self._role is MultiMainRole.LEADER

    @property
    def is_follower(self) -> bool:
        return self._role is MultiMainRole.FOLLOWER
