"""
Feature change reactor.

Runs whenever the entitlement manager reports a new feature set. Each step
is isolated: a failing step is logged and counted, and the next step still
runs.
"""
import logging

from core import metrics
from core.infrastructure.command_channel import CommandChannel
from licensing.application.config import LicenseConfig
from licensing.domain.constants import RELOAD_LICENSE_COMMAND, LicenseFeature
from licensing.ports.entitlement_manager import FeatureMap
from licensing.ports.object_store import ObjectStorePort
from licensing.ports.orchestration import OrchestrationPort

logger = logging.getLogger(__name__)


class FeatureChangeReactor:
    """Propagates entitlement changes to orchestration, peers and the object store."""

    def __init__(
        self,
        config: LicenseConfig,
        orchestration: OrchestrationPort,
        object_store: ObjectStorePort,
        command_channel: CommandChannel,
    ):
        self.config = config
        self.orchestration = orchestration
        self.object_store = object_store
        self.command_channel = command_channel

    async def handle(self, features: FeatureMap) -> None:
        """
        React to a new feature set.

        Args:
            features: Feature map reported by the entitlement manager
        """
        metrics.license_feature_changes_total.inc()

        if self.config.is_queue_mode and self.config.multi_main_enabled:
            try:
                self._update_multi_main(features)
            except Exception as e:
                self._step_failed("multi_main", e)

            if self.orchestration.is_follower:
                logger.debug("Instance is follower, skipping sending of reload-license command")
                return

        if self.config.is_queue_mode:
            try:
                await self.command_channel.publish({"command": RELOAD_LICENSE_COMMAND})
                metrics.license_reload_commands_published_total.inc()
            except Exception as e:
                self._step_failed("publish_reload", e)

        if self.config.is_s3_configured and self.config.is_s3_available:
            try:
                if not features.get(LicenseFeature.BINARY_DATA_S3, False):
                    self.object_store.set_readonly(True)
            except Exception as e:
                self._step_failed("object_store_readonly", e)

    def _update_multi_main(self, features: FeatureMap) -> None:
        """Push the multi-main license flag into orchestration."""
        is_multi_main_licensed = bool(features.get(LicenseFeature.MULTIPLE_MAIN_INSTANCES, False))
        self.orchestration.set_multi_main_setup_licensed(is_multi_main_licensed)

        if not is_multi_main_licensed and not self.orchestration.is_follower:
            logger.warning(
                "License changed with no support for multi-main setup - "
                "no new followers will be allowed to init. "
                "To restore multi-main setup, please upgrade to a license that supports this feature."
            )

    def _step_failed(self, step: str, error: Exception) -> None:
        metrics.license_feature_change_step_failures_total.labels(step=step).inc()
        logger.error(f"Failed to handle license feature change ({step}): {error}", exc_info=True)
