"""
License lifecycle service.

Owns the single entitlement manager of this process. ``init`` constructs the
manager at most once; ``shutdown`` makes every later ``init`` a no-op. While
no manager is running, operations do nothing and queries return fallbacks.
"""
import asyncio
import hashlib
import logging
import threading
from typing import Any, Dict, List, Optional, Set

from core import metrics
from core.domain.value_objects import MultiMainRole
from core.instrumentation import get_tracer
from licensing.application.config import LicenseConfig
from licensing.application.services.certificate_store import CertificateStore
from licensing.application.services.feature_change_reactor import FeatureChangeReactor
from licensing.application.services.metrics_service import LicenseMetricsService
from licensing.domain.constants import PLAN_NAME, UNLIMITED_LICENSE_QUOTA, LicenseQuota
from licensing.domain.entitlement import Entitlement
from licensing.domain.lifecycle_state import LifecycleState
from licensing.domain.services import MainPlanSelector, RenewalPolicy
from licensing.ports.entitlement_manager import (
    EntitlementManager,
    EntitlementManagerCallbacks,
    EntitlementManagerFactory,
    EntitlementManagerOptions,
    FeatureMap,
)
from licensing.ports.license_provider import LicenseProvider
from licensing.ports.orchestration import OrchestrationPort

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

DEFAULT_PLAN_NAME = "Community"


async def _noop_save(value: str) -> None:
    pass


def _noop_feature_change(features: FeatureMap) -> None:
    return None


async def _no_usage_metrics() -> List[Dict[str, Any]]:
    return []


async def _no_passthrough_data() -> Dict[str, Any]:
    return {}


class LicenseLifecycle(LicenseProvider):
    """
    Entitlement manager lifecycle.

    Answers feature queries for ``LicenseState``.
    """

    def __init__(
        self,
        config: LicenseConfig,
        certificate_store: CertificateStore,
        reactor: FeatureChangeReactor,
        metrics_service: LicenseMetricsService,
        orchestration: OrchestrationPort,
        manager_factory: EntitlementManagerFactory,
    ):
        """
        Initialize lifecycle.

        Args:
            config: Licensing configuration
            certificate_store: Certificate load/save
            reactor: Feature change reactor
            metrics_service: Usage metrics collectors
            orchestration: Multi-main coordination state
            manager_factory: Builds an entitlement manager from options and callbacks
        """
        self.config = config
        self.certificate_store = certificate_store
        self.reactor = reactor
        self.metrics_service = metrics_service
        self.orchestration = orchestration
        self.manager_factory = manager_factory

        self._lock = threading.Lock()
        self._state = LifecycleState.UNINITIALIZED
        self._handle: Optional[EntitlementManager] = None
        self._pending_reactions: Set[asyncio.Task] = set()
        self._publish_state()

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def handle(self) -> Optional[EntitlementManager]:
        """The running entitlement manager, only set while READY."""
        return self._handle

    async def init(self, force_recreate: bool = False) -> None:
        """
        Construct and initialize the entitlement manager.

        Initialization errors are logged and leave the lifecycle without a
        manager; a later call may try again.

        Args:
            force_recreate: Replace a running manager
        """
        with self._lock:
            if self._state.is_terminating:
                logger.debug("License is shutting down, skipping init")
                self._count("init", "skipped")
                return
            if self._state is LifecycleState.INITIALIZING:
                logger.debug("License init already in progress, skipping init")
                self._count("init", "skipped")
                return
            if self._handle is not None and not force_recreate:
                logger.warning("License manager already initialized or shutting down")
                self._count("init", "skipped")
                return
            previous, self._handle = self._handle, None
            self._set_state(LifecycleState.INITIALIZING)

        if previous is not None:
            previous.reset()

        with tracer.start_as_current_span("license.init") as span:
            span.set_attribute("license.instance_role", str(self.config.instance_role))
            span.set_attribute("license.force_recreate", force_recreate)
            try:
                manager = self.manager_factory(self._build_options(), self._build_callbacks())
                await manager.initialize()
            except Exception as e:
                logger.error(f"Could not initialize license manager sdk: {e}", exc_info=True)
                span.record_exception(e)
                with self._lock:
                    if self._state is LifecycleState.INITIALIZING:
                        self._set_state(LifecycleState.UNINITIALIZED)
                self._count("init", "failure")
                return

        with self._lock:
            shut_down_meanwhile = self._state.is_terminating
            if not shut_down_meanwhile:
                self._handle = manager
                self._set_state(LifecycleState.READY)

        if shut_down_meanwhile:
            logger.info("License shut down during init, releasing the new license manager")
            await self._shutdown_manager(manager)
            self._count("init", "skipped")
            return

        logger.debug("License initialized")
        self._count("init", "success")

    async def activate(self, activation_key: str) -> None:
        """
        Activate a license key.

        Args:
            activation_key: Key entered by the user

        Raises:
            LicenseActivationError: If the key is rejected
        """
        handle = self._handle
        if handle is None:
            logger.warning("License manager not initialized, skipping activation")
            self._count("activate", "skipped")
            return

        with tracer.start_as_current_span("license.activate"):
            try:
                await handle.activate(activation_key)
            except Exception:
                self._count("activate", "failure")
                raise
        self._count("activate", "success")

    async def reload(self) -> None:
        """Re-read the certificate from storage."""
        handle = self._handle
        if handle is None:
            self._count("reload", "skipped")
            return

        with tracer.start_as_current_span("license.reload"):
            try:
                await handle.reload()
            except Exception as e:
                logger.error(f"Failed to reload license: {e}", exc_info=True)
                self._count("reload", "failure")
                raise
        logger.debug("License reloaded")
        self._count("reload", "success")

    async def renew(self) -> None:
        """Renew the certificate with the license server."""
        handle = self._handle
        if handle is None:
            self._count("renew", "skipped")
            return

        with tracer.start_as_current_span("license.renew"):
            try:
                await handle.renew()
            except Exception as e:
                logger.error(f"Failed to renew license: {e}", exc_info=True)
                self._count("renew", "failure")
                raise
        logger.debug("License renewed")
        self._count("renew", "success")

    async def shutdown(self) -> None:
        """
        Shut the entitlement manager down for good.

        The state leaves READY before the manager is awaited, so an ``init``
        racing with shutdown sees it and returns.
        """
        with self._lock:
            if self._state.is_terminating:
                return
            handle, self._handle = self._handle, None
            self._set_state(LifecycleState.SHUTTING_DOWN)

        with tracer.start_as_current_span("license.shutdown"):
            try:
                if handle is not None:
                    await self._shutdown_manager(handle)
            finally:
                with self._lock:
                    self._set_state(LifecycleState.SHUT_DOWN)
        await self.flush()
        logger.debug("License shut down")
        self._count("shutdown", "success")

    async def reinit(self) -> None:
        """Reset the running manager and construct a fresh one."""
        await self.init(force_recreate=True)
        logger.debug("License reinitialized")

    async def flush(self) -> None:
        """Wait for scheduled feature change reactions to finish."""
        while self._pending_reactions:
            await asyncio.gather(*list(self._pending_reactions), return_exceptions=True)

    def is_licensed(self, feature: str) -> bool:
        handle = self._handle
        return handle.has_feature_enabled(feature) if handle is not None else False

    def get_value(self, feature: str) -> Any:
        handle = self._handle
        return handle.get_feature_value(feature) if handle is not None else None

    def get_current_entitlements(self) -> List[Entitlement]:
        handle = self._handle
        return handle.get_current_entitlements() if handle is not None else []

    def get_management_jwt(self) -> str:
        handle = self._handle
        return handle.get_management_jwt() if handle is not None else ""

    def get_consumer_id(self) -> str:
        handle = self._handle
        return handle.get_consumer_id() if handle is not None else "unknown"

    def get_main_plan(self) -> Optional[Entitlement]:
        """
        Get the main plan entitlement.

        Returns:
            The entitlement marked as main plan, or None
        """
        return MainPlanSelector.select(self.get_current_entitlements())

    def get_plan_name(self) -> str:
        return self.get_value(PLAN_NAME) or DEFAULT_PLAN_NAME

    def get_info(self) -> str:
        handle = self._handle
        return str(handle) if handle is not None else "n/a"

    def get_users_limit(self) -> int:
        value = self.get_value(LicenseQuota.USERS_LIMIT)
        return UNLIMITED_LICENSE_QUOTA if value is None else value

    def is_within_users_limit(self) -> bool:
        return self.get_users_limit() == UNLIMITED_LICENSE_QUOTA

    def _build_options(self) -> EntitlementManagerOptions:
        renewal_enabled = RenewalPolicy.is_renewal_enabled(
            role=self.config.instance_role,
            auto_renew_enabled=self.config.auto_renew_enabled,
            multi_main_enabled=self.config.multi_main_enabled,
            multi_main_role=self._multi_main_role(),
        )
        return EntitlementManagerOptions(
            server_url=self.config.server_url,
            tenant_id=self.config.tenant_id,
            product_identifier=self.config.product_identifier,
            auto_renew_enabled=renewal_enabled,
            renew_on_init=renewal_enabled,
            auto_renew_offset=self.config.auto_renew_offset,
            offline_mode=not self.config.is_main,
            logger=logging.getLogger("licensing.entitlement_manager"),
        )

    def _build_callbacks(self) -> EntitlementManagerCallbacks:
        # Only main may write the certificate or react to changes
        if self.config.is_main:
            return EntitlementManagerCallbacks(
                load_certificate=self._load_certificate,
                save_certificate=self._save_certificate,
                on_feature_change=self._on_feature_change,
                device_fingerprint=self._device_fingerprint,
                collect_usage_metrics=self.metrics_service.collect_usage_metrics,
                collect_passthrough_data=self.metrics_service.collect_passthrough_data,
            )
        return EntitlementManagerCallbacks(
            load_certificate=self._load_certificate,
            save_certificate=_noop_save,
            on_feature_change=_noop_feature_change,
            device_fingerprint=self._device_fingerprint,
            collect_usage_metrics=_no_usage_metrics,
            collect_passthrough_data=_no_passthrough_data,
        )

    def _multi_main_role(self) -> MultiMainRole:
        if self.orchestration.is_leader:
            return MultiMainRole.LEADER
        if self.orchestration.is_follower:
            return MultiMainRole.FOLLOWER
        return MultiMainRole.UNSET

    async def _load_certificate(self) -> str:
        certificate = await self.certificate_store.load()
        return certificate.value

    async def _save_certificate(self, value: str) -> None:
        try:
            await self.certificate_store.save(value)
        except Exception as e:
            metrics.license_certificate_saves_total.labels(outcome="failure").inc()
            logger.error(f"Failed to save license certificate: {e}", exc_info=True)

    def _on_feature_change(self, features: FeatureMap) -> asyncio.Task:
        """
        Schedule the feature change reaction.

        The task is returned without being awaited; ``flush`` waits for it.
        """
        task = asyncio.get_running_loop().create_task(self.reactor.handle(features))
        self._pending_reactions.add(task)
        task.add_done_callback(self._pending_reactions.discard)
        return task

    def _device_fingerprint(self) -> str:
        return hashlib.sha256(self.config.instance_id.encode()).hexdigest()

    async def _shutdown_manager(self, manager: EntitlementManager) -> None:
        try:
            await manager.shutdown()
        except Exception as e:
            logger.error(f"Failed to shut down license manager: {e}", exc_info=True)

    def _set_state(self, state: LifecycleState) -> None:
        self._state = state
        self._publish_state()

    def _publish_state(self) -> None:
        for state in LifecycleState:
            metrics.license_lifecycle_state.labels(state=str(state)).set(
                1 if state is self._state else 0
            )

    def _count(self, operation: str, outcome: str) -> None:
        metrics.license_lifecycle_operations_total.labels(
            operation=operation, outcome=outcome
        ).inc()
