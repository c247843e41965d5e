"""
License state.

Read-only surface for feature checks. Call sites ask ``LicenseState`` and
never talk to the entitlement manager directly. The provider is bound once
at startup (normally the ``LicenseLifecycle``) or per test.
"""
from typing import Any, Optional

from core.domain.exceptions import ProviderNotSetError
from licensing.domain.constants import UNLIMITED_LICENSE_QUOTA, LicenseFeature, LicenseQuota
from licensing.ports.license_provider import LicenseProvider


class LicenseState:
    """Feature and quota queries against the bound provider."""

    def __init__(self, provider: Optional[LicenseProvider] = None):
        self._provider = provider

    def set_provider(self, provider: LicenseProvider) -> None:
        self._provider = provider

    def _get_provider(self) -> LicenseProvider:
        provider = self._provider
        if provider is None:
            raise ProviderNotSetError()
        return provider

    def is_licensed(self, feature: str) -> bool:
        """
        Check a boolean feature.

        Raises:
            ProviderNotSetError: If no provider is bound
        """
        return self._get_provider().is_licensed(feature)

    def get_value(self, feature: str) -> Any:
        """
        Get the raw value of a feature or quota.

        Raises:
            ProviderNotSetError: If no provider is bound
        """
        return self._get_provider().get_value(feature)

    def _get_quota(self, quota: str, fallback: int) -> int:
        value = self.get_value(quota)
        return fallback if value is None else value

    # Features

    def is_sharing_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.SHARING)

    def is_log_streaming_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.LOG_STREAMING)

    def is_ldap_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.LDAP)

    def is_saml_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.SAML)

    def is_api_key_scopes_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.API_KEY_SCOPES)

    def is_ai_assistant_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.AI_ASSISTANT)

    def is_ask_ai_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.ASK_AI)

    def is_ai_credits_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.AI_CREDITS)

    def is_advanced_execution_filters_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.ADVANCED_EXECUTION_FILTERS)

    def is_advanced_permissions_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.ADVANCED_PERMISSIONS)

    def is_debug_in_editor_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.DEBUG_IN_EDITOR)

    def is_binary_data_s3_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.BINARY_DATA_S3)

    def is_multi_main_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.MULTIPLE_MAIN_INSTANCES)

    def is_variables_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.VARIABLES)

    def is_source_control_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.SOURCE_CONTROL)

    def is_external_secrets_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.EXTERNAL_SECRETS)

    def is_workflow_history_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.WORKFLOW_HISTORY)

    def is_api_disabled(self) -> bool:
        return self.is_licensed(LicenseFeature.API_DISABLED)

    def is_worker_view_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.WORKER_VIEW)

    def is_project_role_admin_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.PROJECT_ROLE_ADMIN)

    def is_project_role_editor_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.PROJECT_ROLE_EDITOR)

    def is_project_role_viewer_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.PROJECT_ROLE_VIEWER)

    def is_custom_npm_registry_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.COMMUNITY_NODES_CUSTOM_REGISTRY)

    def is_folders_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.FOLDERS)

    def is_insights_summary_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.INSIGHTS_VIEW_SUMMARY)

    def is_insights_dashboard_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.INSIGHTS_VIEW_DASHBOARD)

    def is_insights_hourly_data_licensed(self) -> bool:
        return self.is_licensed(LicenseFeature.INSIGHTS_VIEW_HOURLY_DATA)

    # Quotas

    def get_max_users(self) -> int:
        return self._get_quota(LicenseQuota.USERS_LIMIT, UNLIMITED_LICENSE_QUOTA)

    def get_max_active_workflows(self) -> int:
        return self._get_quota(LicenseQuota.TRIGGER_LIMIT, UNLIMITED_LICENSE_QUOTA)

    def get_max_variables(self) -> int:
        return self._get_quota(LicenseQuota.VARIABLES_LIMIT, UNLIMITED_LICENSE_QUOTA)

    def get_max_ai_credits(self) -> int:
        return self._get_quota(LicenseQuota.AI_CREDITS, 0)

    def get_workflow_history_prune_quota(self) -> int:
        return self._get_quota(LicenseQuota.WORKFLOW_HISTORY_PRUNE_LIMIT, UNLIMITED_LICENSE_QUOTA)

    def get_insights_max_history(self) -> int:
        return self._get_quota(LicenseQuota.INSIGHTS_MAX_HISTORY_DAYS, 7)

    def get_insights_retention_max_age(self) -> int:
        return self._get_quota(LicenseQuota.INSIGHTS_RETENTION_MAX_AGE_DAYS, 180)

    def get_insights_retention_prune_interval(self) -> int:
        return self._get_quota(LicenseQuota.INSIGHTS_RETENTION_PRUNE_INTERVAL_DAYS, 24)

    def get_max_team_projects(self) -> int:
        return self._get_quota(LicenseQuota.TEAM_PROJECT_LIMIT, 0)


# Process-wide instance, bound in LicensingConfig.ready()
license_state = LicenseState()
