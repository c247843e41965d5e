"""
License feature and quota identifiers.
"""

# Settings table key holding the persisted license certificate
SETTINGS_LICENSE_CERT_KEY = "license.cert"

# Quota value meaning "no limit"
UNLIMITED_LICENSE_QUOTA = -1

RELOAD_LICENSE_COMMAND = "reload-license"

BINARY_DATA_MODE_S3 = "s3"


class LicenseFeature:
    """Boolean entitlement identifiers."""

    SHARING = "feat:sharing"
    LOG_STREAMING = "feat:logStreaming"
    LDAP = "feat:ldap"
    SAML = "feat:saml"
    API_KEY_SCOPES = "feat:apiKeyScopes"
    AI_ASSISTANT = "feat:aiAssistant"
    ASK_AI = "feat:askAi"
    AI_CREDITS = "feat:aiCredits"
    ADVANCED_EXECUTION_FILTERS = "feat:advancedExecutionFilters"
    ADVANCED_PERMISSIONS = "feat:advancedPermissions"
    DEBUG_IN_EDITOR = "feat:debugInEditor"
    BINARY_DATA_S3 = "feat:binaryDataS3"
    MULTIPLE_MAIN_INSTANCES = "feat:multipleMainInstances"
    VARIABLES = "feat:variables"
    SOURCE_CONTROL = "feat:sourceControl"
    EXTERNAL_SECRETS = "feat:externalSecrets"
    WORKFLOW_HISTORY = "feat:workflowHistory"
    API_DISABLED = "feat:apiDisabled"
    WORKER_VIEW = "feat:workerView"
    PROJECT_ROLE_ADMIN = "feat:projectRole:admin"
    PROJECT_ROLE_EDITOR = "feat:projectRole:editor"
    PROJECT_ROLE_VIEWER = "feat:projectRole:viewer"
    COMMUNITY_NODES_CUSTOM_REGISTRY = "feat:communityNodes:customRegistry"
    FOLDERS = "feat:folders"
    INSIGHTS_VIEW_SUMMARY = "feat:insights:viewSummary"
    INSIGHTS_VIEW_DASHBOARD = "feat:insights:viewDashboard"
    INSIGHTS_VIEW_HOURLY_DATA = "feat:insights:viewHourlyData"


class LicenseQuota:
    """Numeric entitlement identifiers."""

    USERS_LIMIT = "quota:users"
    TRIGGER_LIMIT = "quota:activeWorkflows"
    VARIABLES_LIMIT = "quota:maxVariables"
    AI_CREDITS = "quota:aiCredits"
    WORKFLOW_HISTORY_PRUNE_LIMIT = "quota:workflowHistoryPrune"
    INSIGHTS_MAX_HISTORY_DAYS = "quota:insights:maxHistoryDays"
    INSIGHTS_RETENTION_MAX_AGE_DAYS = "quota:insights:retention:maxAgeDays"
    INSIGHTS_RETENTION_PRUNE_INTERVAL_DAYS = "quota:insights:retention:pruneIntervalDays"
    TEAM_PROJECT_LIMIT = "quota:maxTeamProjects"


# Non-boolean, non-quota value exposed by the entitlement manager
PLAN_NAME = "planName"
