"""
Prometheus metrics for the license service.
"""

from prometheus_client import Counter, Gauge

# Lifecycle metrics
license_lifecycle_operations_total = Counter(
    "license_lifecycle_operations_total",
    "License lifecycle operations",
    ["operation", "outcome"],
)

license_lifecycle_state = Gauge(
    "license_lifecycle_state",
    "Current license lifecycle state (1 for the active state)",
    ["state"],
)

# Feature change metrics
license_feature_changes_total = Counter(
    "license_feature_changes_total",
    "Entitlement change notifications handled",
)

license_feature_change_step_failures_total = Counter(
    "license_feature_change_step_failures_total",
    "Failed steps while reacting to entitlement changes",
    ["step"],
)

license_reload_commands_published_total = Counter(
    "license_reload_commands_published_total",
    "Reload-license commands broadcast to peer instances",
)

object_store_readonly_toggles_total = Counter(
    "object_store_readonly_toggles_total",
    "Object store read-only flag changes",
    ["readonly"],
)

# Certificate metrics
license_certificate_saves_total = Counter(
    "license_certificate_saves_total",
    "License certificate writes to the settings table",
    ["outcome"],
)
