from __future__ import annotations

MODULE_HOME = "home"
MODULE_WAREHOUSE = "warehouse"
MODULE_TEAMS = "teams"
MODULE_ORGANIZATION_MANAGEMENT = "organization-management"
MODULE_SUPPORT = "support"
MODULE_ANALYTICS = "analytics"
MODULE_DEVELOPMENT = "development"

ALL_MODULES: tuple[str, ...] = (
    MODULE_HOME,
    MODULE_WAREHOUSE,
    MODULE_TEAMS,
    MODULE_ORGANIZATION_MANAGEMENT,
    MODULE_SUPPORT,
    MODULE_ANALYTICS,
    MODULE_DEVELOPMENT,
)
