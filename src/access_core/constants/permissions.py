"""Canonical permission slugs.

Registry entries and route guards import these names instead of repeating raw
strings, so a renamed slug breaks loudly at import time.
"""

from __future__ import annotations

ORG_READ = "org.read"
ORG_UPDATE = "org.update"

BRANCHES_READ = "branches.read"
BRANCHES_CREATE = "branches.create"
BRANCHES_UPDATE = "branches.update"
BRANCHES_DELETE = "branches.delete"

MEMBERS_READ = "members.read"
MEMBERS_MANAGE = "members.manage"

INVITES_READ = "invites.read"
INVITES_CREATE = "invites.create"

ROLES_READ = "roles.read"
ROLES_MANAGE = "roles.manage"

ACCOUNT_PROFILE_READ = "account.profile.read"
ACCOUNT_PROFILE_UPDATE = "account.profile.update"
ACCOUNT_PREFERENCES_READ = "account.preferences.read"
ACCOUNT_PREFERENCES_UPDATE = "account.preferences.update"
ACCOUNT_WILDCARD = "account.*"

WAREHOUSE_WILDCARD = "warehouse.*"
WAREHOUSE_PRODUCTS_READ = "warehouse.products.read"
WAREHOUSE_PRODUCTS_CREATE = "warehouse.products.create"
WAREHOUSE_PRODUCTS_UPDATE = "warehouse.products.update"
WAREHOUSE_PRODUCTS_DELETE = "warehouse.products.delete"
WAREHOUSE_INVENTORY_VIEW = "warehouse.inventory.view"
WAREHOUSE_LOCATIONS_READ = "warehouse.locations.read"
WAREHOUSE_MOVEMENTS_READ = "warehouse.movements.read"
WAREHOUSE_SETTINGS_VIEW = "warehouse.settings.view"
WAREHOUSE_SETTINGS_UPDATE = "warehouse.settings.update"

TEAMS_MEMBERS_READ = "teams.members.read"
TEAMS_MEMBERS_INVITE = "teams.members.invite"
TEAMS_COMMUNICATION_READ = "teams.communication.read"

ANALYTICS_REPORTS_READ = "analytics.reports.read"

SUPER_ADMIN_WILDCARD = "*"

ALL_PERMISSIONS: tuple[str, ...] = (
    ORG_READ,
    ORG_UPDATE,
    BRANCHES_READ,
    BRANCHES_CREATE,
    BRANCHES_UPDATE,
    BRANCHES_DELETE,
    MEMBERS_READ,
    MEMBERS_MANAGE,
    INVITES_READ,
    INVITES_CREATE,
    ROLES_READ,
    ROLES_MANAGE,
    ACCOUNT_PROFILE_READ,
    ACCOUNT_PROFILE_UPDATE,
    ACCOUNT_PREFERENCES_READ,
    ACCOUNT_PREFERENCES_UPDATE,
    WAREHOUSE_PRODUCTS_READ,
    WAREHOUSE_PRODUCTS_CREATE,
    WAREHOUSE_PRODUCTS_UPDATE,
    WAREHOUSE_PRODUCTS_DELETE,
    WAREHOUSE_INVENTORY_VIEW,
    WAREHOUSE_LOCATIONS_READ,
    WAREHOUSE_MOVEMENTS_READ,
    WAREHOUSE_SETTINGS_VIEW,
    WAREHOUSE_SETTINGS_UPDATE,
    TEAMS_MEMBERS_READ,
    TEAMS_MEMBERS_INVITE,
    TEAMS_COMMUNICATION_READ,
    ANALYTICS_REPORTS_READ,
)
