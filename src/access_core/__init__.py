"""Permission evaluation and sidebar visibility for multi-tenant dashboards."""

from access_core.contracts.policy import PermissionDecision, PermissionSnapshot
from access_core.contracts.sidebar import (
    Entitlements,
    SidebarItem,
    SidebarModel,
    SidebarResolverInput,
    VisibilityRule,
)
from access_core.services.permission_matcher import (
    PermissionMatcher,
    check_permission,
    clear_pattern_cache,
    matches_any_pattern,
)
from access_core.services.policy_engine import PolicyEngine
from access_core.services.sidebar_resolver import resolve_sidebar_model

__all__ = [
    "Entitlements",
    "PermissionDecision",
    "PermissionMatcher",
    "PermissionSnapshot",
    "PolicyEngine",
    "SidebarItem",
    "SidebarModel",
    "SidebarResolverInput",
    "VisibilityRule",
    "check_permission",
    "clear_pattern_cache",
    "matches_any_pattern",
    "resolve_sidebar_model",
]
