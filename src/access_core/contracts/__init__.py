"""Immutable records exchanged with the permission and sidebar engines."""

from access_core.contracts.errors import (
    AccessContractError,
    PatternContractError,
    RegistryContractError,
    SnapshotContractError,
)
from access_core.contracts.overrides import SCOPE_RANK, PermissionOverride
from access_core.contracts.policy import PermissionDecision, PermissionSnapshot
from access_core.contracts.sidebar import (
    Entitlements,
    MatchRule,
    SidebarItem,
    SidebarModel,
    SidebarResolverInput,
    VisibilityRule,
)

__all__ = [
    "AccessContractError",
    "Entitlements",
    "MatchRule",
    "PatternContractError",
    "PermissionDecision",
    "PermissionOverride",
    "PermissionSnapshot",
    "RegistryContractError",
    "SCOPE_RANK",
    "SidebarItem",
    "SidebarModel",
    "SidebarResolverInput",
    "SnapshotContractError",
    "VisibilityRule",
]
