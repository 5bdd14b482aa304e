"""Filter a static sidebar registry down to what one user may see.

Resolution is pure: the same input and registry always produce an equal model,
nothing is read from the environment, and the registry is never modified (every
surviving item is a new instance built with ``dataclasses.replace``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from access_core.contracts.sidebar import (
    DISABLED_COMING_SOON,
    DISABLED_ENTITLEMENT,
    DISABLED_PERMISSION,
    STATUS_COMING_SOON,
    DisabledReason,
    SidebarItem,
    SidebarModel,
    SidebarResolverInput,
    coerce_item,
)
from access_core.services.permission_matcher import PermissionMatcher, get_default_matcher


def _permissions_pass(item: SidebarItem, input: SidebarResolverInput, matcher: PermissionMatcher) -> bool:
    rule = item.visibility
    if rule is None:
        return True
    snapshot = input.permission_snapshot
    if rule.requires_permissions:
        if not all(matcher.check_permission(snapshot, p) for p in rule.requires_permissions):
            return False
    if rule.requires_any_permissions:
        if not any(matcher.check_permission(snapshot, p) for p in rule.requires_any_permissions):
            return False
    return True


def _modules_pass(item: SidebarItem, input: SidebarResolverInput) -> bool:
    rule = item.visibility
    if rule is None:
        return True
    entitlements = input.entitlements
    if rule.requires_modules:
        if entitlements is None:
            return False
        if not all(entitlements.has_module(m) for m in rule.requires_modules):
            return False
    if rule.requires_any_modules:
        if entitlements is None:
            return False
        if not any(entitlements.has_module(m) for m in rule.requires_any_modules):
            return False
    return True


def is_item_visible(
    item: SidebarItem,
    input: SidebarResolverInput,
    *,
    matcher: PermissionMatcher | None = None,
) -> bool:
    """Evaluate only the item's own rule; children are not considered."""
    if item.visibility is None:
        return True
    active = matcher or get_default_matcher()
    return _permissions_pass(item, input, active) and _modules_pass(item, input)


def disabled_reason_for(
    item: SidebarItem,
    input: SidebarResolverInput,
    *,
    matcher: PermissionMatcher | None = None,
) -> DisabledReason:
    # Only meaningful for items that already failed is_item_visible.
    if item.visibility is None:
        return DISABLED_PERMISSION
    if not _permissions_pass(item, input, matcher or get_default_matcher()):
        return DISABLED_PERMISSION
    return DISABLED_ENTITLEMENT


def _filter_items(
    items: Sequence[SidebarItem],
    input: SidebarResolverInput,
    matcher: PermissionMatcher,
) -> tuple[SidebarItem, ...]:
    resolved: list[SidebarItem] = []
    for item in items:
        children = _filter_items(item.children, input, matcher) if item.children is not None else None

        if item.status == STATUS_COMING_SOON:
            resolved.append(
                replace(item, href=None, children=children, disabled_reason=DISABLED_COMING_SOON)
            )
            continue

        if not is_item_visible(item, input, matcher=matcher):
            if item.show_when_disabled:
                resolved.append(
                    replace(
                        item,
                        href=None,
                        children=children,
                        disabled_reason=disabled_reason_for(item, input, matcher=matcher),
                    )
                )
            continue

        if item.has_children and not children:
            continue

        resolved.append(replace(item, children=children))
    return tuple(resolved)


def _section(registry: SidebarModel | Mapping[str, Any], name: str) -> tuple[SidebarItem, ...]:
    if isinstance(registry, Mapping):
        raw = registry.get(name) or ()
    else:
        raw = getattr(registry, name, None) or ()
    return tuple(coerce_item(item) for item in raw)


def resolve_sidebar_model(
    input: SidebarResolverInput,
    registry: SidebarModel | Mapping[str, Any],
    *,
    matcher: PermissionMatcher | None = None,
) -> SidebarModel:
    active = matcher or get_default_matcher()
    return SidebarModel(
        main=_filter_items(_section(registry, "main"), input, active),
        footer=_filter_items(_section(registry, "footer"), input, active),
    )
