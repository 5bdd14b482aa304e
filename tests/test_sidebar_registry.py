from __future__ import annotations

import pytest

from access_core.constants.modules import ALL_MODULES
from access_core.constants.permissions import ALL_PERMISSIONS, SUPER_ADMIN_WILDCARD
from access_core.contracts.errors import RegistryContractError
from access_core.contracts.policy import PermissionSnapshot
from access_core.contracts.sidebar import Entitlements, SidebarItem, SidebarModel, SidebarResolverInput, VisibilityRule
from access_core.services.sidebar_registry import (
    collect_item_ids,
    get_sidebar_registry,
    iter_items,
    validate_registry,
)
from access_core.services.sidebar_resolver import resolve_sidebar_model


def test_shipped_registry_is_valid() -> None:
    validate_registry(get_sidebar_registry())


def test_registry_ids_are_unique() -> None:
    ids = collect_item_ids(get_sidebar_registry())

    assert len(ids) == len(set(ids))
    assert "warehouse.settings" in ids
    assert "organization.users.roles" in ids


def test_registry_only_references_known_slugs() -> None:
    registry = get_sidebar_registry()
    for item in iter_items((*registry.main, *registry.footer)):
        rule = item.visibility
        if rule is None:
            continue
        for permission in (*(rule.requires_permissions or ()), *(rule.requires_any_permissions or ())):
            assert permission in ALL_PERMISSIONS, item.id
        for module in (*(rule.requires_modules or ()), *(rule.requires_any_modules or ())):
            assert module in ALL_MODULES, item.id


def test_registry_leaves_have_links_and_match_rules() -> None:
    registry = get_sidebar_registry()
    for item in iter_items((*registry.main, *registry.footer)):
        if item.children:
            continue
        assert item.href, item.id
        if item.status == "active":
            assert item.match is not None, item.id


def test_super_admin_with_all_modules_sees_whole_registry() -> None:
    registry = get_sidebar_registry()
    input = SidebarResolverInput(
        permission_snapshot=PermissionSnapshot(allow=(SUPER_ADMIN_WILDCARD,), deny=()),
        entitlements=Entitlements(enabled_modules=frozenset(ALL_MODULES)),
    )

    model = resolve_sidebar_model(input, registry)

    assert collect_item_ids(model) == collect_item_ids(registry)


def test_empty_user_sees_only_unconditional_entries() -> None:
    input = SidebarResolverInput(permission_snapshot=PermissionSnapshot.empty(), entitlements=None)

    model = resolve_sidebar_model(input, get_sidebar_registry())

    assert [item.id for item in model.main] == ["marketplace"]
    assert model.footer == ()


def test_validate_registry_rejects_duplicate_ids() -> None:
    item = SidebarItem(id="dup", title="A", icon_key="a", href="/a")

    with pytest.raises(RegistryContractError):
        validate_registry(SidebarModel(main=(item,), footer=(item,)))


def test_validate_registry_rejects_blank_rule_entries() -> None:
    item = SidebarItem(
        id="a",
        title="A",
        icon_key="a",
        href="/a",
        visibility=VisibilityRule(requires_permissions=(" ",)),
    )

    with pytest.raises(RegistryContractError):
        validate_registry(SidebarModel(main=(item,)))


def test_validate_registry_rejects_empty_id() -> None:
    with pytest.raises(RegistryContractError):
        validate_registry(SidebarModel(main=(SidebarItem(id="", title="A", icon_key="a"),)))
