from __future__ import annotations

import pytest

from access_core.contracts.errors import AccessContractError, RegistryContractError, SnapshotContractError
from access_core.contracts.policy import PermissionSnapshot
from access_core.contracts.sidebar import (
    Entitlements,
    MatchRule,
    SidebarItem,
    SidebarModel,
    VisibilityRule,
)


def test_snapshot_from_dict_requires_both_lists() -> None:
    snapshot = PermissionSnapshot.from_dict({"allow": ["org.read"], "deny": []})

    assert snapshot.allow == ("org.read",)
    assert snapshot.to_dict() == {"allow": ["org.read"], "deny": []}
    with pytest.raises(SnapshotContractError):
        PermissionSnapshot.from_dict({"allow": ["org.read"]})


@pytest.mark.parametrize("bad", [None, "org.read", 5, ["org.read", 3]])
def test_snapshot_rejects_malformed_allow(bad: object) -> None:
    with pytest.raises(SnapshotContractError):
        PermissionSnapshot(allow=bad, deny=())  # type: ignore[arg-type]


def test_snapshot_is_immutable() -> None:
    snapshot = PermissionSnapshot(allow=["org.read"], deny=[])  # type: ignore[arg-type]

    assert snapshot.allow == ("org.read",)
    with pytest.raises(AttributeError):
        snapshot.allow = ("*",)  # type: ignore[misc]


def test_visibility_rule_uses_wire_keys() -> None:
    rule = VisibilityRule.from_dict({"requiresPermissions": ["org.read"], "requiresAnyModules": ["home"]})

    assert rule.requires_permissions == ("org.read",)
    assert rule.requires_any_modules == ("home",)
    assert rule.requires_modules is None
    assert rule.to_dict() == {"requiresPermissions": ["org.read"], "requiresAnyModules": ["home"]}


def test_visibility_rule_rejects_bare_string() -> None:
    with pytest.raises(RegistryContractError):
        VisibilityRule(requires_permissions="org.read")  # type: ignore[arg-type]


def test_sidebar_item_round_trips_wire_shape() -> None:
    payload = {
        "id": "org",
        "title": "Organization",
        "iconKey": "building",
        "children": [
            {
                "id": "org.profile",
                "title": "Profile",
                "iconKey": "id",
                "href": "/dashboard/organization/profile",
                "match": {"startsWith": "/dashboard/organization/profile"},
                "showWhenDisabled": True,
            }
        ],
    }

    item = SidebarItem.from_dict(payload)

    assert item.icon_key == "building"
    assert item.children is not None
    assert item.children[0].match == MatchRule(starts_with="/dashboard/organization/profile")
    assert item.children[0].show_when_disabled is True
    assert item.to_dict() == payload


def test_sidebar_item_rejects_unknown_status_and_missing_id() -> None:
    with pytest.raises(RegistryContractError):
        SidebarItem(id="x", title="X", icon_key="x", status="beta")  # type: ignore[arg-type]
    with pytest.raises(RegistryContractError):
        SidebarItem.from_dict({"title": "No id"})


def test_sidebar_model_coerces_mappings() -> None:
    model = SidebarModel.from_dict({"main": [{"id": "home", "title": "Home", "iconKey": "home"}]})

    assert isinstance(model.main[0], SidebarItem)
    assert model.footer == ()
    with pytest.raises(RegistryContractError):
        SidebarModel(main=("home",))  # type: ignore[arg-type]


def test_entitlements_from_dict() -> None:
    assert Entitlements.from_dict(None) is None

    entitlements = Entitlements.from_dict({"enabled_modules": ["warehouse", "home"]})

    assert entitlements is not None
    assert entitlements.has_module("warehouse") is True
    assert entitlements.has_module("teams") is False
    assert entitlements.to_dict() == {"enabled_modules": ["home", "warehouse"]}
    with pytest.raises(AccessContractError):
        Entitlements.from_dict({"enabled_modules": None})


def test_sidebar_item_extra_is_read_only_and_unhashed() -> None:
    item = SidebarItem.from_dict({"id": "home", "titleKey": "nav.home", "iconKey": "home", "badge": 3})

    assert dict(item.extra) == {"titleKey": "nav.home", "badge": 3}
    with pytest.raises(TypeError):
        item.extra["badge"] = 4  # type: ignore[index]
    assert hash(item) == hash(SidebarItem(id="home", title="", icon_key="home"))
