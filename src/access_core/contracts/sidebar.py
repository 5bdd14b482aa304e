from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from access_core.contracts.errors import AccessContractError, RegistryContractError
from access_core.contracts.policy import PermissionSnapshot

ItemStatus = Literal["active", "coming_soon"]
DisabledReason = Literal["permission", "entitlement", "coming_soon"]

STATUS_ACTIVE = "active"
STATUS_COMING_SOON = "coming_soon"
ITEM_STATUSES = (STATUS_ACTIVE, STATUS_COMING_SOON)

DISABLED_PERMISSION = "permission"
DISABLED_ENTITLEMENT = "entitlement"
DISABLED_COMING_SOON = "coming_soon"

_ITEM_WIRE_KEYS = frozenset(
    {
        "id",
        "title",
        "iconKey",
        "href",
        "match",
        "visibility",
        "children",
        "status",
        "showWhenDisabled",
        "disabledReason",
    }
)

_RULE_WIRE_KEYS = {
    "requires_permissions": "requiresPermissions",
    "requires_any_permissions": "requiresAnyPermissions",
    "requires_modules": "requiresModules",
    "requires_any_modules": "requiresAnyModules",
}


def _optional_tuple(values: Iterable[str] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    if isinstance(values, str):
        raise RegistryContractError("visibility rule values must be a list of strings, not a string")
    return tuple(values)


@dataclass(frozen=True)
class VisibilityRule:
    """Predicate groups gating a sidebar item.

    ``None`` means the group is absent. An empty tuple is a present-but-empty
    group and is skipped the same way an absent one is.
    """

    requires_permissions: tuple[str, ...] | None = None
    requires_any_permissions: tuple[str, ...] | None = None
    requires_modules: tuple[str, ...] | None = None
    requires_any_modules: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        for name in _RULE_WIRE_KEYS:
            object.__setattr__(self, name, _optional_tuple(getattr(self, name)))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "VisibilityRule":
        return cls(**{name: payload.get(wire_key) for name, wire_key in _RULE_WIRE_KEYS.items()})

    def to_dict(self) -> dict[str, list[str]]:
        payload: dict[str, list[str]] = {}
        for name, wire_key in _RULE_WIRE_KEYS.items():
            values = getattr(self, name)
            if values is not None:
                payload[wire_key] = list(values)
        return payload


@dataclass(frozen=True)
class MatchRule:
    exact: str | None = None
    starts_with: str | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MatchRule":
        return cls(exact=payload.get("exact"), starts_with=payload.get("startsWith"))

    def to_dict(self) -> dict[str, str]:
        payload: dict[str, str] = {}
        if self.exact is not None:
            payload["exact"] = self.exact
        if self.starts_with is not None:
            payload["startsWith"] = self.starts_with
        return payload


@dataclass(frozen=True)
class SidebarItem:
    """One navigation entry.

    Wire keys the engine does not interpret (``titleKey``, ``badge``, ...) are
    kept read-only in ``extra`` and written back unchanged by ``to_dict``.
    """

    id: str
    title: str
    icon_key: str
    href: str | None = None
    match: MatchRule | None = None
    visibility: VisibilityRule | None = None
    children: tuple["SidebarItem", ...] | None = None
    status: ItemStatus = STATUS_ACTIVE
    show_when_disabled: bool = False
    disabled_reason: DisabledReason | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if self.children is not None:
            object.__setattr__(self, "children", tuple(self.children))
        if self.status not in ITEM_STATUSES:
            raise RegistryContractError(f"sidebar item '{self.id}' has unknown status '{self.status}'")
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SidebarItem":
        if "id" not in payload:
            raise RegistryContractError("sidebar item is missing 'id'")
        visibility = payload.get("visibility")
        match = payload.get("match")
        children = payload.get("children")
        return cls(
            id=str(payload["id"]),
            title=str(payload.get("title", "")),
            icon_key=str(payload.get("iconKey", "")),
            href=payload.get("href"),
            match=MatchRule.from_dict(match) if match is not None else None,
            visibility=VisibilityRule.from_dict(visibility) if visibility is not None else None,
            children=tuple(coerce_item(child) for child in children) if children is not None else None,
            status=payload.get("status", STATUS_ACTIVE),
            show_when_disabled=bool(payload.get("showWhenDisabled", False)),
            disabled_reason=payload.get("disabledReason"),
            extra={key: value for key, value in payload.items() if key not in _ITEM_WIRE_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        payload["id"] = self.id
        if self.title:
            payload["title"] = self.title
        payload["iconKey"] = self.icon_key
        if self.href is not None:
            payload["href"] = self.href
        if self.match is not None:
            payload["match"] = self.match.to_dict()
        if self.visibility is not None:
            payload["visibility"] = self.visibility.to_dict()
        if self.children is not None:
            payload["children"] = [child.to_dict() for child in self.children]
        if self.status != STATUS_ACTIVE:
            payload["status"] = self.status
        if self.show_when_disabled:
            payload["showWhenDisabled"] = True
        if self.disabled_reason is not None:
            payload["disabledReason"] = self.disabled_reason
        return payload


def coerce_item(value: SidebarItem | Mapping[str, Any]) -> SidebarItem:
    if isinstance(value, SidebarItem):
        return value
    if isinstance(value, Mapping):
        return SidebarItem.from_dict(value)
    raise RegistryContractError(f"sidebar entries must be SidebarItem or mapping, got {type(value).__name__}")


@dataclass(frozen=True)
class SidebarModel:
    main: tuple[SidebarItem, ...] = ()
    footer: tuple[SidebarItem, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "main", tuple(coerce_item(item) for item in self.main))
        object.__setattr__(self, "footer", tuple(coerce_item(item) for item in self.footer))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SidebarModel":
        return cls(main=payload.get("main") or (), footer=payload.get("footer") or ())

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "main": [item.to_dict() for item in self.main],
            "footer": [item.to_dict() for item in self.footer],
        }


@dataclass(frozen=True)
class Entitlements:
    enabled_modules: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if isinstance(self.enabled_modules, str):
            raise AccessContractError("enabled_modules must be a collection of module keys")
        object.__setattr__(self, "enabled_modules", frozenset(self.enabled_modules))

    def has_module(self, module_key: str) -> bool:
        return module_key in self.enabled_modules

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "Entitlements | None":
        if payload is None:
            return None
        if "enabled_modules" not in payload or payload["enabled_modules"] is None:
            raise AccessContractError("entitlements are missing 'enabled_modules'")
        return cls(enabled_modules=payload["enabled_modules"])

    def to_dict(self) -> dict[str, list[str]]:
        return {"enabled_modules": sorted(self.enabled_modules)}


@dataclass(frozen=True)
class SidebarResolverInput:
    permission_snapshot: PermissionSnapshot
    entitlements: Entitlements | None = None
    organization_id: str | None = None
    branch_id: str | None = None
    locale: str = "en"
