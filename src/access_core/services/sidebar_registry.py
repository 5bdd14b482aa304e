from __future__ import annotations

from collections.abc import Iterable, Iterator

from access_core.constants.modules import (
    MODULE_ANALYTICS,
    MODULE_DEVELOPMENT,
    MODULE_HOME,
    MODULE_ORGANIZATION_MANAGEMENT,
    MODULE_SUPPORT,
    MODULE_TEAMS,
    MODULE_WAREHOUSE,
)
from access_core.constants.permissions import (
    ACCOUNT_PREFERENCES_READ,
    ACCOUNT_PROFILE_READ,
    ANALYTICS_REPORTS_READ,
    BRANCHES_READ,
    BRANCHES_UPDATE,
    INVITES_READ,
    MEMBERS_MANAGE,
    MEMBERS_READ,
    ORG_READ,
    ORG_UPDATE,
    ROLES_READ,
    TEAMS_COMMUNICATION_READ,
    TEAMS_MEMBERS_READ,
    WAREHOUSE_INVENTORY_VIEW,
    WAREHOUSE_LOCATIONS_READ,
    WAREHOUSE_MOVEMENTS_READ,
    WAREHOUSE_PRODUCTS_READ,
    WAREHOUSE_SETTINGS_VIEW,
)
from access_core.contracts.errors import RegistryContractError
from access_core.contracts.sidebar import (
    STATUS_COMING_SOON,
    MatchRule,
    SidebarItem,
    SidebarModel,
    VisibilityRule,
)


def _leaf(
    item_id: str,
    title: str,
    icon_key: str,
    href: str,
    *,
    visibility: VisibilityRule | None = None,
    exact: bool = False,
    **extra: object,
) -> SidebarItem:
    match = MatchRule(exact=href) if exact else MatchRule(starts_with=href)
    return SidebarItem(
        id=item_id,
        title=title,
        icon_key=icon_key,
        href=href,
        match=match,
        visibility=visibility,
        **extra,
    )


def _build_registry() -> SidebarModel:
    main = (
        SidebarItem(
            id="home",
            title="Home",
            icon_key="home",
            visibility=VisibilityRule(requires_modules=(MODULE_HOME,)),
            children=(
                _leaf("home.start", "Start", "home", "/dashboard/start", exact=True),
                _leaf("home.announcements", "Announcements", "megaphone", "/dashboard/announcements"),
            ),
        ),
        SidebarItem(
            id="warehouse",
            title="Warehouse",
            icon_key="warehouse",
            visibility=VisibilityRule(requires_modules=(MODULE_WAREHOUSE,)),
            children=(
                _leaf(
                    "warehouse.products",
                    "Products",
                    "products",
                    "/dashboard/warehouse/products",
                    visibility=VisibilityRule(requires_permissions=(WAREHOUSE_PRODUCTS_READ,)),
                ),
                _leaf(
                    "warehouse.inventory",
                    "Inventory",
                    "inventory",
                    "/dashboard/warehouse/inventory",
                    visibility=VisibilityRule(
                        requires_any_permissions=(WAREHOUSE_INVENTORY_VIEW, WAREHOUSE_MOVEMENTS_READ),
                    ),
                ),
                _leaf(
                    "warehouse.locations",
                    "Locations",
                    "locations",
                    "/dashboard/warehouse/locations",
                    visibility=VisibilityRule(requires_permissions=(WAREHOUSE_LOCATIONS_READ,)),
                ),
                _leaf(
                    "warehouse.settings",
                    "Settings",
                    "settings",
                    "/dashboard/warehouse/settings",
                    visibility=VisibilityRule(requires_permissions=(WAREHOUSE_SETTINGS_VIEW,)),
                    show_when_disabled=True,
                ),
            ),
        ),
        SidebarItem(
            id="teams",
            title="Teams",
            icon_key="teams",
            visibility=VisibilityRule(requires_modules=(MODULE_TEAMS,)),
            children=(
                _leaf(
                    "teams.contacts",
                    "Contacts",
                    "contacts",
                    "/dashboard/teams/contacts",
                    visibility=VisibilityRule(requires_permissions=(TEAMS_MEMBERS_READ,)),
                ),
                _leaf(
                    "teams.chat",
                    "Chat",
                    "chat",
                    "/dashboard/teams/chat",
                    visibility=VisibilityRule(requires_permissions=(TEAMS_COMMUNICATION_READ,)),
                ),
            ),
        ),
        SidebarItem(
            id="organization",
            title="Organization",
            icon_key="organization",
            visibility=VisibilityRule(requires_modules=(MODULE_ORGANIZATION_MANAGEMENT,)),
            children=(
                _leaf(
                    "organization.profile",
                    "Profile",
                    "organization",
                    "/dashboard/organization/profile",
                    visibility=VisibilityRule(requires_permissions=(ORG_READ,)),
                ),
                _leaf(
                    "organization.branches",
                    "Branches",
                    "branches",
                    "/dashboard/organization/branches",
                    visibility=VisibilityRule(requires_any_permissions=(BRANCHES_READ, BRANCHES_UPDATE)),
                ),
                SidebarItem(
                    id="organization.users",
                    title="Users",
                    icon_key="users",
                    children=(
                        _leaf(
                            "organization.users.members",
                            "Members",
                            "users",
                            "/dashboard/organization/users/members",
                            visibility=VisibilityRule(requires_permissions=(MEMBERS_READ,)),
                        ),
                        _leaf(
                            "organization.users.invitations",
                            "Invitations",
                            "mail",
                            "/dashboard/organization/users/invitations",
                            visibility=VisibilityRule(requires_permissions=(INVITES_READ,)),
                        ),
                        _leaf(
                            "organization.users.roles",
                            "Roles",
                            "shield",
                            "/dashboard/organization/users/roles",
                            visibility=VisibilityRule(requires_permissions=(ROLES_READ, MEMBERS_MANAGE)),
                        ),
                    ),
                ),
                _leaf(
                    "organization.billing",
                    "Billing",
                    "billing",
                    "/dashboard/organization/billing",
                    visibility=VisibilityRule(requires_permissions=(ORG_UPDATE,)),
                ),
            ),
        ),
        _leaf(
            "analytics",
            "Analytics",
            "analytics",
            "/dashboard/analytics",
            visibility=VisibilityRule(
                requires_permissions=(ANALYTICS_REPORTS_READ,),
                requires_modules=(MODULE_ANALYTICS,),
            ),
        ),
        _leaf(
            "development",
            "Development",
            "code",
            "/dashboard/development",
            visibility=VisibilityRule(requires_any_modules=(MODULE_DEVELOPMENT, MODULE_ANALYTICS)),
        ),
        SidebarItem(
            id="marketplace",
            title="Marketplace",
            icon_key="store",
            href="/dashboard/marketplace",
            status=STATUS_COMING_SOON,
        ),
    )
    footer = (
        _leaf(
            "support",
            "Support",
            "support",
            "/dashboard/support",
            visibility=VisibilityRule(requires_modules=(MODULE_SUPPORT,)),
        ),
        SidebarItem(
            id="account",
            title="Account",
            icon_key="user",
            children=(
                _leaf(
                    "account.profile",
                    "Profile",
                    "user",
                    "/dashboard/account/profile",
                    visibility=VisibilityRule(requires_permissions=(ACCOUNT_PROFILE_READ,)),
                ),
                _leaf(
                    "account.preferences",
                    "Preferences",
                    "settings",
                    "/dashboard/account/preferences",
                    visibility=VisibilityRule(requires_permissions=(ACCOUNT_PREFERENCES_READ,)),
                ),
            ),
        ),
    )
    return SidebarModel(main=main, footer=footer)


_REGISTRY = _build_registry()


def get_sidebar_registry() -> SidebarModel:
    # Items are frozen, so handing out the shared instance cannot leak mutations.
    return _REGISTRY


def iter_items(items: Iterable[SidebarItem]) -> Iterator[SidebarItem]:
    for item in items:
        yield item
        if item.children:
            yield from iter_items(item.children)


def collect_item_ids(registry: SidebarModel) -> list[str]:
    return [item.id for item in iter_items((*registry.main, *registry.footer))]


def validate_registry(registry: SidebarModel) -> None:
    seen: set[str] = set()
    for item in iter_items((*registry.main, *registry.footer)):
        if not item.id:
            raise RegistryContractError("sidebar item ids must be non-empty")
        if item.id in seen:
            raise RegistryContractError(f"duplicate sidebar item id '{item.id}'")
        seen.add(item.id)

        rule = item.visibility
        if rule is None:
            continue
        for group in (
            rule.requires_permissions,
            rule.requires_any_permissions,
            rule.requires_modules,
            rule.requires_any_modules,
        ):
            for value in group or ():
                if not isinstance(value, str) or not value.strip():
                    raise RegistryContractError(f"sidebar item '{item.id}' has an empty visibility entry")
