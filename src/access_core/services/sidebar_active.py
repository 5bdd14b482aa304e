from __future__ import annotations

from collections.abc import Iterable

from access_core.contracts.sidebar import SidebarItem


def is_prefix_match(pathname: str, prefix: str) -> bool:
    """Segment-aware prefix test: ``/dashboard/org`` covers ``/dashboard/org/x`` but not ``/dashboard/orgx``."""
    normalized = prefix.rstrip("/") or "/"
    if pathname == normalized:
        return True
    if normalized == "/":
        return pathname.startswith("/")
    return pathname.startswith(normalized + "/")


def is_item_active(item: SidebarItem, pathname: str) -> bool:
    # Parents are driven by their children; their own match rule is ignored.
    if item.children is not None:
        return any(is_item_active(child, pathname) for child in item.children)

    match = item.match
    if match is None:
        return False
    if match.exact is not None:
        return pathname == match.exact
    if match.starts_with is not None:
        return is_prefix_match(pathname, match.starts_with)
    return False


def active_item_ids(items: Iterable[SidebarItem], pathname: str) -> tuple[str, ...]:
    """Ids of every active item, parents before children, in registry order."""
    active: list[str] = []
    for item in items:
        if not is_item_active(item, pathname):
            continue
        active.append(item.id)
        if item.children:
            active.extend(active_item_ids(item.children, pathname))
    return tuple(active)
