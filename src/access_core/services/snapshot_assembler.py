"""Combine role grants with per-user overrides into a PermissionSnapshot.

Overrides are resolved per permission slug: the highest scope rank wins
(global < org < branch) and, within one rank, the most recently created
override wins. The row source is pluggable; this module never queries a
store directly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from access_core.contracts.overrides import PermissionOverride
from access_core.contracts.policy import PermissionSnapshot

LOGGER = logging.getLogger(__name__)


class PermissionSource(Protocol):
    def role_permissions(self, user_id: str, organization_id: str, branch_id: str | None) -> Iterable[str]:
        """Permission patterns granted by the user's org and branch role assignments."""

    def permission_overrides(
        self, user_id: str, organization_id: str, branch_id: str | None
    ) -> Iterable[PermissionOverride]:
        """Active (not deleted) overrides for the user."""


def _override_sort_key(override: PermissionOverride) -> tuple[int, float]:
    return (override.rank, override.created_at.timestamp())


def winning_overrides(
    overrides: Iterable[PermissionOverride],
    *,
    organization_id: str,
    branch_id: str | None = None,
) -> dict[str, PermissionOverride]:
    winners: dict[str, PermissionOverride] = {}
    for override in overrides:
        if not override.applies_to(organization_id, branch_id):
            continue
        current = winners.get(override.permission_slug)
        if current is None or _override_sort_key(override) > _override_sort_key(current):
            winners[override.permission_slug] = override
    return winners


def assemble_permission_snapshot(
    base_permissions: Iterable[str],
    overrides: Iterable[PermissionOverride],
    *,
    organization_id: str,
    branch_id: str | None = None,
) -> PermissionSnapshot:
    allow = {slug for slug in base_permissions if slug}
    deny: set[str] = set()

    for slug, override in winning_overrides(
        overrides, organization_id=organization_id, branch_id=branch_id
    ).items():
        if override.allowed:
            allow.add(slug)
            deny.discard(slug)
        else:
            allow.discard(slug)
            deny.add(slug)

    return PermissionSnapshot(allow=tuple(sorted(allow)), deny=tuple(sorted(deny)))


def build_snapshot_for_user(
    source: PermissionSource,
    user_id: str,
    organization_id: str,
    branch_id: str | None = None,
) -> PermissionSnapshot:
    try:
        base_permissions = list(source.role_permissions(user_id, organization_id, branch_id))
        overrides = list(source.permission_overrides(user_id, organization_id, branch_id))
    except Exception:
        LOGGER.exception(
            "Permission source failed. user_id=%s organization_id=%s branch_id=%s",
            user_id,
            organization_id,
            branch_id,
        )
        raise

    snapshot = assemble_permission_snapshot(
        base_permissions,
        overrides,
        organization_id=organization_id,
        branch_id=branch_id,
    )
    LOGGER.info(
        "Permission snapshot assembled. user_id=%s organization_id=%s allow=%s deny=%s",
        user_id,
        organization_id,
        len(snapshot.allow),
        len(snapshot.deny),
        extra={
            "event": "permission_snapshot_assembled",
            "user_id": user_id,
            "organization_id": organization_id,
            "branch_id": branch_id,
            "role_permission_count": len(base_permissions),
            "override_count": len(overrides),
            "allow_count": len(snapshot.allow),
            "deny_count": len(snapshot.deny),
        },
    )
    return snapshot
