from __future__ import annotations

import logging
from collections.abc import Iterable

from access_core.contracts.errors import SnapshotContractError
from access_core.contracts.policy import PermissionDecision, PermissionSnapshot
from access_core.services.permission_matcher import PermissionMatcher, get_default_matcher

LOGGER = logging.getLogger(__name__)

REASON_NOT_GRANTED = "permission not granted"
REASON_NO_PERMISSIONS = "no permissions requested"


class PolicyEngine:
    @staticmethod
    def decide(
        snapshot: PermissionSnapshot,
        permission: str,
        *,
        matcher: PermissionMatcher | None = None,
    ) -> PermissionDecision:
        if not isinstance(snapshot, PermissionSnapshot):
            raise SnapshotContractError(f"decide expects a PermissionSnapshot, got {type(snapshot).__name__}")
        active = matcher or get_default_matcher()

        denied_by = active.first_match(snapshot.deny, permission)
        if denied_by is not None:
            LOGGER.debug("permission_denied permission=%s pattern=%s", permission, denied_by)
            return PermissionDecision(False, permission, f"denied by pattern={denied_by}")

        granted_by = active.first_match(snapshot.allow, permission)
        if granted_by is not None:
            return PermissionDecision(True, permission, f"granted by pattern={granted_by}")

        LOGGER.debug("permission_not_granted permission=%s", permission)
        return PermissionDecision(False, permission, REASON_NOT_GRANTED)

    @staticmethod
    def decide_all(
        snapshot: PermissionSnapshot,
        permissions: Iterable[str],
        *,
        matcher: PermissionMatcher | None = None,
    ) -> PermissionDecision:
        last: PermissionDecision | None = None
        for permission in permissions:
            last = PolicyEngine.decide(snapshot, permission, matcher=matcher)
            if not last.allowed:
                return last
        if last is None:
            return PermissionDecision(True, "", REASON_NO_PERMISSIONS)
        return last

    @staticmethod
    def decide_any(
        snapshot: PermissionSnapshot,
        permissions: Iterable[str],
        *,
        matcher: PermissionMatcher | None = None,
    ) -> PermissionDecision:
        last: PermissionDecision | None = None
        for permission in permissions:
            last = PolicyEngine.decide(snapshot, permission, matcher=matcher)
            if last.allowed:
                return last
        if last is None:
            return PermissionDecision(False, "", REASON_NO_PERMISSIONS)
        return last
