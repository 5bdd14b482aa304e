from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from access_core.contracts.errors import AccessContractError

OverrideScope = Literal["global", "org", "branch"]

SCOPE_GLOBAL = "global"
SCOPE_ORG = "org"
SCOPE_BRANCH = "branch"

# Later (higher) rank wins when two overrides target the same permission.
SCOPE_RANK: dict[str, int] = {
    SCOPE_GLOBAL: 1,
    SCOPE_ORG: 2,
    SCOPE_BRANCH: 3,
}


@dataclass(frozen=True)
class PermissionOverride:
    permission_slug: str
    allowed: bool
    scope: OverrideScope
    scope_id: str | None
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.permission_slug:
            raise AccessContractError("permission override is missing 'permission_slug'")
        if self.scope not in SCOPE_RANK:
            raise AccessContractError(f"permission override has unknown scope '{self.scope}'")
        if self.scope != SCOPE_GLOBAL and not self.scope_id:
            raise AccessContractError(f"{self.scope} override for '{self.permission_slug}' needs a scope_id")

    @property
    def rank(self) -> int:
        return SCOPE_RANK[self.scope]

    def applies_to(self, organization_id: str, branch_id: str | None) -> bool:
        if self.scope == SCOPE_GLOBAL:
            return True
        if self.scope == SCOPE_ORG:
            return self.scope_id == organization_id
        return branch_id is not None and self.scope_id == branch_id
