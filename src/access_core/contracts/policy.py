from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from access_core.contracts.errors import SnapshotContractError


def _pattern_tuple(field: str, values: Any) -> tuple[str, ...]:
    if values is None:
        raise SnapshotContractError(f"permission snapshot is missing '{field}'")
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise SnapshotContractError(f"permission snapshot '{field}' must be a list of strings")
    patterns = tuple(values)
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise SnapshotContractError(f"permission snapshot '{field}' must only contain strings")
    return patterns


@dataclass(frozen=True)
class PermissionSnapshot:
    """Resolved allow/deny patterns for one user in one org/branch context."""

    allow: tuple[str, ...] = ()
    deny: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "allow", _pattern_tuple("allow", self.allow))
        object.__setattr__(self, "deny", _pattern_tuple("deny", self.deny))

    @classmethod
    def empty(cls) -> "PermissionSnapshot":
        return cls(allow=(), deny=())

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PermissionSnapshot":
        if not isinstance(payload, Mapping):
            raise SnapshotContractError("permission snapshot must be an object")
        for field in ("allow", "deny"):
            if field not in payload:
                raise SnapshotContractError(f"permission snapshot is missing '{field}'")
        return cls(allow=payload["allow"], deny=payload["deny"])

    def to_dict(self) -> dict[str, list[str]]:
        return {"allow": list(self.allow), "deny": list(self.deny)}


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    permission: str
    reason: str

    def to_dict(self) -> dict[str, object]:
        return {"permission": self.permission, "allowed": self.allowed, "reason": self.reason}
