from __future__ import annotations


class AccessContractError(ValueError):
    """Raised when a caller hands the engine malformed input."""


class PatternContractError(AccessContractError):
    """Raised for permission patterns that cannot be matched safely."""


class SnapshotContractError(AccessContractError):
    """Raised for permission snapshots missing allow/deny lists."""


class RegistryContractError(AccessContractError):
    """Raised when a sidebar registry breaks its structural rules."""
