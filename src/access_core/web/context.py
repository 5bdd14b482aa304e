from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from fastapi import Request

from access_core.contracts.policy import PermissionSnapshot
from access_core.contracts.sidebar import Entitlements, SidebarResolverInput


@dataclass(frozen=True)
class AccessContext:
    """Per-request permission state supplied by the host application."""

    permission_snapshot: PermissionSnapshot = field(default_factory=PermissionSnapshot.empty)
    entitlements: Entitlements | None = None
    user_id: str | None = None
    organization_id: str | None = None
    branch_id: str | None = None
    locale: str = "en"

    def resolver_input(self) -> SidebarResolverInput:
        return SidebarResolverInput(
            permission_snapshot=self.permission_snapshot,
            entitlements=self.entitlements,
            organization_id=self.organization_id,
            branch_id=self.branch_id,
            locale=self.locale,
        )


AccessContextProvider = Callable[[Request], AccessContext]

ANONYMOUS_CONTEXT = AccessContext()


def get_access_context(request: Request) -> AccessContext:
    # Nothing installed means nothing granted and no modules.
    context = getattr(request.state, "access_context", None)
    if isinstance(context, AccessContext):
        return context
    return ANONYMOUS_CONTEXT
