"""FastAPI dependencies enforcing permission checks on routes.

Usage:
    @router.post("/api/v1/products", dependencies=[Depends(require_permission(WAREHOUSE_PRODUCTS_CREATE))])
    def create_product(...):
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import Depends, Request

from access_core.contracts.policy import PermissionDecision
from access_core.services.policy_engine import PolicyEngine
from access_core.web.context import AccessContext, get_access_context
from access_core.web.errors import ERROR_CODE_FORBIDDEN, ApiError

LOGGER = logging.getLogger(__name__)


def _forbidden(request: Request, message: str, decision: PermissionDecision) -> ApiError:
    LOGGER.info(
        "Permission check failed. path=%s permission=%s reason=%s",
        request.url.path,
        decision.permission,
        decision.reason,
        extra={
            "event": "permission_denied",
            "path": str(request.url.path),
            "permission": decision.permission,
            "reason": decision.reason,
        },
    )
    return ApiError(
        status_code=403,
        code=ERROR_CODE_FORBIDDEN,
        message=message,
        details={"permission": decision.permission, "reason": decision.reason},
    )


def require_permission(permission: str) -> Callable[..., AccessContext]:
    if not permission:
        raise ValueError("require_permission needs a permission slug")

    def dependency(request: Request, context: AccessContext = Depends(get_access_context)) -> AccessContext:
        decision = PolicyEngine.decide(context.permission_snapshot, permission)
        if not decision.allowed:
            raise _forbidden(request, f"Missing permission: {permission}", decision)
        return context

    return dependency


def require_any_permission(*permissions: str) -> Callable[..., AccessContext]:
    if not permissions:
        raise ValueError("require_any_permission needs at least one permission slug")

    def dependency(request: Request, context: AccessContext = Depends(get_access_context)) -> AccessContext:
        decision = PolicyEngine.decide_any(context.permission_snapshot, permissions)
        if not decision.allowed:
            perm_list = ", ".join(permissions)
            raise _forbidden(request, f"Missing one of required permissions: {perm_list}", decision)
        return context

    return dependency


def require_all_permissions(*permissions: str) -> Callable[..., AccessContext]:
    if not permissions:
        raise ValueError("require_all_permissions needs at least one permission slug")

    def dependency(request: Request, context: AccessContext = Depends(get_access_context)) -> AccessContext:
        decision = PolicyEngine.decide_all(context.permission_snapshot, permissions)
        if not decision.allowed:
            raise _forbidden(request, f"Missing required permission: {decision.permission}", decision)
        return context

    return dependency
