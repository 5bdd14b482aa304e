from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request

from access_core.contracts.errors import AccessContractError
from access_core.services.policy_engine import PolicyEngine
from access_core.services.sidebar_active import active_item_ids
from access_core.services.sidebar_registry import get_sidebar_registry
from access_core.services.sidebar_resolver import resolve_sidebar_model
from access_core.web.context import AccessContext, get_access_context
from access_core.web.errors import ERROR_CODE_BAD_REQUEST, ApiError

router = APIRouter(prefix="/api/v1")

MAX_CHECK_PERMISSIONS = 100


@router.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@router.get("/navigation")
def navigation(pathname: str = "", context: AccessContext = Depends(get_access_context)) -> dict[str, Any]:
    model = resolve_sidebar_model(context.resolver_input(), get_sidebar_registry())
    active_ids: tuple[str, ...] = ()
    if pathname:
        active_ids = active_item_ids((*model.main, *model.footer), pathname)
    return {
        "ok": True,
        "sidebar": model.to_dict(),
        "active_ids": list(active_ids),
    }


async def _read_permissions(request: Request) -> list[str]:
    raw = await request.body()
    try:
        payload = json.loads(raw.decode("utf-8")) if raw.strip() else {}
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ApiError(status_code=400, code=ERROR_CODE_BAD_REQUEST, message="Body must be valid JSON.") from exc
    if not isinstance(payload, dict):
        raise ApiError(status_code=400, code=ERROR_CODE_BAD_REQUEST, message="JSON body must be an object.")

    permissions = payload.get("permissions")
    if not isinstance(permissions, list) or not permissions:
        raise ApiError(
            status_code=400,
            code=ERROR_CODE_BAD_REQUEST,
            message="'permissions' must be a non-empty list of strings.",
        )
    if len(permissions) > MAX_CHECK_PERMISSIONS:
        raise ApiError(
            status_code=400,
            code=ERROR_CODE_BAD_REQUEST,
            message=f"At most {MAX_CHECK_PERMISSIONS} permissions can be checked per request.",
        )
    if any(not isinstance(item, str) or not item for item in permissions):
        raise ApiError(
            status_code=400,
            code=ERROR_CODE_BAD_REQUEST,
            message="'permissions' must only contain non-empty strings.",
        )
    return permissions


@router.post("/permissions/check")
async def check_permissions(
    request: Request,
    context: AccessContext = Depends(get_access_context),
) -> dict[str, Any]:
    permissions = await _read_permissions(request)
    try:
        decisions = [PolicyEngine.decide(context.permission_snapshot, p) for p in permissions]
    except AccessContractError as exc:
        raise ApiError(
            status_code=400,
            code=ERROR_CODE_BAD_REQUEST,
            message="Permission snapshot for this request is malformed.",
            details={"reason": str(exc)},
        ) from exc
    return {
        "ok": True,
        "decisions": [decision.to_dict() for decision in decisions],
    }
