from __future__ import annotations

import pytest
from fastapi import APIRouter, Depends
from fastapi.testclient import TestClient

from access_core.constants.permissions import MEMBERS_MANAGE, ORG_READ, ORG_UPDATE, ROLES_READ
from access_core.contracts.policy import PermissionSnapshot
from access_core.web.app import create_app
from access_core.web.context import AccessContext
from access_core.web.security import require_all_permissions, require_any_permission, require_permission


def _client(allow: tuple[str, ...], deny: tuple[str, ...] = ()) -> TestClient:
    context = AccessContext(permission_snapshot=PermissionSnapshot(allow=allow, deny=deny), user_id="user-1")
    app = create_app(context_provider=lambda request: context)
    router = APIRouter(prefix="/api/v1/guarded")

    @router.get("/org")
    def read_org(ctx: AccessContext = Depends(require_permission(ORG_READ))) -> dict[str, object]:
        return {"ok": True, "user_id": ctx.user_id}

    @router.get("/any", dependencies=[Depends(require_any_permission(ORG_UPDATE, ROLES_READ))])
    def any_route() -> dict[str, bool]:
        return {"ok": True}

    @router.get("/all", dependencies=[Depends(require_all_permissions(ROLES_READ, MEMBERS_MANAGE))])
    def all_route() -> dict[str, bool]:
        return {"ok": True}

    app.include_router(router)
    return TestClient(app)


def test_require_permission_allows_matching_pattern() -> None:
    response = _client(("org.*",)).get("/api/v1/guarded/org")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "user_id": "user-1"}


def test_require_permission_denied_by_deny_pattern() -> None:
    response = _client(("*",), deny=("org.*",)).get("/api/v1/guarded/org")

    assert response.status_code == 403
    error = response.json()["error"]
    assert error["code"] == "FORBIDDEN"
    assert error["message"] == "Missing permission: org.read"
    assert error["details"] == {"permission": "org.read", "reason": "denied by pattern=org.*"}


def test_require_any_permission() -> None:
    assert _client((ROLES_READ,)).get("/api/v1/guarded/any").status_code == 200
    assert _client((ORG_READ,)).get("/api/v1/guarded/any").status_code == 403


def test_require_all_permissions_reports_first_missing() -> None:
    assert _client((ROLES_READ, MEMBERS_MANAGE)).get("/api/v1/guarded/all").status_code == 200

    response = _client((ROLES_READ,)).get("/api/v1/guarded/all")
    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Missing required permission: members.manage"


def test_anonymous_requests_are_forbidden() -> None:
    app = create_app()
    app.include_router(_guarded_router())

    response = TestClient(app).get("/api/v1/guarded/org")

    assert response.status_code == 403


def _guarded_router() -> APIRouter:
    router = APIRouter(prefix="/api/v1/guarded")

    @router.get("/org", dependencies=[Depends(require_permission(ORG_READ))])
    def read_org() -> dict[str, bool]:
        return {"ok": True}

    return router


def test_guards_need_at_least_one_permission() -> None:
    with pytest.raises(ValueError):
        require_permission("")
    with pytest.raises(ValueError):
        require_any_permission()
    with pytest.raises(ValueError):
        require_all_permissions()
