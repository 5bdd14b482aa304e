from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from access_core.config import get_runtime_settings, validate_runtime_settings
from access_core.logging import setup_app_logging
from access_core.web.context import AccessContextProvider
from access_core.web.errors import ApiError, api_error_response, normalize_exception
from access_core.web.routers.navigation import router as navigation_router

LOGGER = logging.getLogger(__name__)


def create_app(*, context_provider: AccessContextProvider | None = None) -> FastAPI:
    """Build the API app.

    ``context_provider`` turns a request into an AccessContext (snapshot,
    entitlements, org/branch). Hosts plug in their own session and store
    lookups here; without one every request is treated as having no grants.
    """
    setup_app_logging()
    settings = get_runtime_settings()
    for issue in validate_runtime_settings(settings):
        LOGGER.warning("Runtime settings issue: %s", issue, extra={"event": "settings_issue"})

    app = FastAPI(title="Access Core")

    @app.middleware("http")
    async def _request_context_middleware(request: Request, call_next):
        request_id = str(request.headers.get("x-request-id", "")).strip() or uuid.uuid4().hex[:12]
        request.state.request_id = request_id
        if context_provider is not None:
            try:
                request.state.access_context = context_provider(request)
            except Exception as exc:
                LOGGER.exception(
                    "Access context provider failed. path=%s",
                    request.url.path,
                    extra={"event": "access_context_failed", "request_id": request_id},
                )
                spec = normalize_exception(exc)
                return api_error_response(
                    request,
                    status_code=spec.status_code,
                    code=spec.code,
                    message=spec.message,
                    details=spec.details,
                )
        response = await call_next(request)
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    async def _handle_exception(request: Request, exc: Exception):
        spec = normalize_exception(exc)
        if spec.status_code >= 500:
            LOGGER.exception(
                "Unhandled API error. path=%s method=%s",
                request.url.path,
                request.method,
                exc_info=exc,
                extra={"event": "unhandled_api_error", "request_id": str(getattr(request.state, "request_id", "-"))},
            )
        return api_error_response(
            request,
            status_code=spec.status_code,
            code=spec.code,
            message=spec.message,
            details=spec.details,
        )

    app.add_exception_handler(ApiError, _handle_exception)
    app.add_exception_handler(RequestValidationError, _handle_exception)
    app.add_exception_handler(StarletteHTTPException, _handle_exception)
    app.add_exception_handler(Exception, _handle_exception)

    app.include_router(navigation_router)
    return app
