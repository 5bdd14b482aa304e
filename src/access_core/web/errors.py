from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from access_core.config import get_runtime_settings
from access_core.contracts.errors import AccessContractError

ERROR_CODE_VALIDATION = "VALIDATION_ERROR"
ERROR_CODE_BAD_REQUEST = "BAD_REQUEST"
ERROR_CODE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_FORBIDDEN = "FORBIDDEN"
ERROR_CODE_INTERNAL = "INTERNAL_SERVER_ERROR"


@dataclass(frozen=True)
class ApiErrorSpec:
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiError(RuntimeError):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = int(status_code)
        self.code = str(code)
        self.message = str(message)
        self.details = details


def is_api_request(request: Request) -> bool:
    path = str(getattr(request.url, "path", "") or "")
    return path.startswith("/api/")


def request_id_from_request(request: Request) -> str:
    request_id = str(getattr(request.state, "request_id", "") or "").strip()
    if request_id:
        return request_id
    from_header = str(request.headers.get("x-request-id", "")).strip()
    return from_header or "-"


def build_api_error_payload(
    *,
    code: str,
    message: str,
    request_id: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "ok": False,
        "error": {
            "code": str(code),
            "message": str(message),
        },
        "request_id": str(request_id or "-"),
    }
    if details and get_runtime_settings().error_include_details:
        payload["error"]["details"] = details
    return payload


def api_error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    request_id = request_id_from_request(request)
    payload = build_api_error_payload(
        code=code,
        message=message,
        request_id=request_id,
        details=details,
    )
    headers = {"X-Request-ID": request_id}
    return JSONResponse(payload, status_code=int(status_code), headers=headers)


def normalize_exception(exc: Exception) -> ApiErrorSpec:
    if isinstance(exc, ApiError):
        return ApiErrorSpec(
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )

    if isinstance(exc, RequestValidationError):
        return ApiErrorSpec(
            status_code=422,
            code=ERROR_CODE_VALIDATION,
            message="Request validation failed. Check field values and try again.",
            details={"errors": exc.errors()},
        )

    if isinstance(exc, AccessContractError):
        return ApiErrorSpec(
            status_code=400,
            code=ERROR_CODE_BAD_REQUEST,
            message="Malformed permission or navigation input.",
            details={"reason": str(exc)},
        )

    if isinstance(exc, StarletteHTTPException):
        status = int(exc.status_code)
        code = {
            401: ERROR_CODE_UNAUTHORIZED,
            403: ERROR_CODE_FORBIDDEN,
            404: ERROR_CODE_NOT_FOUND,
        }.get(status, ERROR_CODE_BAD_REQUEST if status < 500 else ERROR_CODE_INTERNAL)
        return ApiErrorSpec(status_code=status, code=code, message=str(exc.detail or "Request failed."))

    return ApiErrorSpec(
        status_code=500,
        code=ERROR_CODE_INTERNAL,
        message="An unexpected error occurred.",
        details={"reason": str(exc)},
    )
