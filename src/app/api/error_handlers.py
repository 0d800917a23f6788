from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.dataset import DatasetUnavailableError
from app.logging import get_logger


def _build_error_payload(
    *,
    code: str,
    message: str,
    request: Request,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": getattr(request.state, "request_id", None),
        },
    }


def _error_response(*, status_code: int, payload: dict[str, Any], request: Request) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=payload)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["x-request-id"] = request_id
    return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    details = exc.detail if isinstance(exc.detail, dict) else {"detail": exc.detail}
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return _error_response(
        status_code=exc.status_code,
        payload=_build_error_payload(
            code="http_error",
            message=message,
            request=request,
            details=details,
        ),
        request=request,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return _error_response(
        status_code=422,
        payload=_build_error_payload(
            code="validation_error",
            message="Invalid query parameters.",
            request=request,
            details={"errors": exc.errors()},
        ),
        request=request,
    )


async def dataset_unavailable_handler(request: Request, exc: DatasetUnavailableError) -> JSONResponse:
    get_logger("app.api").error("dataset_unavailable", error=str(exc))
    return _error_response(
        status_code=500,
        payload=_build_error_payload(
            code="dataset_unavailable",
            message="Failed to process the elderly dataset.",
            request=request,
            details={"detail": str(exc)},
        ),
        request=request,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    get_logger("app.api").exception("unhandled_exception", error=str(exc))
    return _error_response(
        status_code=500,
        payload=_build_error_payload(
            code="internal_error",
            message="Unexpected server error.",
            request=request,
            details={"detail": str(exc)},
        ),
        request=request,
    )
