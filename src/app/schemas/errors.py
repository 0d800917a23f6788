from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorBody(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class ErrorResponse(BaseModel):
    ok: bool = False
    error: ErrorBody


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing or conflicting query parameters."},
    422: {"model": ErrorResponse, "description": "Invalid state code or query parameter."},
    500: {"model": ErrorResponse, "description": "Dataset unavailable or unexpected failure."},
}
