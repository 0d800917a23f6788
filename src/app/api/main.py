from __future__ import annotations

import time
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.error_handlers import (
    dataset_unavailable_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.api.routes_breakdowns import router as breakdowns_router
from app.api.routes_elderly import router as elderly_router
from app.api.routes_records import router as records_router
from app.api.routes_states import router as states_router
from app.dataset import DatasetUnavailableError, dataset_available
from app.logging import bind_request_context, clear_request_context, configure_logging, get_logger
from app.schemas.responses import HealthResponse
from app.settings import get_settings

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins_list,
    allow_methods=["GET"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix=settings.api_prefix)
api_router.include_router(states_router)
api_router.include_router(elderly_router)
api_router.include_router(breakdowns_router)
api_router.include_router(records_router)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(DatasetUnavailableError, dataset_unavailable_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id", str(uuid4()))
    request.state.request_id = request_id
    bind_request_context(request_id, request.method, request.url.path)
    started = time.perf_counter()
    try:
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)
        response.headers["x-request-id"] = request_id
        get_logger("app.api").info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
    finally:
        clear_request_context()


@api_router.get("/health", response_model=HealthResponse)
def get_health() -> HealthResponse:
    return HealthResponse(status="ok", dataset=dataset_available())


app.include_router(api_router)
