from __future__ import annotations

"""
Problem+JSON exception handlers (RFC 7807).

Installed by `app.main.create_app` via `install_exception_handlers`.
All errors are rendered as application/problem+json with a stable schema and
a machine-readable `code`.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException
from app.middleware.request_id import get_request_id

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"

_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHENTICATED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    429: "RATE_LIMITED",
}


def _problem(title: str, detail: str, status_code: int, code: str, request: Request, **extra) -> JSONResponse:
    content = {
        "type": "about:blank",
        "title": title,
        "status": status_code,
        "detail": detail,
        "code": code,
        "instance": str(request.url),
    }
    request_id = get_request_id(request)
    if request_id:
        content["request_id"] = request_id
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content), media_type=PROBLEM_JSON)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    body = exc.to_problem(instance=str(request.url), request_id=get_request_id(request) or None)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(body),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    title = exc.__class__.__name__.replace("Exception", "").strip() or "Error"
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return _problem(title, detail, exc.status_code, code, request)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    return _problem(
        "Validation error",
        "Validation error",
        422,
        "VALIDATION_ERROR",
        request,
        errors=exc.errors(),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    # Hide internals from the client; keep the trace in the logs.
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _problem(
        "Internal Server Error",
        "An unexpected error occurred.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        request,
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)


__all__ = [
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "global_exception_handler",
    "install_exception_handlers",
]
