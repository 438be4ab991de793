from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors import AppError, error_response

logger = logging.getLogger("errors")


def _request_id(request: Request) -> Any:
    return getattr(request.state, "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:  # type: ignore[override]
        logger.info(
            "%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore[override]
        details: Any = {"errors": exc.errors()}
        rid = _request_id(request)
        if rid:
            details["request_id"] = rid
        return JSONResponse(
            status_code=422,
            content=error_response("validation_error", "Request validation failed", details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore[override]
        code = "not_found" if exc.status_code == 404 else "http_error"
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return JSONResponse(status_code=exc.status_code, content=error_response(code, message))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore[override]
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        details: Any = {}
        rid = _request_id(request)
        if rid:
            details["request_id"] = rid
        return JSONResponse(
            status_code=500,
            content=error_response("internal_error", "Unexpected server error", details),
        )
