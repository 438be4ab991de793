"""Structured JSON request logging.

Every request logs one line:
{
  request_id,
  host,
  path,
  method,
  status_code,
  latency_ms
}

Attaches request_id to the X-Request-Id response header.
"""
from __future__ import annotations

import json
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.errors import error_response

logger = logging.getLogger("structured_access")


def _log_entry(request: Request, request_id: str, status_code: int, start: float) -> dict:
    return {
        "request_id": request_id,
        "host": request.headers.get("host", ""),
        "path": request.url.path,
        "method": request.method,
        "status_code": status_code,
        "latency_ms": round((time.monotonic() - start) * 1000, 2),
    }


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Log structured JSON for every request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())[:12]
        start = time.monotonic()

        request.state.request_id = request_id

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(json.dumps(_log_entry(request, request_id, 500, start)))
            response = JSONResponse(
                status_code=500,
                content=error_response("internal_error", "Unexpected server error", {"request_id": request_id}),
            )
            response.headers["X-Request-Id"] = request_id
            return response

        entry = _log_entry(request, request_id, response.status_code, start)
        if response.status_code >= 500:
            logger.error(json.dumps(entry))
        else:
            logger.info(json.dumps(entry))

        response.headers["X-Request-Id"] = request_id
        return response
