"""Correlation ID and request logging middleware."""
from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Set request.state.correlation_id from X-Correlation-ID header or generate new."""

    async def dispatch(self, request: Request, call_next):
        request.state.correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = request.state.correlation_id
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, duration. Query strings are left out (they carry user queries)."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path or ""
        t0 = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - t0) * 1000
        correlation_id = getattr(request.state, "correlation_id", "")
        logger.info(
            "%s %s -> %s | %s ms | correlation_id=%s",
            request.method,
            path,
            response.status_code,
            round(elapsed_ms, 1),
            correlation_id[:8] if correlation_id else "-",
        )
        return response
