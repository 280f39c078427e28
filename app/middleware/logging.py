"""
Request logging middleware for FastAPI using Loguru.

This middleware logs one REQUEST-level line per HTTP request and tags
every response with a request id.
"""

import time
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of each request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response.headers["X-Request-ID"] = request_id

        # Get client IP with forwarded headers consideration
        client_ip = request.client.host if request.client else "unknown"
        if "X-Forwarded-For" in request.headers:
            forwarded_ips = request.headers["X-Forwarded-For"].split(",")
            if forwarded_ips:
                client_ip = forwarded_ips[0].strip()

        logger.bind(
            request_id=request_id,
            client_ip=client_ip,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
        ).log(
            "REQUEST",
            f"{request.method} {request.url.path} {response.status_code} {process_time_ms}ms"
        )
        return response
