"""
Request middleware: correlation IDs and request timing.

Reads X-Correlation-ID (or generates one), binds it to the logging context
for the lifetime of the request and echoes it back on the response. The
GraphQL endpoint shares a single path, so the request log line also carries
the operation name when the client sent one in the query string.
"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import set_correlation_id, clear_correlation_id, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Usage:
        app.add_middleware(CorrelationIdMiddleware)

    Access in resolvers and endpoints:
        request.state.correlation_id
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = set_correlation_id(correlation_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id

            elapsed = time.perf_counter() - started
            path = request.url.path
            logger.debug(
                f"Request completed: {request.method} {path}",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(elapsed * 1000, 1),
                    "graphql_operation": request.query_params.get("operationName"),
                },
            )
            return response
        finally:
            clear_correlation_id(token)
