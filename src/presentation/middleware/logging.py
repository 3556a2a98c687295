"""Request/response logging middleware with timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.metrics import record_http_request

from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _endpoint(request: Request) -> str:
    """
    Route template (e.g. /v1/credits/{credit_id}) to keep label cardinality bounded.

    Rebuilt from the concrete path and the matched path params, because the
    matched route's own ``path`` may omit the prefixes of the routers it was
    included through. Unmatched requests are labelled by their raw path.
    """
    path = request.url.path
    params = request.scope.get("path_params") or {}
    if not params:
        return path
    names = {str(value): name for name, value in params.items()}
    return "/".join(
        f"{{{names[segment]}}}" if segment in names else segment
        for segment in path.split("/")
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        log.info("request_started", query=query)

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            record_http_request(method, _endpoint(request), response.status_code, duration_ms / 1000)

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            return response

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise
