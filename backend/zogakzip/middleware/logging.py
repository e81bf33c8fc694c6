"""
Zogakzip Backend — Access Log Middleware
==========================================

What:  One access log line per HTTP request.
Who:   Applied to every request except GET /health.

Log line:
    PUT /api/posts/{post_id} 401 3.4ms post_id=12 [1a2b3c4d]

The route template is logged instead of the raw URL so lines for the same
endpoint group together; the matched ids follow it. Unmatched URLs (404
from the router) fall back to the raw path.

Level follows the outcome:
    5xx → ERROR; 401/403 (password gate) → WARNING;
    other 4xx and everything else → INFO.
Request bodies are never logged; they carry plaintext passwords.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from zogakzip.middleware.request_id import request_id_var

logger = logging.getLogger("zogakzip.access")

SKIP_PATHS = frozenset({"/health"})

GATE_STATUSES = frozenset({401, 403})


def route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status in GATE_STATUSES:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        route = route_template(request)
        path_params: Dict[str, Any] = dict(request.scope.get("path_params") or {})
        ids = " ".join(f"{k}={v}" for k, v in sorted(path_params.items()))
        rid = request_id_var.get("")

        logger.log(
            level_for(response.status_code),
            "%s %s %d %.1fms %s[%s]",
            request.method,
            route,
            response.status_code,
            elapsed_ms,
            f"{ids} " if ids else "",
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "path_params": path_params,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
