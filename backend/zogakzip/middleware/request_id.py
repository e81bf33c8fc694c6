"""
Zogakzip Backend — Request ID Middleware
==========================================

What:  Gives every request a short correlation ID and echoes it back in
       the X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused when it is a plain token
       (letters, digits, `.`, `_`, `-`, at most 64 chars); anything else is
       replaced by a fresh 8-hex-char ID. The ID lives in a ContextVar for
       loggers and error handlers and in request.state for route handlers.

Error responses include the same ID, so a user reporting "request 1a2b3c4d
failed" can be matched to the server log lines of that request.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

_TOKEN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_request_id(supplied: Optional[str]) -> str:
    """Client id if it is safe to put in a log line, otherwise a new one."""
    if supplied and _TOKEN.match(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(HEADER))
        # Not reset afterwards: the catch-all 500 handler runs outside this
        # middleware and still reads it
        request_id_var.set(rid)
        request.state.request_id = rid
        response = await call_next(request)
        response.headers[HEADER] = rid
        return response
