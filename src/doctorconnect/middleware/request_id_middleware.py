"""
Request ID middleware: accepts or assigns X-Request-ID and exposes it on
request.state, the response headers and log records.
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.structured_logger import request_id_var

HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(HEADER, "").strip()
        request_id = incoming[:64] if incoming else str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[HEADER] = request_id
        return response
