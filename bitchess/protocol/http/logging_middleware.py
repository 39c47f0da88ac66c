from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


logger = logging.getLogger(__name__)

POSITIONS_PREFIX = "/api/positions/"
# Client-supplied ids are reused only when they are short plain tokens
REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,128}")


def _request_id(header: Optional[str]) -> str:
    if header and REQUEST_ID_RE.fullmatch(header):
        return header
    return str(uuid.uuid4())


def _position_id(path: str) -> Optional[str]:
    if not path.startswith(POSITIONS_PREFIX):
        return None
    rest = path[len(POSITIONS_PREFIX) :]
    return rest.split("/", 1)[0] or None


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID, log it, and echo the ID in a header."""

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = _request_id(request.headers.get("x-request-id"))
        request.state.request_id = request_id
        position_id = _position_id(request.url.path)

        logger.info(
            "request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "position_id": position_id,
            },
        )

        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers["x-request-id"] = request_id

        logger.info(
            "response",
            extra={
                "request_id": request_id,
                "position_id": position_id,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
