"""HTTP Middleware — path normalisation and access logging.

Invariants:
    - Routing only ever sees normalised paths: no empty segments, no trailing
      slash, single leading slash ("//questions///1/" → "/questions/1")
    - Exactly one access-log line per HTTP request

Design Decisions:
    - Pure ASGI middleware for normalisation: rewrites scope before routing,
      so no redirects are issued and the request body is left untouched
"""

import logging
import time
from urllib.parse import quote

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Drop empty and whitespace-only segments; strip the others."""
    segments = [s.strip() for s in path.split("/") if s.strip()]
    return "/" + "/".join(segments)


class NormalizePathMiddleware:
    """Rewrite scope["path"] to its normalised form."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] == "http":
            path = normalize_path(scope["path"])
            if path != scope["path"]:
                scope = dict(scope)
                scope["path"] = path
                scope["raw_path"] = quote(path).encode("ascii")
        await self.app(scope, receive, send)


async def log_requests(request: Request, call_next):
    """Access log: method, path, status and duration for every request."""
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response
