"""
Access logging middleware.

Logs one line per request: method, path, status and duration.
No business logic. Pure cross-cutting concern.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("email_hint.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every handled request.

    Unexpected errors are turned into 500 by the server error middleware,
    which sits outside this one, so they are logged here as 500 and
    re-raised untouched.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Time the request and log its outcome."""
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started)
            raise
        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )
