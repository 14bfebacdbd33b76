"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request once the response is ready.

    Requests that carry a short_id path parameter (the short link entry
    page and the new device form) log it as `short_id=...`, so a visitor's
    way through the flow can be followed in the logs. 4xx/5xx responses
    are logged at WARNING.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortener_app.web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        client_ip = request.client.host if request.client else "unknown"
        short_id = (request.scope.get("path_params") or {}).get("short_id")
        target = f" short_id={short_id}" if short_id else ""
        level = logging.WARNING if response.status_code >= 400 else logging.INFO

        self.logger.log(
            level,
            f"{request.method} {request.url.path}{target} -> {response.status_code} "
            f"in {duration_ms:.2f}ms (client {client_ip})"
        )
        return response
