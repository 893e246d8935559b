"""ASGI middleware for envcascade services."""

import time
from typing import Any

from envcascade.logger import Logger


class RequestLoggingMiddleware:
    """Log method, path, status and duration of every HTTP request.

    Example:
        app.add_middleware(RequestLoggingMiddleware, logger=logger)
    """

    def __init__(self, app: Any, logger: Logger) -> None:
        self.app = app
        self.logger = logger

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            # websocket and lifespan pass straight through
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "/")
        start_time = time.perf_counter()
        response_status = 0

        async def send_wrapper(message: dict) -> None:
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.info(
                f"{method} {path}",
                status=response_status,
                duration_ms=round(duration_ms, 2),
            )
