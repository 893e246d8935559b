"""Starlette application factory for envcascade services."""

from typing import Any, List, Optional

from starlette.applications import Starlette

from envcascade.logger import Logger
from envcascade.web.middleware import RequestLoggingMiddleware


def create_starlette_app(
    routes: Optional[List[Any]] = None,
    logger: Optional[Logger] = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application with request logging.

    Args:
        routes: List of Route objects
        logger: When given, every request is logged through it
        debug: Enable debug mode

    Example:
        from starlette.routing import Route
        from envcascade.web import create_starlette_app, create_health_routes

        app = create_starlette_app(
            routes=[Route("/", endpoint=root)] + create_health_routes("api", 3001),
            logger=get_logger("envcascade-api"),
        )
    """
    app = Starlette(debug=debug, routes=routes or [])

    if logger is not None:
        app.add_middleware(RequestLoggingMiddleware, logger=logger)  # type: ignore[arg-type]

    return app
