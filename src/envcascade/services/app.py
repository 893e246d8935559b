"""Routes and app construction shared by the api and worker services."""

from typing import Any, Callable, Dict, Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from envcascade.config import CascadeResult, ServerSettings
from envcascade.logger import Logger
from envcascade.web import create_health_routes, create_starlette_app

# Variables every service reports on its root endpoint
WATCHED_VARIABLES = (
    "DATABASE_URL",
    "REDIS_URL",
    "DEBUG",
    "LOG_LEVEL",
    "API_KEY",
    "NODE_ENV",
)


def build_root_response(result: CascadeResult, settings: ServerSettings) -> Dict[str, Any]:
    """Body of ``GET /``: resolved watched variables plus provenance."""
    return {
        "service": settings.service,
        "port": settings.port,
        "environment": {name: result.get(name) for name in WATCHED_VARIABLES},
        "sources": result.describe_sources(),
    }


def create_service_app(
    result: CascadeResult,
    settings: ServerSettings,
    logger: Optional[Logger] = None,
    health_check: Optional[Callable[[], bool]] = None,
) -> Starlette:
    """Build the Starlette app for one service.

    The cascade must already be loaded; handlers only read from ``result``.
    """
    body = build_root_response(result, settings)

    async def root(request: Request) -> JSONResponse:
        return JSONResponse(body)

    routes = [Route("/", endpoint=root, methods=["GET"])]
    routes.extend(create_health_routes(settings.service, settings.port, health_check=health_check))

    return create_starlette_app(routes=routes, logger=logger)
