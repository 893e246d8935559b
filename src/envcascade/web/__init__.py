"""Web utilities for envcascade services.

Provides the Starlette app factory, request logging middleware and the
health check route shared by the api and worker services.
"""

from envcascade.web.app import create_starlette_app
from envcascade.web.health import create_health_response, create_health_routes
from envcascade.web.middleware import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "create_health_response",
    "create_health_routes",
    "create_starlette_app",
]
