"""Health check utilities for envcascade services."""

from typing import Any, Callable, Dict, List, Optional


def create_health_response(
    service: str,
    port: int,
    healthy: bool = True,
) -> Dict[str, Any]:
    """Create the health check body.

    Example:
        >>> create_health_response("api", 3001)
        {"status": "ok", "service": "api", "port": 3001}
    """
    return {
        "status": "ok" if healthy else "unhealthy",
        "service": service,
        "port": port,
    }


def create_health_routes(
    service: str,
    port: int,
    health_check: Optional[Callable[[], bool]] = None,
) -> List[Any]:
    """Create the ``GET /health`` route.

    Args:
        service: Service name for responses
        port: Listen port reported in responses
        health_check: Optional callable returning True when healthy

    Returns:
        List of Starlette Route objects
    """
    from starlette.requests import Request
    from starlette.responses import JSONResponse
    from starlette.routing import Route

    async def health(request: Request) -> JSONResponse:
        healthy = True
        if health_check is not None:
            try:
                healthy = bool(health_check())
            except Exception:
                healthy = False

        status_code = 200 if healthy else 503
        return JSONResponse(
            create_health_response(service, port, healthy=healthy),
            status_code=status_code,
        )

    return [Route("/health", endpoint=health, methods=["GET"])]
