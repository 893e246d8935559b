"""Tests for envcascade.web module."""

from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from envcascade.web import (
    RequestLoggingMiddleware,
    create_health_response,
    create_health_routes,
    create_starlette_app,
)


class TestHealthResponses:
    """Tests for health response bodies."""

    def test_create_health_response(self):
        assert create_health_response("api", 3001) == {
            "status": "ok",
            "service": "api",
            "port": 3001,
        }

    def test_create_health_response_unhealthy(self):
        response = create_health_response("worker", 3002, healthy=False)

        assert response["status"] == "unhealthy"
        assert response["service"] == "worker"


class TestCreateHealthRoutes:
    """Tests for create_health_routes function."""

    def test_creates_health_route(self):
        routes = create_health_routes("api", 3001)

        assert [r.path for r in routes] == ["/health"]

    def test_health_endpoint(self):
        app = Starlette(routes=create_health_routes("api", 3001))

        response = TestClient(app).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "api", "port": 3001}

    def test_health_with_failing_check(self):
        app = Starlette(routes=create_health_routes("api", 3001, health_check=lambda: False))

        response = TestClient(app).get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_health_check_exception_is_unhealthy(self):
        def broken_check() -> bool:
            raise RuntimeError("boom")

        app = Starlette(routes=create_health_routes("api", 3001, health_check=broken_check))

        response = TestClient(app).get("/health")

        assert response.status_code == 503


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    def test_logs_method_path_status(self, recording_logger):
        async def hello(request):
            return JSONResponse({"hello": "world"}, status_code=201)

        logger = recording_logger
        app = Starlette(routes=[Route("/hello", endpoint=hello)])
        app.add_middleware(RequestLoggingMiddleware, logger=logger)

        TestClient(app).get("/hello")

        assert len(logger.records) == 1
        level, message, fields = logger.records[0]
        assert level == "INFO"
        assert message == "GET /hello"
        assert fields["status"] == 201
        assert fields["duration_ms"] >= 0

    def test_logs_not_found(self, recording_logger):
        logger = recording_logger
        app = Starlette(routes=[])
        app.add_middleware(RequestLoggingMiddleware, logger=logger)

        TestClient(app).get("/missing")

        assert logger.records[0][2]["status"] == 404


class TestCreateStarletteApp:
    """Tests for create_starlette_app factory."""

    def test_creates_app(self):
        app = create_starlette_app()

        assert isinstance(app, Starlette)

    def test_routes_are_served(self):
        app = create_starlette_app(routes=create_health_routes("worker", 3002))

        response = TestClient(app).get("/health")

        assert response.json()["service"] == "worker"

    def test_logger_adds_request_logging(self, recording_logger):
        logger = recording_logger
        app = create_starlette_app(routes=create_health_routes("api", 3001), logger=logger)

        TestClient(app).get("/health")

        assert logger.records[0][1] == "GET /health"
