"""Tests for LoggingContextMiddleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from structlog.contextvars import get_contextvars

from courier.observability.middleware import LoggingContextMiddleware


def _client() -> TestClient:
    app = FastAPI()
    app.add_middleware(LoggingContextMiddleware)

    @app.get("/context")
    async def context() -> dict[str, str | None]:
        bound = get_contextvars()
        return {"request_id": bound.get("request_id"), "trace_id": bound.get("trace_id")}

    return TestClient(app)


class TestLoggingContextMiddleware:
    def test_generates_request_id(self) -> None:
        response = _client().get("/context")

        request_id = response.headers["X-Request-ID"]
        assert request_id
        assert response.json()["request_id"] == request_id

    def test_propagates_caller_request_id(self) -> None:
        response = _client().get("/context", headers={"X-Request-ID": "req-1"})

        assert response.headers["X-Request-ID"] == "req-1"
        assert response.json()["request_id"] == "req-1"

    def test_trace_id_from_traceparent(self) -> None:
        traceparent = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"

        response = _client().get("/context", headers={"traceparent": traceparent})

        assert response.json()["trace_id"] == "4bf92f3577b34da6a3ce929d0e0e4736"
