"""Fixtures for API route tests."""

from collections.abc import Callable

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from courier.api.dependencies import get_tool_executor, get_tool_store
from courier.api.exceptions import CourierAPIError
from courier.api.models.errors import ErrorBody, ErrorCode, ErrorResponse
from courier.api.routes.messages import router as messages_router
from courier.api.routes.tools import router as tools_router
from courier.tools.dispatch import HttpDispatcher
from courier.tools.executor import ToolExecutor
from courier.tools.stores.inmemory import InMemoryToolStore


class FakeRemote:
    """Mock remote endpoint recording every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: (
            httpx.Response(200, text="remote says hi")
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def tool_store() -> InMemoryToolStore:
    """Create a fresh in-memory tool store."""
    return InMemoryToolStore()


@pytest.fixture
def executor(tool_store: InMemoryToolStore, remote: FakeRemote) -> ToolExecutor:
    dispatcher = HttpDispatcher(client=httpx.AsyncClient(transport=httpx.MockTransport(remote)))
    return ToolExecutor(tool_store, dispatcher)


@pytest.fixture
def app(tool_store: InMemoryToolStore, executor: ToolExecutor) -> FastAPI:
    """Create a test FastAPI application."""
    app = FastAPI()
    app.include_router(tools_router, tags=["Tools"])
    app.include_router(messages_router, tags=["Messages"])

    app.dependency_overrides[get_tool_store] = lambda: tool_store
    app.dependency_overrides[get_tool_executor] = lambda: executor

    @app.exception_handler(CourierAPIError)
    async def courier_api_error_handler(request: Request, exc: CourierAPIError) -> JSONResponse:
        error_body = ErrorBody(code=exc.error_code, message=exc.message, tool_name=exc.tool_name)
        response = ErrorResponse(error=error_body)
        return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error_body = ErrorBody(code=ErrorCode.INVALID_REQUEST, message="Request validation failed")
        response = ErrorResponse(error=error_body)
        return JSONResponse(status_code=400, content=response.model_dump(mode="json"))

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)
