"""Outbound HTTP dispatch for tool calls.

Issues one request per call with a fixed deadline and classifies failures
into transport errors (network, timeout) and status errors (HTTP >= 400).
There is no retry: a failed attempt is final.
"""

import asyncio
import time
from collections.abc import Mapping
from typing import Any

import httpx
from opentelemetry.trace import SpanKind

from courier.observability.logging import get_logger
from courier.observability.metrics import TOOL_EXECUTION_LATENCY
from courier.observability.tracing import create_span, record_exception
from courier.tools.errors import (
    ToolConfigurationError,
    ToolStatusError,
    ToolTransportError,
)
from courier.tools.models import HttpMethod
from courier.tools.template import stringify_value

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
UNKNOWN_ERROR_BODY = "Unknown error"


def resolve_method(method: HttpMethod | str | None) -> HttpMethod:
    """Validate a configured HTTP method.

    Raises:
        ToolConfigurationError: If the method is absent or unsupported
    """
    if isinstance(method, HttpMethod):
        return method
    if method is None:
        raise ToolConfigurationError("Tool has no HTTP method configured")
    try:
        return HttpMethod(str(method).upper())
    except ValueError as e:
        raise ToolConfigurationError(f"Unsupported HTTP method: {method}") from e


def build_url(url: str, method: HttpMethod, params: Mapping[str, Any]) -> str:
    """Build the final request URL.

    GET calls with parameters carry every parameter as a query parameter,
    appended after any query already in the endpoint URL (a repeated key
    is sent twice); any other call uses the endpoint URL as-is.

    Raises:
        ToolConfigurationError: If the endpoint URL cannot be parsed
    """
    if method is not HttpMethod.GET or not params:
        return url

    try:
        base = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ToolConfigurationError(f"Invalid endpoint URL: {url}") from e

    for key, value in params.items():
        base = base.copy_add_param(key, stringify_value(value))
    return str(base)


class HttpDispatcher:
    """Sends tool requests through a shared httpx.AsyncClient.

    The client is created lazily and reused across calls; call close() on
    shutdown.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            timeout: Deadline in seconds for each call
            client: Pre-built client (tests inject one with a mock transport)
        """
        self._timeout = timeout
        self._client = client

    @property
    def timeout(self) -> float:
        return self._timeout

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def dispatch(
        self,
        url: str,
        method: HttpMethod | str | None,
        headers: Mapping[str, str],
        body: str | None = None,
        *,
        tool_name: str | None = None,
    ) -> str:
        """Send one request and return the response body text.

        Args:
            url: Final request URL
            method: Configured HTTP method
            headers: Outbound headers (auth already applied)
            body: Rendered body, sent only for POST/PUT/PATCH
            tool_name: Used for logs and metrics

        Raises:
            ToolConfigurationError: Unsupported method or unusable URL
            ToolTransportError: Network failure or timeout
            ToolStatusError: Remote answered with status >= 400
        """
        http_method = resolve_method(method)

        request_headers = httpx.Headers(headers)
        content: str | None = None
        if http_method.sends_body:
            if "content-type" not in request_headers:
                request_headers["Content-Type"] = "application/json"
            content = body if body is not None else ""

        label = tool_name or "unknown"
        with create_span(
            "courier.tool.dispatch",
            kind=SpanKind.CLIENT,
            attributes={
                "http.method": http_method.value,
                "http.url": url,
                "courier.tool_name": label,
            },
        ) as span:
            client = await self._ensure_client()
            start = time.perf_counter()
            try:
                response = await asyncio.wait_for(
                    client.request(
                        http_method.value,
                        url,
                        headers=request_headers,
                        content=content,
                        timeout=self._timeout,
                    ),
                    timeout=self._timeout,
                )
            except (TimeoutError, httpx.TimeoutException) as e:
                logger.warning(
                    "tool_request_timeout",
                    tool_name=tool_name,
                    url=url,
                    timeout_seconds=self._timeout,
                )
                error = ToolTransportError(
                    f"Error executing tool request: timed out after {self._timeout}s",
                    timed_out=True,
                )
                record_exception(span, error)
                raise error from e
            except httpx.InvalidURL as e:
                error_cfg = ToolConfigurationError(f"Invalid endpoint URL: {url}")
                record_exception(span, error_cfg)
                raise error_cfg from e
            except httpx.HTTPError as e:
                logger.warning(
                    "tool_request_transport_error",
                    tool_name=tool_name,
                    url=url,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                error = ToolTransportError(f"Error executing tool request: {e}")
                record_exception(span, error)
                raise error from e
            finally:
                TOOL_EXECUTION_LATENCY.labels(
                    tool_name=label, method=http_method.value
                ).observe(time.perf_counter() - start)

            span.set_attribute("http.status_code", response.status_code)

            if response.status_code >= 400:
                error_body = response.text or UNKNOWN_ERROR_BODY
                logger.warning(
                    "tool_request_failed_status",
                    tool_name=tool_name,
                    status_code=response.status_code,
                    response_preview=error_body[:200],
                )
                status_error = ToolStatusError(response.status_code, error_body)
                record_exception(span, status_error)
                raise status_error

            logger.debug(
                "tool_request_succeeded",
                tool_name=tool_name,
                status_code=response.status_code,
            )
            return response.text

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
