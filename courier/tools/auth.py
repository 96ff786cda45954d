"""Outbound authentication strategies.

Each AuthType maps to a strategy that reads its fields from the tool's JSON
auth configuration and writes request headers. A missing or malformed
configuration never fails the call: the header is skipped and the request
goes out unauthenticated.
"""

import base64
import json
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any

from courier.observability.logging import get_logger
from courier.tools.models import AuthType

logger = get_logger(__name__)

DEFAULT_API_KEY_HEADER = "X-API-Key"


class MissingAuthFieldError(KeyError):
    """A field required by the auth strategy is absent from the config."""


def _require(config: dict[str, Any], field: str) -> str:
    value = config.get(field)
    if value is None or isinstance(value, (dict, list)):
        raise MissingAuthFieldError(field)
    return value if isinstance(value, str) else json.dumps(value)


class AuthStrategy(ABC):
    """Writes authentication headers for one auth type."""

    @abstractmethod
    def apply(self, headers: MutableMapping[str, str], config: dict[str, Any]) -> None:
        """Add headers derived from config.

        Raises:
            MissingAuthFieldError: If a required field is absent
        """
        pass


class ApiKeyAuth(AuthStrategy):
    """Static key in a configurable header (default X-API-Key)."""

    def apply(self, headers: MutableMapping[str, str], config: dict[str, Any]) -> None:
        api_key = _require(config, "apiKey")
        header_name = config.get("headerName") or DEFAULT_API_KEY_HEADER
        headers[str(header_name)] = api_key


class BearerTokenAuth(AuthStrategy):
    """Authorization: Bearer from a configured field."""

    def __init__(self, field: str = "token") -> None:
        self._field = field

    def apply(self, headers: MutableMapping[str, str], config: dict[str, Any]) -> None:
        headers["Authorization"] = f"Bearer {_require(config, self._field)}"


class BasicAuth(AuthStrategy):
    """Authorization: Basic from username and password."""

    def apply(self, headers: MutableMapping[str, str], config: dict[str, Any]) -> None:
        username = _require(config, "username")
        password = _require(config, "password")
        credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        headers["Authorization"] = f"Basic {credentials}"


# OAUTH2 uses a static access token; there is no refresh flow.
AUTH_STRATEGIES: dict[AuthType, AuthStrategy] = {
    AuthType.API_KEY: ApiKeyAuth(),
    AuthType.BEARER_TOKEN: BearerTokenAuth("token"),
    AuthType.BASIC_AUTH: BasicAuth(),
    AuthType.OAUTH2: BearerTokenAuth("accessToken"),
}


def apply_auth(
    headers: MutableMapping[str, str],
    auth_type: AuthType,
    auth_config: str | None,
    *,
    tool_name: str | None = None,
) -> None:
    """Add authentication headers for a tool call.

    Args:
        headers: Outbound headers, modified in place
        auth_type: Tool's auth scheme
        auth_config: JSON document with the scheme's fields
        tool_name: Used for log context only
    """
    strategy = AUTH_STRATEGIES.get(auth_type)
    if strategy is None:
        return

    if auth_config is None:
        logger.warning("auth_config_missing", tool_name=tool_name, auth_type=auth_type.value)
        return

    try:
        config = json.loads(auth_config)
    except ValueError as e:
        logger.warning(
            "auth_config_unparsable",
            tool_name=tool_name,
            auth_type=auth_type.value,
            error=str(e),
        )
        return

    if not isinstance(config, dict):
        logger.warning("auth_config_not_object", tool_name=tool_name, auth_type=auth_type.value)
        return

    try:
        strategy.apply(headers, config)
    except MissingAuthFieldError as e:
        logger.warning(
            "auth_config_field_missing",
            tool_name=tool_name,
            auth_type=auth_type.value,
            field=e.args[0],
        )
