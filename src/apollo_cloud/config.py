"""Configuration for the Apollo cloud client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError


DEFAULT_ENDPOINT = "https://engine-graphql.apollographql.com/api/graphql"


class HttpConfig:
    """Configuration for HTTP requests."""

    # Timeout for every GraphQL POST (seconds)
    SERVICE_TIMEOUT: float = float(os.getenv("APOLLO_SERVICE_TIMEOUT", "60"))


http_config = HttpConfig()


@dataclass(frozen=True)
class ClientConfig:
    """Settings needed to build an ``ApolloCloudClient``.

    Attributes:
        endpoint_url: GraphQL endpoint every operation is posted to
        api_key: Value sent in the ``X-API-KEY`` header
        timeout: Per-request timeout in seconds, ``None`` for the
            ``HttpConfig.SERVICE_TIMEOUT`` default
    """

    endpoint_url: str
    api_key: str
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.endpoint_url, str) or not self.endpoint_url.strip():
            raise ConfigurationError("endpoint_url field cannot be empty")
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigurationError("api_key field cannot be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from ``APOLLO_KEY`` and ``APOLLO_API_ENDPOINT``."""
        api_key = os.getenv("APOLLO_KEY", "")
        if not api_key.strip():
            raise ConfigurationError("APOLLO_KEY environment variable is not set")
        endpoint_url = os.getenv("APOLLO_API_ENDPOINT") or DEFAULT_ENDPOINT
        return cls(endpoint_url=endpoint_url, api_key=api_key.strip())

    def __repr__(self) -> str:
        return (
            f"ClientConfig(endpoint_url={self.endpoint_url!r}, "
            f"api_key={mask_token(self.api_key)!r}, timeout={self.timeout!r})"
        )


def mask_token(token: Optional[str]) -> str:
    """Shorten a credential to a loggable prefix."""
    if not token:
        return "None"
    if len(token) <= 12:
        return "***"
    return f"{token[:6]}..."
