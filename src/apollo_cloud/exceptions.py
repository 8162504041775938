"""Shared exception types for the Apollo cloud client."""

from __future__ import annotations

from typing import Optional


class ApolloCloudError(RuntimeError):
    """Base exception for Apollo cloud client errors."""

    def __init__(self, message: str, *, error_code: str = "apollo_cloud_error") -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(ApolloCloudError):
    """Client could not be configured (bad header value, missing key, transport init)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR")


class TransportError(ApolloCloudError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, *, error_code: str = "TRANSPORT_ERROR") -> None:
        super().__init__(message, error_code=error_code)


class RequestTimeoutError(TransportError):
    """The request did not complete within the configured timeout."""

    def __init__(self, message: str, timeout: Optional[float] = None) -> None:
        super().__init__(message, error_code="REQUEST_TIMEOUT")
        self.timeout = timeout


class HttpStatusError(ApolloCloudError):
    """The endpoint answered with a non-2xx status code."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"GraphQL HTTP {status_code}: {body[:500]}", error_code="HTTP_STATUS_ERROR")
        self.status_code = status_code
        self.body = body


class DecodeError(ApolloCloudError):
    """The response body was not valid JSON for the expected shape.

    Attributes:
        raw_body: The undecoded response text, kept for diagnostics.
    """

    def __init__(self, message: str, raw_body: str) -> None:
        super().__init__(message, error_code="DECODE_ERROR")
        self.raw_body = raw_body


class GraphQLOperationError(ApolloCloudError):
    """A GraphQL operation failed.

    Attributes:
        user_error: True when the caller can fix the problem themselves
            (for example by refreshing their API key), False for internal
            or server-side failures.
    """

    def __init__(self, message: str, *, user_error: bool = False) -> None:
        super().__init__(message, error_code="GRAPHQL_OPERATION_ERROR")
        self.user_error = user_error
