"""Apollo cloud client - a thin GraphQL client for the Apollo cloud API.

Authenticates with a static API key and exposes the two operations the
CLI needs: listing the caller's organization memberships and creating a
new graph with an API key.
"""

from __future__ import annotations

from .client import ApolloCloudClient
from .config import DEFAULT_ENDPOINT, ClientConfig, HttpConfig, http_config
from .exceptions import (
    ApolloCloudError,
    ConfigurationError,
    DecodeError,
    GraphQLOperationError,
    HttpStatusError,
    RequestTimeoutError,
    TransportError,
)
from .graphql_queries import CREATE_GRAPH_QUERY, GET_ORG_MEMBERSHIPS_QUERY, Operation
from .models import GraphQLEnvelope, GraphQLError, GraphQLResponse

__version__ = "0.1.0"

__all__ = [
    "ApolloCloudClient",
    "ApolloCloudError",
    "ClientConfig",
    "ConfigurationError",
    "CREATE_GRAPH_QUERY",
    "DEFAULT_ENDPOINT",
    "DecodeError",
    "GET_ORG_MEMBERSHIPS_QUERY",
    "GraphQLEnvelope",
    "GraphQLError",
    "GraphQLOperationError",
    "GraphQLResponse",
    "HttpConfig",
    "HttpStatusError",
    "Operation",
    "RequestTimeoutError",
    "TransportError",
    "http_config",
]
