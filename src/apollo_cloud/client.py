"""GraphQL HTTP client for the Apollo cloud API."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Set, Type, TypeVar, Union

import requests
from pydantic import BaseModel, ValidationError
from requests.exceptions import InvalidHeader
from requests.utils import check_header_validity

from .config import ClientConfig, http_config, mask_token
from .exceptions import (
    ApolloCloudError,
    ConfigurationError,
    DecodeError,
    GraphQLOperationError,
    HttpStatusError,
    RequestTimeoutError,
    TransportError,
)
from .graphql_queries import Operation
from .models import (
    CreateGraphData,
    CreateGraphVariables,
    GetOrgMembershipsData,
    GraphQLEnvelope,
    GraphQLResponse,
)


logger = logging.getLogger(__name__)


API_KEY_HEADER = "X-API-KEY"
CONTENT_TYPE_HEADER = "CONTENT-TYPE"
JSON_CONTENT_TYPE = "application/json"

FETCH_ORGANIZATIONS_FAILED = "Could not fetch organizations"
AUTHENTICATION_FAILED = "Could not authenticate. Please check that your auth token is up-to-date"
NO_DATA_RETURNED = "No data returned"
NO_API_KEY_RETURNED = "Service created but no API key was returned"

AUTH_REJECTED_STATUSES = frozenset({401, 403})

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def _is_auth_rejection(exc: ApolloCloudError) -> bool:
    return isinstance(exc, HttpStatusError) and exc.status_code in AUTH_REJECTED_STATUSES


def _validate_header(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} header value cannot be empty")
    try:
        value.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ConfigurationError(f"{name} header value contains non-ASCII characters") from exc
    # check_header_validity only rejects CR/LF and leading whitespace.
    if any(ord(char) < 32 or ord(char) == 127 for char in value):
        raise ConfigurationError(f"{name} header value contains control characters")
    try:
        check_header_validity((name, value))
    except InvalidHeader as exc:
        raise ConfigurationError(f"Invalid {name} header value: {exc}") from exc


class ApolloCloudClient:
    """Client for the Apollo cloud GraphQL endpoint.

    Every request carries the same two headers, fixed at construction:
    the API key and a JSON content type. Operations are single synchronous
    POSTs; nothing is retried.

    Args:
        endpoint_url: GraphQL endpoint URL
        auth_token: API key sent as ``X-API-KEY``
        timeout: Per-request timeout in seconds. Defaults to
            ``HttpConfig.SERVICE_TIMEOUT``.
        session: Optional ``requests.Session`` to send through. A new one
            is created when omitted.
        stringify_variables: Send ``variables`` as a JSON-encoded string,
            the format the existing server expects. ``False`` sends a
            plain JSON object.

    Raises:
        ConfigurationError: If a header value is invalid or the session
            cannot be created.
    """

    def __init__(
        self,
        endpoint_url: str,
        auth_token: str,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        stringify_variables: bool = True,
    ) -> None:
        if not isinstance(endpoint_url, str) or not endpoint_url.strip():
            raise ConfigurationError("endpoint_url cannot be empty")
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")

        headers = {
            API_KEY_HEADER: auth_token,
            CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE,
        }
        for name, value in headers.items():
            _validate_header(name, value)

        self._owns_session = session is None
        if session is None:
            try:
                session = requests.Session()
            except Exception as exc:
                raise ConfigurationError(f"Could not create HTTP session: {exc}") from exc
        session.headers.update(headers)

        self._session = session
        self._endpoint_url = endpoint_url
        self._auth_token = auth_token
        self._timeout = timeout if timeout is not None else http_config.SERVICE_TIMEOUT
        self._stringify_variables = stringify_variables

        logger.debug("Apollo cloud client ready: %s (key %s)", endpoint_url, mask_token(auth_token))

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> ApolloCloudClient:
        return cls(config.endpoint_url, config.api_key, timeout=config.timeout, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> ApolloCloudClient:
        """Build a client from ``APOLLO_KEY`` / ``APOLLO_API_ENDPOINT``."""
        return cls.from_config(ClientConfig.from_env(), **kwargs)

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> ApolloCloudClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ApolloCloudClient(endpoint_url={self._endpoint_url!r}, auth_token={mask_token(self._auth_token)!r})"

    # ------------------------------------------------------------------
    # Generic execution
    # ------------------------------------------------------------------

    def send_query(self, envelope: GraphQLEnvelope, response_model: Type[ResponseT]) -> ResponseT:
        """POST one envelope and decode the body into ``response_model``.

        Raises:
            RequestTimeoutError: The POST did not finish within the timeout.
            TransportError: The POST failed before a response arrived.
            HttpStatusError: The endpoint answered with a non-2xx status.
            DecodeError: The body is not JSON of the expected shape.
        """
        body = envelope.to_body()
        logger.debug("POST %s (%d bytes)", self._endpoint_url, len(body))

        try:
            response = self._session.post(self._endpoint_url, data=body, timeout=self._timeout)
            text = response.text
        except requests.Timeout as exc:
            logger.error("GraphQL request to %s timed out after %ss", self._endpoint_url, self._timeout)
            raise RequestTimeoutError(
                f"GraphQL request timed out after {self._timeout}s", timeout=self._timeout
            ) from exc
        except requests.RequestException as exc:
            logger.error("GraphQL request to %s failed: %s", self._endpoint_url, exc)
            raise TransportError(f"GraphQL request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.error("GraphQL request failed with status %s", response.status_code)
            logger.error("Response body: %s", text[:500])
            raise HttpStatusError(response.status_code, text)

        try:
            return response_model.model_validate_json(text)
        except ValidationError as exc:
            logger.debug("Undecodable GraphQL response body: %s", text[:500])
            raise DecodeError(f"Could not decode GraphQL response: {exc}", raw_body=text) from exc

    def execute_operation(
        self,
        operation_string: str,
        variables: Union[BaseModel, Mapping[str, Any]],
        data_model: Type[BaseModel],
    ) -> GraphQLResponse:
        if isinstance(variables, BaseModel):
            payload = variables.model_dump(by_alias=True, mode="json")
        else:
            payload = dict(variables)
        if self._stringify_variables:
            encoded: Any = json.dumps(payload, separators=(",", ":"))
        else:
            encoded = payload
        envelope = GraphQLEnvelope(query=operation_string, variables=encoded)
        return self.send_query(envelope, GraphQLResponse[data_model])

    def execute_operation_no_variables(self, operation_string: str, data_model: Type[BaseModel]) -> GraphQLResponse:
        envelope = GraphQLEnvelope(query=operation_string)
        return self.send_query(envelope, GraphQLResponse[data_model])

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_org_memberships(self) -> Set[str]:
        """Return the ids of every account the authenticated user belongs to.

        Raises:
            GraphQLOperationError: The request failed, or the key did not
                resolve to a user (``user_error`` is set in that case).
        """
        try:
            result = self.execute_operation_no_variables(Operation.GET_ORG_MEMBERSHIPS.text, GetOrgMembershipsData)
        except ApolloCloudError as exc:
            logger.error("Encountered error fetching organizations: %s", exc)
            if _is_auth_rejection(exc):
                raise GraphQLOperationError(AUTHENTICATION_FAILED, user_error=True) from exc
            raise GraphQLOperationError(FETCH_ORGANIZATIONS_FAILED) from exc

        if result.errors:
            logger.warning("GraphQL errors returned: %s", [err.message for err in result.errors])

        me = result.data.me if result.data is not None else None
        if me is None:
            raise GraphQLOperationError(AUTHENTICATION_FAILED, user_error=True)

        return {membership.account.id for membership in me.memberships}

    def create_new_graph(self, graph_id: str, account_id: str) -> str:
        """Create graph ``graph_id`` under ``account_id`` and return its API key.

        Not idempotent: a repeated call may try to create the graph again.

        Raises:
            GraphQLOperationError: On any failure. Messages from the server
                are joined with newlines; ``user_error`` is set when one of
                them is an authentication or permission failure.
        """
        variables = CreateGraphVariables(graph_id=graph_id, account_id=account_id)
        try:
            result = self.execute_operation(Operation.CREATE_GRAPH.text, variables, CreateGraphData)
        except ApolloCloudError as exc:
            raise GraphQLOperationError(str(exc), user_error=_is_auth_rejection(exc)) from exc

        if result.errors:
            logger.warning("GraphQL errors returned: %s", [err.message for err in result.errors])
            message = "\n".join(err.message for err in result.errors)
            user_error = any(err.is_user_error() for err in result.errors)
            raise GraphQLOperationError(message, user_error=user_error)

        service = result.data.newService if result.data is not None else None
        if service is None:
            raise GraphQLOperationError(NO_DATA_RETURNED, user_error=False)

        api_keys = service.apiKeys
        if not api_keys:
            raise GraphQLOperationError(NO_API_KEY_RETURNED, user_error=False)

        logger.debug("Created graph %s", service.id)
        return api_keys[0].token
