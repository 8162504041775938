"""Pydantic models for GraphQL request and response bodies.

The request side is the GraphQL envelope posted to the endpoint. The
response side mirrors the standard GraphQL shape, ``data`` and ``errors``,
either of which may be absent, and is generic over the operation payload.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


DataT = TypeVar("DataT")

USER_ERROR_CODES = frozenset({"UNAUTHENTICATED", "FORBIDDEN"})

_USER_ERROR_PATTERN = re.compile(
    r"unauthori[sz]ed|not authenticated|authentication|permission|forbidden|invalid api key",
    re.IGNORECASE,
)


# ============================================================================
# Request Models
# ============================================================================


class GraphQLEnvelope(BaseModel):
    """Request body for a single GraphQL operation.

    ``variables`` is either a pre-serialized JSON string or, when the
    client sends standard encoding, a plain mapping. ``None`` leaves the
    field out of the body entirely.
    """

    query: str
    variables: Optional[Any] = None

    def to_body(self) -> str:
        exclude = {"variables"} if self.variables is None else None
        return self.model_dump_json(exclude=exclude)


class CreateGraphVariables(BaseModel):
    """Variables for the CreateGraph mutation."""

    model_config = ConfigDict(populate_by_name=True)

    graph_id: str = Field(alias="graphID")
    account_id: str = Field(alias="accountID")


# ============================================================================
# Response Envelope
# ============================================================================


class GraphQLError(BaseModel):
    """A single entry of the ``errors`` array."""

    message: str
    path: Optional[List[Any]] = None
    extensions: Optional[Dict[str, Any]] = None

    @property
    def code(self) -> Optional[str]:
        if not self.extensions:
            return None
        code = self.extensions.get("code")
        return str(code) if code is not None else None

    def is_user_error(self) -> bool:
        """True for authentication and permission failures the caller can fix."""
        if self.code in USER_ERROR_CODES:
            return True
        return bool(_USER_ERROR_PATTERN.search(self.message))


class GraphQLResponse(BaseModel, Generic[DataT]):
    """Standard GraphQL response envelope."""

    data: Optional[DataT] = None
    errors: Optional[List[GraphQLError]] = None


# ============================================================================
# GetOrgMemberships
# ============================================================================


class Account(BaseModel):
    id: str


class Membership(BaseModel):
    account: Account


class User(BaseModel):
    # Non-user identities (graph tokens) match no fragment and carry no memberships.
    memberships: List[Membership] = Field(default_factory=list)


class GetOrgMembershipsData(BaseModel):
    me: Optional[User] = None


# ============================================================================
# CreateGraph
# ============================================================================


class ApiKey(BaseModel):
    token: str


class NewService(BaseModel):
    id: str
    apiKeys: List[ApiKey] = Field(default_factory=list)


class CreateGraphData(BaseModel):
    # null when the mutation failed; the reasons are in the response errors.
    newService: Optional[NewService] = None
