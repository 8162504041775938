"""Centralized GraphQL operation strings for the Apollo cloud API."""

from __future__ import annotations

from enum import Enum


GET_ORG_MEMBERSHIPS_QUERY = """
query GetOrgMemberships {
  me {
    ...on User {
      memberships {
         account {
           id
         }
      }
    }
  }
}
"""

CREATE_GRAPH_QUERY = """
mutation CreateGraph($accountID: ID!, $graphID: ID!) {
  newService(accountId: $accountID, id: $graphID) {
    id
    apiKeys {
      token
    }
  }
}
"""


class Operation(str, Enum):
    """Supported operations, keyed by their GraphQL operation name."""

    GET_ORG_MEMBERSHIPS = "GetOrgMemberships"
    CREATE_GRAPH = "CreateGraph"

    @property
    def text(self) -> str:
        return _OPERATION_TEXT[self]


_OPERATION_TEXT = {
    Operation.GET_ORG_MEMBERSHIPS: GET_ORG_MEMBERSHIPS_QUERY,
    Operation.CREATE_GRAPH: CREATE_GRAPH_QUERY,
}
