"""GraphQL envelope and response model tests."""

from __future__ import annotations

import json

import pytest

from apollo_cloud.graphql_queries import CREATE_GRAPH_QUERY, GET_ORG_MEMBERSHIPS_QUERY, Operation
from apollo_cloud.models import (
    CreateGraphData,
    CreateGraphVariables,
    GetOrgMembershipsData,
    GraphQLEnvelope,
    GraphQLError,
    GraphQLResponse,
)


def test_envelope_round_trip():
    query = "query Q { a }"
    envelope = GraphQLEnvelope(query=query, variables=json.dumps({"a": 1}))

    decoded = json.loads(envelope.to_body())

    assert decoded["query"] == query
    assert json.loads(decoded["variables"]) == {"a": 1}


def test_envelope_omits_missing_variables():
    body = json.loads(GraphQLEnvelope(query="query Q { a }").to_body())

    assert body == {"query": "query Q { a }"}


def test_envelope_keeps_null_values_inside_variables():
    envelope = GraphQLEnvelope(query="query Q { a }", variables={"a": None, "b": 1})

    assert json.loads(envelope.to_body())["variables"] == {"a": None, "b": 1}


def test_failed_mutation_decodes_null_service():
    response = GraphQLResponse[CreateGraphData].model_validate(
        {"data": {"newService": None}, "errors": [{"message": "Graph id taken"}]}
    )

    assert response.data.newService is None
    assert response.errors[0].message == "Graph id taken"


def test_create_graph_variables_use_wire_names():
    variables = CreateGraphVariables(graph_id="my-graph", account_id="acme")

    assert variables.model_dump(by_alias=True) == {"graphID": "my-graph", "accountID": "acme"}


def test_response_tolerates_missing_fields():
    response = GraphQLResponse[GetOrgMembershipsData].model_validate_json("{}")

    assert response.data is None
    assert response.errors is None


def test_non_user_identity_has_no_memberships():
    response = GraphQLResponse[GetOrgMembershipsData].model_validate_json('{"data": {"me": {}}}')

    assert response.data.me is not None
    assert response.data.me.memberships == []


def test_error_extra_fields_are_ignored():
    payload = {
        "data": None,
        "errors": [{"message": "boom", "locations": [{"line": 1, "column": 2}], "path": ["newService"]}],
    }

    response = GraphQLResponse[CreateGraphData].model_validate(payload)

    assert response.errors[0].message == "boom"
    assert response.errors[0].path == ["newService"]


@pytest.mark.parametrize(
    "error,expected",
    [
        (GraphQLError(message="Unauthorized"), True),
        (GraphQLError(message="You do not have permission to create graphs"), True),
        (GraphQLError(message="Invalid API key"), True),
        (GraphQLError(message="nope", extensions={"code": "UNAUTHENTICATED"}), True),
        (GraphQLError(message="Graph id already taken"), False),
        (GraphQLError(message="Internal server error", extensions={"code": "INTERNAL_SERVER_ERROR"}), False),
    ],
)
def test_user_error_classification(error, expected):
    assert error.is_user_error() is expected


def test_operation_text_lookup():
    assert Operation.GET_ORG_MEMBERSHIPS.text == GET_ORG_MEMBERSHIPS_QUERY
    assert Operation.CREATE_GRAPH.text == CREATE_GRAPH_QUERY
    assert "mutation CreateGraph($accountID: ID!, $graphID: ID!)" in CREATE_GRAPH_QUERY
    assert "newService(accountId: $accountID, id: $graphID)" in CREATE_GRAPH_QUERY
