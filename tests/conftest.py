"""Test configuration for pytest."""

import os

import pytest


# ============================================================================
# Test-Only Configuration (NEVER used in production code)
# ============================================================================

APOLLO_TEST_KEY = os.getenv("APOLLO_TEST_KEY", "")


@pytest.fixture(scope="session")
def live_client():
    """Provide a client against the real endpoint.

    Raises:
        pytest.skip: If APOLLO_TEST_KEY environment variable not set
    """
    if not APOLLO_TEST_KEY:
        pytest.skip("APOLLO_TEST_KEY environment variable not set")

    from apollo_cloud import ApolloCloudClient, ClientConfig, DEFAULT_ENDPOINT

    endpoint = os.getenv("APOLLO_API_ENDPOINT") or DEFAULT_ENDPOINT
    client = ApolloCloudClient.from_config(ClientConfig(endpoint_url=endpoint, api_key=APOLLO_TEST_KEY))
    yield client
    client.close()


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")
