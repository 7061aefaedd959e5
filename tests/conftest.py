"""
Shared pytest fixtures for the API helper test suite.

This module contains fixtures that are shared across all test modules.
Each test gets its own client and, where needed, its own login, so no
test can observe another test's tokens or connection state.

Key Concepts Demonstrated:
- Fixture scopes (function vs. session)
- Fixture dependencies and per-directory overrides (``api_base_url``)
- Setup/teardown through a context manager inside a yield fixture
- Explicit injection of configuration and credentials
"""

import os
from collections.abc import Generator

import pytest
from faker import Faker

# Set testing environment before importing config
os.environ.setdefault("API_ENV", "testing")

from api_helper import (
    AuthenticatedContext,
    AuthenticatedContextProvider,
    Credentials,
    DummyJsonEndpoints,
    RequestClient,
    load_credentials,
)
from config import Config, get_config


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Configuration Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app_config() -> type[Config]:
    """
    Provide the configuration class for this test session.

    Returns:
        Config subclass selected by the API_ENV environment variable.
    """
    return get_config()


@pytest.fixture(scope="session")
def credentials(app_config) -> Credentials:
    """
    Load the login credentials once per test session.

    The credentials file is treated as immutable configuration and
    passed explicitly to every provisioning call.

    Returns:
        Credentials read from ``CREDENTIALS_FILE``.
    """
    return load_credentials(app_config.CREDENTIALS_FILE)


@pytest.fixture(scope="session")
def api_base_url(app_config) -> str:
    """
    Provide the base URL of the API under test.

    Test directories override this fixture to point at the local fake
    or at the real service.
    """
    return app_config.API_BASE_URL


@pytest.fixture(scope="session")
def request_timeout(app_config) -> float | None:
    """Provide the per-request timeout, or None for transport defaults."""
    return app_config.REQUEST_TIMEOUT


@pytest.fixture
def endpoints(api_base_url: str) -> DummyJsonEndpoints:
    """Provide absolute URLs for the API under test."""
    return DummyJsonEndpoints(api_base_url)


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_client(request_timeout) -> Generator[RequestClient, None, None]:
    """
    Provide a fresh, unauthenticated RequestClient for one test.

    Yields:
        RequestClient, closed after the test.
    """
    with RequestClient(timeout=request_timeout) as client:
        yield client


@pytest.fixture
def authenticated_api_client(
    credentials: Credentials,
    endpoints: DummyJsonEndpoints,
    request_timeout,
) -> Generator[AuthenticatedContext, None, None]:
    """
    Provide a logged-in client plus its access and refresh tokens.

    A failed login raises ``SetupError`` here, so pytest reports the test
    as an error during setup instead of a failed assertion.

    Yields:
        AuthenticatedContext owned by the requesting test.
    """
    with AuthenticatedContextProvider(
        credentials,
        endpoints.login,
        timeout=request_timeout,
    ) as context:
        yield context


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def json_payload() -> dict:
    """
    Provide a small JSON body for POST/PUT/PATCH requests.

    Returns:
        Dictionary with generated field values.
    """
    return {
        "title": fake.sentence(nb_words=4),
        "quantity": fake.random_int(min=1, max=10),
        "tags": fake.words(nb=3),
    }


@pytest.fixture
def invalid_credentials() -> Credentials:
    """Provide credentials that no user account matches."""
    return Credentials(username=f"nobody_{fake.user_name()}", password=fake.password())
