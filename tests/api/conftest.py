"""
Fixtures for the live DummyJSON suite.

Points ``api_base_url`` at the real public API. When the service cannot be
reached the whole suite is skipped instead of failing.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from config import ProductionConfig
from shared.live_stack import live_api_url


@pytest.fixture(scope="session")
def api_base_url() -> Generator[str, None, None]:
    """Yield the real API base URL, or skip when it is unreachable."""
    yield from live_api_url(
        base_url_env="LIVE_API_BASE_URL",
        base_url_default=ProductionConfig.API_BASE_URL,
        suite_name="live API",
    )


@pytest.fixture
def request_timeout() -> float | None:
    """Use the production timeout (none unless configured) against the real API."""
    return ProductionConfig.REQUEST_TIMEOUT
