"""
Fixtures for integration tests against the local fake API.

The fake DummyJSON app is served over real HTTP from a background thread,
so these tests exercise ``requests``, sockets and JSON handling end to end
without leaving the machine.
"""

from __future__ import annotations

import socket
from collections.abc import Generator

import pytest

from shared.fake_dummyjson import create_app
from shared.live_stack import serve_app


@pytest.fixture(scope="session")
def fake_api_app():
    """Provide a session-scoped fake DummyJSON Flask app."""
    return create_app()


@pytest.fixture(scope="session")
def api_base_url(fake_api_app) -> Generator[str, None, None]:
    """Serve the fake API for the session and yield its base URL."""
    yield from serve_app(fake_api_app)


@pytest.fixture
def unused_url() -> str:
    """
    Provide a URL on a local port with nothing listening.

    Binding to port 0 and closing again hands back a free port; requests
    to it fail at the transport level.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/unreachable"
