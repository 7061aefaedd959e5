"""Shared live-server helpers for the integration and live API suites."""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Generator

import pytest
import requests
from flask import Flask
from werkzeug.serving import make_server


def is_api_reachable(url: str, timeout: int = 5) -> bool:
    """Return True when ``url`` answers with any HTTP response."""
    try:
        requests.get(url, timeout=timeout)
    except requests.RequestException:
        return False
    return True


def wait_for_server(url: str, timeout: int = 10, interval: float = 0.1) -> None:
    """Poll ``url`` until it answers or ``timeout`` seconds pass."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_api_reachable(url, timeout=2):
            return
        time.sleep(interval)
    raise RuntimeError(f"Server at {url} not reachable after {timeout}s")


def serve_app(app: Flask, host: str = "127.0.0.1") -> Generator[str, None, None]:
    """
    Serve ``app`` from a background thread and yield its base URL.

    The port is picked by the OS, so parallel workers never collide. The
    server is shut down when the generator is closed.
    """
    server = make_server(host, 0, app, threaded=True)
    base_url = f"http://{host}:{server.server_port}"
    server_thread = threading.Thread(target=server.serve_forever, daemon=True)
    server_thread.start()

    try:
        wait_for_server(f"{base_url}/http/200")
        yield base_url
    finally:
        server.shutdown()
        server_thread.join(timeout=5)


def live_api_url(
    *,
    base_url_env: str,
    base_url_default: str,
    suite_name: str,
) -> Generator[str, None, None]:
    """
    Yield the base URL of the real API, skipping when it is unreachable.

    Priority:
    1. Use explicit base URL from ``base_url_env``.
    2. Fall back to ``base_url_default``.
    """
    base_url = os.getenv(base_url_env) or base_url_default
    if not is_api_reachable(base_url):
        pytest.skip(f"{base_url} is not reachable; set {base_url_env} to run {suite_name} tests")
    yield base_url
