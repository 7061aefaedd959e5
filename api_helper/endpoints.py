"""URL catalogue for the DummyJSON public test API."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

DEFAULT_BASE_URL = "https://dummyjson.com"


@dataclass(frozen=True)
class DummyJsonEndpoints:
    """
    Build absolute URLs for the endpoints the suites exercise.

    Example:
        >>> DummyJsonEndpoints("https://dummyjson.com").cart(1)
        'https://dummyjson.com/carts/1'
    """

    base_url: str = DEFAULT_BASE_URL

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @property
    def login(self) -> str:
        return self._url("/auth/login")

    @property
    def me(self) -> str:
        return self._url("/auth/me")

    @property
    def refresh(self) -> str:
        return self._url("/auth/refresh")

    @property
    def carts(self) -> str:
        return self._url("/carts")

    def cart(self, cart_id: int) -> str:
        return self._url(f"/carts/{cart_id}")

    def user_carts(self, user_id: int) -> str:
        return self._url(f"/carts/user/{user_id}")

    def http_status(self, status: int, message: str = "") -> str:
        """URL that answers with ``status`` and echoes ``message``."""
        path = f"/http/{status}"
        if message:
            path = f"{path}/{quote(message, safe='')}"
        return self._url(path)
