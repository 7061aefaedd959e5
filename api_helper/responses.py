"""Response types returned by :class:`api_helper.client.RequestClient`."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

import requests


@dataclass(frozen=True)
class JsonBody:
    """A parsed JSON payload whose shape has not been validated yet."""

    value: Any


@dataclass(frozen=True)
class RawBody:
    """A response body that could not be parsed as JSON."""

    text: str


Body = Union[JsonBody, RawBody]


@dataclass(frozen=True)
class ApiResponse:
    """
    Result of one HTTP call.

    Every status code produces an ``ApiResponse``; a 404 is data, not an
    exception. Use :meth:`json` to get the parsed payload and pass it
    through :func:`api_helper.schemas.validate` before relying on its shape.

    Attributes:
        status: HTTP status code.
        url: Final request URL, including the query string.
        headers: Response headers (case-insensitive mapping).
        body: ``JsonBody`` or ``RawBody``.
    """

    status: int
    url: str
    headers: Mapping[str, str] = field(repr=False)
    body: Body

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    @property
    def is_json(self) -> bool:
        return isinstance(self.body, JsonBody)

    @property
    def text(self) -> str:
        """Return the body as text; JSON bodies are re-serialised."""
        if isinstance(self.body, RawBody):
            return self.body.text
        return json.dumps(self.body.value)

    def json(self) -> Any:
        """
        Return the parsed JSON payload.

        Raises:
            ValueError: If the body was not JSON.
        """
        if isinstance(self.body, JsonBody):
            return self.body.value
        raise ValueError(f"Response from {self.url} (status {self.status}) is not JSON")

    @classmethod
    def from_requests(cls, response: requests.Response) -> ApiResponse:
        """Build an ``ApiResponse`` from a ``requests.Response``."""
        body: Body
        try:
            body = JsonBody(response.json())
        except ValueError:
            # requests raises a ValueError subclass for unparseable bodies.
            body = RawBody(response.text)
        return cls(
            status=response.status_code,
            url=response.url,
            headers=response.headers,
            body=body,
        )
