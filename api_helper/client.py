"""
HTTP request helper used by the API test suites.

``RequestClient`` exposes one method per HTTP verb. Each call takes a fully
qualified URL, merges caller headers over the JSON defaults, appends query
parameters, sends a single request and wraps whatever comes back in an
:class:`~api_helper.responses.ApiResponse`.

The client is deliberately thin:

  * **No implicit auth** -- bearer tokens go in the ``headers`` of every
    call. Cookies set by the server are refused so a login never leaks into
    later requests.
  * **No retries, no backoff, no caching** -- one call, one request.
  * **Status codes are data** -- a 404 comes back as a normal response.
    Only transport failures raise, as :class:`~api_helper.errors.TransportError`.

Key Concepts Demonstrated:
- Wrapping ``requests`` behind a small, test-friendly interface
- Case-insensitive header merging with caller overrides
- Translating library exceptions into a domain exception at the boundary
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Union
from urllib.parse import quote

import requests
from requests.structures import CaseInsensitiveDict

from .errors import TransportError
from .responses import ApiResponse

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool, None]

JSON_HEADERS = {"Content-Type": "application/json"}

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Sentinel distinguishing "no body" from an explicit JSON null.
_NO_BODY = object()


def _query_value(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_url(url: str, query_params: Mapping[str, Scalar] | None = None) -> str:
    """
    Append ``query_params`` to ``url`` as an encoded query string.

    Values are percent-encoded the way ``encodeURIComponent`` does it and
    keep their insertion order. An empty or missing mapping leaves the URL
    untouched.

    Example:
        >>> build_url("https://api.example.com/users", {"page": 1, "limit": 10})
        'https://api.example.com/users?page=1&limit=10'
    """
    if not url:
        raise ValueError("url must be a non-empty absolute URL")
    if not query_params:
        return url
    query = "&".join(
        f"{key}={quote(_query_value(value), safe=_URI_COMPONENT_SAFE)}"
        for key, value in query_params.items()
    )
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def bearer_headers(token: str) -> dict[str, str]:
    """Build an Authorization header carrying a bearer token."""
    return {"Authorization": f"Bearer {token}"}


def merge_headers(
    headers: Mapping[str, str] | None = None, *, has_body: bool = False
) -> dict[str, str]:
    """
    Merge caller headers over the defaults for a request.

    ``Content-Type: application/json`` is added when a body is sent. A
    caller-supplied header with the same name wins, whatever its casing,
    and keeps the caller's spelling.
    """
    merged: CaseInsensitiveDict[str] = CaseInsensitiveDict()
    if has_body:
        merged.update(JSON_HEADERS)
    if headers:
        for name, value in headers.items():
            if name in merged:
                del merged[name]
            merged[name] = value
    return dict(merged.items())


class RequestClient:
    """
    Issue HTTP requests against absolute URLs.

    One ``requests.Session`` backs each client so connections are pooled
    for its lifetime and released by :meth:`close`. The client is also a
    context manager.

    Attributes:
        timeout: Seconds to wait for the server, or ``None`` to leave it to
            the transport.
    """

    def __init__(self, timeout: float | None = None, session: requests.Session | None = None):
        self.timeout = timeout
        self._session = session or requests.Session()
        # Refuse every cookie: auth state must travel in explicit headers.
        self._session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self._closed = False

    def __enter__(self) -> RequestClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<RequestClient {state} at {id(self):#x}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        if self._closed:
            return
        self._session.close()
        self._closed = True
        logger.debug("Closed %r", self)

    # -------------------------------------------------------------------------
    # Verb Methods
    # -------------------------------------------------------------------------

    def get(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        query_params: Mapping[str, Scalar] | None = None,
    ) -> ApiResponse:
        """Send a GET request. GET never carries a body."""
        return self.request("GET", url, headers=headers, query_params=query_params)

    def post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any = _NO_BODY,
        query_params: Mapping[str, Scalar] | None = None,
    ) -> ApiResponse:
        """Send a POST request with an optional JSON body."""
        return self.request("POST", url, headers=headers, body=body, query_params=query_params)

    def put(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any = _NO_BODY,
        query_params: Mapping[str, Scalar] | None = None,
    ) -> ApiResponse:
        """Send a PUT request with an optional JSON body."""
        return self.request("PUT", url, headers=headers, body=body, query_params=query_params)

    def patch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any = _NO_BODY,
        query_params: Mapping[str, Scalar] | None = None,
    ) -> ApiResponse:
        """Send a PATCH request with an optional JSON body."""
        return self.request("PATCH", url, headers=headers, body=body, query_params=query_params)

    def delete(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any = _NO_BODY,
        query_params: Mapping[str, Scalar] | None = None,
    ) -> ApiResponse:
        """Send a DELETE request; the body is optional."""
        return self.request("DELETE", url, headers=headers, body=body, query_params=query_params)

    # -------------------------------------------------------------------------
    # Core
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any = _NO_BODY,
        query_params: Mapping[str, Scalar] | None = None,
    ) -> ApiResponse:
        """
        Build, send and wrap a single HTTP request.

        Args:
            method: HTTP verb.
            url: Absolute URL, without the query string for ``query_params``.
            headers: Extra headers; override the defaults on collision.
            body: JSON-serialisable payload. Dropped for GET.
            query_params: Ordered mapping appended as the query string.

        Returns:
            The wrapped response, whatever its status code.

        Raises:
            TransportError: If no HTTP response was received.
            TypeError: If ``body`` is not JSON-serialisable.
            RuntimeError: If the client has been closed.
        """
        if self._closed:
            raise RuntimeError("RequestClient is closed")

        method = method.upper()
        has_body = body is not _NO_BODY and method != "GET"
        target_url = build_url(url, query_params)
        data = json.dumps(body).encode("utf-8") if has_body else None

        logger.debug("%s %s", method, target_url)
        try:
            response = self._session.request(
                method=method,
                url=target_url,
                headers=merge_headers(headers, has_body=has_body),
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, target_url, exc)
            raise TransportError(method, target_url, str(exc)) from exc

        logger.info("%s %s -> %s", method, target_url, response.status_code)
        return ApiResponse.from_requests(response)
