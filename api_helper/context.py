"""
Authenticated context provisioning.

``AuthenticatedContextProvider`` removes login boilerplate from API tests:
entering it builds a fresh :class:`~api_helper.client.RequestClient`, logs in
once with the supplied credentials and hands back an
:class:`AuthenticatedContext`. Leaving it closes the client, whether the
block finished, failed an assertion or raised.

Lifecycle::

    UNSTARTED -> LOGGING_IN -> READY -> TEARDOWN -> DONE
                     |
                     +-> FAILED -> DONE    (login failed; block never runs)

A failed login raises :class:`~api_helper.errors.SetupError`, so reports can
tell "could not log in" apart from "logged in but got wrong data".

Key Concepts Demonstrated:
- Context-manager based setup/teardown with guaranteed cleanup
- Explicit dependency injection of credentials (no module globals)
- Test isolation: every provider builds its own client and logs in afresh
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .client import JSON_HEADERS, RequestClient, bearer_headers
from .credentials import Credentials
from .errors import SetupError, TransportError
from .responses import ApiResponse

logger = logging.getLogger(__name__)


class ProvisioningState(str, Enum):
    """Lifecycle states of an ``AuthenticatedContextProvider``."""

    UNSTARTED = "unstarted"
    LOGGING_IN = "logging_in"
    READY = "ready"
    TEARDOWN = "teardown"
    FAILED = "failed"
    DONE = "done"


@dataclass(frozen=True)
class AuthenticatedContext:
    """
    A logged-in client plus the tokens from its login response.

    Tokens are copied verbatim from the login payload. They are not
    refreshed or tracked for expiry.

    Attributes:
        client: The client that performed the login.
        access_token: ``accessToken`` from the login response.
        refresh_token: ``refreshToken`` from the login response.
        raw_login_response: The full login response.
    """

    client: RequestClient
    access_token: str
    refresh_token: str
    raw_login_response: ApiResponse

    def auth_headers(self) -> dict[str, str]:
        """Return an ``Authorization: Bearer`` header for the access token."""
        return bearer_headers(self.access_token)


def _mask(token: str) -> str:
    return f"{token[:6]}..." if len(token) > 6 else "***"


class AuthenticatedContextProvider:
    """
    Single-use context manager yielding an :class:`AuthenticatedContext`.

    Args:
        credentials: Username/password used for the login call.
        login_url: Absolute URL of the login endpoint.
        timeout: Passed to the ``RequestClient`` built for this context.
        client_factory: Callable building the client; tests swap in fakes.

    Example:
        with AuthenticatedContextProvider(credentials, endpoints.login) as auth:
            auth.client.get(endpoints.me, headers=auth.auth_headers())
    """

    def __init__(
        self,
        credentials: Credentials,
        login_url: str,
        *,
        timeout: float | None = None,
        client_factory: Callable[..., RequestClient] = RequestClient,
    ):
        self.credentials = credentials
        self.login_url = login_url
        self.timeout = timeout
        self._client_factory = client_factory
        self._client: RequestClient | None = None
        self.state = ProvisioningState.UNSTARTED
        self.history: list[ProvisioningState] = [self.state]

    def _transition(self, state: ProvisioningState) -> None:
        logger.debug("Provisioning %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def __enter__(self) -> AuthenticatedContext:
        if self.state is not ProvisioningState.UNSTARTED:
            raise RuntimeError("AuthenticatedContextProvider can only be entered once")

        self._client = self._client_factory(timeout=self.timeout)
        self._transition(ProvisioningState.LOGGING_IN)
        try:
            context = self._login(self._client)
        except TransportError as exc:
            self._abort()
            raise SetupError(f"Login request to {self.login_url} failed: {exc}") from exc
        except BaseException:
            self._abort()
            raise

        self._transition(ProvisioningState.READY)
        return context

    def __exit__(self, exc_type, exc, tb) -> None:
        self._transition(ProvisioningState.TEARDOWN)
        self._release()
        self._transition(ProvisioningState.DONE)
        if exc_type is not None:
            logger.info("Authenticated block ended with %s", exc_type.__name__)

    def _login(self, client: RequestClient) -> AuthenticatedContext:
        logger.info("Logging in as '%s' via %s", self.credentials.username, self.login_url)
        response = client.post(self.login_url, JSON_HEADERS, self.credentials.as_payload())

        if not response.ok:
            raise SetupError(
                f"Login as '{self.credentials.username}' was rejected "
                f"with status {response.status}: {response.text}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise SetupError(f"Login response from {self.login_url} is not JSON") from exc

        tokens = {}
        for field_name in ("accessToken", "refreshToken"):
            value = payload.get(field_name) if isinstance(payload, dict) else None
            if not isinstance(value, str) or not value:
                raise SetupError(f"Login response has no usable '{field_name}'")
            tokens[field_name] = value

        logger.info("Logged in; access token %s", _mask(tokens["accessToken"]))
        return AuthenticatedContext(
            client=client,
            access_token=tokens["accessToken"],
            refresh_token=tokens["refreshToken"],
            raw_login_response=response,
        )

    def _abort(self) -> None:
        self._transition(ProvisioningState.FAILED)
        self._release()
        self._transition(ProvisioningState.DONE)

    def _release(self) -> None:
        if self._client is not None:
            self._client.close()
