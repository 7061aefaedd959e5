"""
Exception hierarchy for the API helper.

Only transport-level faults are raised by the request layer. HTTP error
statuses (404, 500, ...) are ordinary results and are left for the caller
to assert on.

Key Concepts Demonstrated:
- A single base class so callers can catch every helper failure at once
- Exception chaining (``raise ... from exc``) to keep the root cause visible
- Separating "could not log in" from "logged in but got wrong data"
"""

from __future__ import annotations

from dataclasses import dataclass


class ApiClientError(Exception):
    """Base class for all errors raised by the API helper."""


class TransportError(ApiClientError):
    """
    A request never produced an HTTP response.

    Raised for DNS failures, refused or reset connections, TLS errors and
    timeouts. The original ``requests`` exception is chained as the cause.
    """

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url} failed: {reason}")


@dataclass(frozen=True)
class FieldError:
    """One non-conforming location in a validated payload."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ValidationError(ApiClientError, AssertionError):
    """
    A response payload does not match its schema.

    Subclasses ``AssertionError`` so pytest reports it as a test failure
    rather than an error. ``errors`` lists every offending field.
    """

    def __init__(self, schema_name: str, errors: list[FieldError]):
        self.schema_name = schema_name
        self.errors = errors
        details = "\n".join(f"  - {error}" for error in errors)
        super().__init__(
            f"Payload does not match {schema_name} ({len(errors)} error(s)):\n{details}"
        )

    @property
    def paths(self) -> list[str]:
        """Return the path of every offending field, once each."""
        return list(dict.fromkeys(error.path for error in self.errors))


class SetupError(ApiClientError):
    """Provisioning an authenticated context failed before the consumer ran."""


class CredentialsError(ApiClientError):
    """The credentials file is missing or malformed."""
