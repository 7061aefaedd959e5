"""
API helper package.

A thin HTTP client, authenticated-context provisioning and response schemas
for black-box testing of the DummyJSON public API.
"""

import logging

from config import get_config

from .client import JSON_HEADERS, RequestClient, bearer_headers, build_url, merge_headers
from .context import AuthenticatedContext, AuthenticatedContextProvider, ProvisioningState
from .credentials import Credentials, load_credentials
from .endpoints import DummyJsonEndpoints
from .errors import (
    ApiClientError,
    CredentialsError,
    FieldError,
    SetupError,
    TransportError,
    ValidationError,
)
from .responses import ApiResponse, JsonBody, RawBody
from .schemas import validate

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Apply the log format and level, defaulting to the configured LOG_LEVEL."""
    if level is None:
        level = get_config().LOG_LEVEL
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


# Configure logging
configure_logging()

__all__ = [
    "ApiClientError",
    "ApiResponse",
    "AuthenticatedContext",
    "AuthenticatedContextProvider",
    "Credentials",
    "CredentialsError",
    "DummyJsonEndpoints",
    "FieldError",
    "JSON_HEADERS",
    "JsonBody",
    "ProvisioningState",
    "RawBody",
    "RequestClient",
    "SetupError",
    "TransportError",
    "ValidationError",
    "bearer_headers",
    "configure_logging",
    "build_url",
    "load_credentials",
    "merge_headers",
    "validate",
]
