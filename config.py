"""
API test kit configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _optional_float(name: str) -> float | None:
    """Read a float from the environment, or None when unset or blank."""
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


class Config:
    """Base configuration with default settings."""

    API_BASE_URL: str = os.environ.get("API_BASE_URL", "https://dummyjson.com")

    CREDENTIALS_FILE: Path = Path(
        os.environ.get("CREDENTIALS_FILE", str(BASE_DIR / "testdata" / "login_user.json"))
    )

    # No client-imposed timeout unless one is configured; requests then
    # waits as long as the transport allows.
    REQUEST_TIMEOUT: float | None = _optional_float("REQUEST_TIMEOUT")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # Non-routable host so unit tests never leak real HTTP requests.
    API_BASE_URL: str = os.environ.get("TEST_API_BASE_URL", "http://dummyjson.test")

    REQUEST_TIMEOUT: float | None = _optional_float("TEST_REQUEST_TIMEOUT") or 5.0


class ProductionConfig(Config):
    """Configuration for runs against the real public API."""

    DEBUG: bool = False
    TESTING: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": ProductionConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses API_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("API_ENV", "production")
    return config.get(env, config["default"])
