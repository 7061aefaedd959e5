"""Unit tests for the API helper."""
