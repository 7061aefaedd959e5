"""Test support shared across suites: fake API and server helpers."""
