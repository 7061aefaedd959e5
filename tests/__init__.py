"""
Test suite for the DummyJSON API helper.

This package contains:
- unit/: Request building, schemas, provisioning lifecycle (no network)
- integration/: The helper against a local fake API over real HTTP
- api/: The original API suite against the public DummyJSON service
"""
