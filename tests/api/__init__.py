"""Live API tests against the public DummyJSON service."""
