"""
Integration test package for the API helper.

Tests run against a local fake of DummyJSON and demonstrate:
- HTTP verb and header handling on the wire
- Authenticated flows (login, current user, refresh)
- Error statuses returned as data
- Response schema validation
"""
