"""
Unit tests for response schema validation.

Key SDET Concepts Demonstrated:
- Strict schemas: unexpected fields fail just like missing ones
- Reporting every offending field in one failure
- Boundary cases for enums and formats
"""

from __future__ import annotations

import pytest

from api_helper import FieldError, ValidationError, validate
from api_helper.schemas import (
    CART_SCHEMA,
    CARTS_SCHEMA,
    LOGIN_SCHEMA,
    REFRESH_SCHEMA,
    USER_LIST_SCHEMA,
    collect_errors,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def login_payload() -> dict:
    """A login response exactly matching the strict schema."""
    return {
        "accessToken": "eyJhbGciOi.access",
        "refreshToken": "eyJhbGciOi.refresh",
        "id": 1,
        "username": "emilys",
        "email": "emily.johnson@x.dummyjson.com",
        "firstName": "Emily",
        "lastName": "Johnson",
        "gender": "female",
        "image": "https://dummyjson.com/icon/emilys/128",
    }


class TestLoginSchema:
    def test_valid_payload_is_returned_unchanged(self, login_payload):
        assert validate(login_payload, LOGIN_SCHEMA) is login_payload

    def test_missing_email_is_reported_by_name(self, login_payload):
        # Arrange
        del login_payload["email"]

        # Act
        with pytest.raises(ValidationError) as exc_info:
            validate(login_payload, LOGIN_SCHEMA)

        # Assert
        assert exc_info.value.paths == ["email"]
        assert "email" in str(exc_info.value)
        assert exc_info.value.schema_name == "LoginResponse"

    def test_extra_field_is_rejected(self, login_payload):
        # Arrange
        login_payload["password"] = "leaked"

        # Act / Assert
        with pytest.raises(ValidationError) as exc_info:
            validate(login_payload, LOGIN_SCHEMA)

        assert exc_info.value.errors == [
            FieldError("password", "is not allowed by the strict schema")
        ]

    def test_every_problem_is_listed(self, login_payload):
        # Arrange
        del login_payload["email"]
        del login_payload["image"]
        login_payload["id"] = "1"
        login_payload["gender"] = "other"
        login_payload["role"] = "admin"

        # Act
        errors = collect_errors(login_payload, LOGIN_SCHEMA)

        # Assert
        assert [error.path for error in errors] == ["email", "gender", "id", "image", "role"]

    def test_non_url_image_is_rejected(self, login_payload):
        login_payload["image"] = "not a url"

        with pytest.raises(ValidationError) as exc_info:
            validate(login_payload, LOGIN_SCHEMA)

        assert exc_info.value.paths == ["image"]

    @pytest.mark.parametrize("email", ["emily.johnson", "@", "a@", "not an email@", "a@b", "@x.dummyjson.com"])
    def test_non_email_is_rejected(self, login_payload, email):
        login_payload["email"] = email

        with pytest.raises(ValidationError) as exc_info:
            validate(login_payload, LOGIN_SCHEMA)

        assert exc_info.value.paths == ["email"]

    @pytest.mark.parametrize("gender", ["male", "female"])
    def test_allowed_genders(self, login_payload, gender):
        login_payload["gender"] = gender

        assert validate(login_payload, LOGIN_SCHEMA)

    def test_non_object_payload_fails_at_root(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(["not", "an", "object"], LOGIN_SCHEMA)

        assert exc_info.value.paths == ["<root>"]


class TestOtherSchemas:
    def test_user_list_accepts_empty_list(self):
        assert validate([], USER_LIST_SCHEMA) == []

    def test_user_list_reports_item_index(self, login_payload):
        broken = dict(login_payload)
        del broken["username"]

        with pytest.raises(ValidationError) as exc_info:
            validate([login_payload, broken], USER_LIST_SCHEMA)

        assert exc_info.value.paths == ["1/username"]

    def test_refresh_requires_non_empty_tokens(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"accessToken": "", "refreshToken": None}, REFRESH_SCHEMA)

        assert exc_info.value.paths == ["accessToken", "refreshToken"]

    def test_carts_accepts_empty_array(self):
        assert validate({"carts": []}, CARTS_SCHEMA) == {"carts": []}

    def test_carts_must_be_an_array(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"carts": {}}, CARTS_SCHEMA)

        assert exc_info.value.paths == ["carts"]

    def test_cart_requires_id_and_products(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"userId": 3}, CART_SCHEMA)

        assert exc_info.value.paths == ["id", "products"]


def test_validation_error_is_an_assertion_error(login_payload):
    """pytest reports schema mismatches as failures, not errors."""
    del login_payload["id"]

    with pytest.raises(AssertionError):
        validate(login_payload, LOGIN_SCHEMA)
