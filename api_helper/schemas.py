"""
JSON schemas for DummyJSON responses and a validator that reports every
offending field at once.

Schemas are plain JSON Schema (Draft 7) dictionaries checked with
``jsonschema``. "Strict" schemas set ``additionalProperties: false`` so an
unexpected field fails validation just like a missing one.
"""

from __future__ import annotations

from typing import Any

import jsonschema

from .errors import FieldError, ValidationError

LOGIN_SCHEMA: dict[str, Any] = {
    "title": "LoginResponse",
    "type": "object",
    "properties": {
        "accessToken": {"type": "string"},
        "refreshToken": {"type": "string"},
        "id": {"type": "integer"},
        "username": {"type": "string"},
        "email": {
            "type": "string",
            "format": "email",
            # A local part, one @ and a dotted domain.
            "pattern": "^[^@\\s]+@[^@\\s]+\\.[^@\\s]+$",
        },
        "firstName": {"type": "string"},
        "lastName": {"type": "string"},
        "gender": {"enum": ["male", "female"]},
        "image": {"type": "string", "pattern": "^https?://\\S+$"},
    },
    "required": [
        "accessToken",
        "refreshToken",
        "id",
        "username",
        "email",
        "firstName",
        "lastName",
        "gender",
        "image",
    ],
    "additionalProperties": False,
}

# Either a list of login-shaped records or an empty list.
USER_LIST_SCHEMA: dict[str, Any] = {
    "title": "UserList",
    "type": "array",
    "items": LOGIN_SCHEMA,
}

REFRESH_SCHEMA: dict[str, Any] = {
    "title": "RefreshResponse",
    "type": "object",
    "properties": {
        "accessToken": {"type": "string", "minLength": 1},
        "refreshToken": {"type": "string", "minLength": 1},
    },
    "required": ["accessToken", "refreshToken"],
}

CART_SCHEMA: dict[str, Any] = {
    "title": "Cart",
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "products": {"type": "array"},
        "userId": {"type": "integer"},
    },
    "required": ["id", "products"],
}

CARTS_SCHEMA: dict[str, Any] = {
    "title": "CartList",
    "type": "object",
    "properties": {
        "carts": {"type": "array", "items": CART_SCHEMA},
        "total": {"type": "integer"},
        "skip": {"type": "integer"},
        "limit": {"type": "integer"},
    },
    "required": ["carts"],
}


def _join(path: list[Any]) -> str:
    return "/".join(str(part) for part in path) or "<root>"


def _field_errors(error: jsonschema.ValidationError) -> list[FieldError]:
    """
    Turn one jsonschema error into per-field errors.

    ``required`` and ``additionalProperties`` failures are reported at the
    parent object by jsonschema; they are re-pointed at the field itself.
    """
    parent = list(error.absolute_path)
    instance = error.instance

    if error.validator == "required" and isinstance(instance, dict):
        return [
            FieldError(_join(parent + [name]), "is a required property")
            for name in error.validator_value
            if name not in instance
        ]

    if error.validator == "additionalProperties" and isinstance(instance, dict):
        declared = error.schema.get("properties", {})
        return [
            FieldError(_join(parent + [name]), "is not allowed by the strict schema")
            for name in instance
            if name not in declared
        ]

    return [FieldError(_join(parent), error.message)]


def collect_errors(payload: Any, schema: dict[str, Any]) -> list[FieldError]:
    """Return every field error in ``payload``, deduplicated and in path order."""
    validator = jsonschema.Draft7Validator(schema, format_checker=jsonschema.FormatChecker())

    seen: set[FieldError] = set()
    errors: list[FieldError] = []
    for error in validator.iter_errors(payload):
        for field_error in _field_errors(error):
            if field_error not in seen:
                seen.add(field_error)
                errors.append(field_error)
    return sorted(errors, key=lambda field_error: field_error.path)


def validate(payload: Any, schema: dict[str, Any]) -> Any:
    """
    Validate ``payload`` against ``schema`` and return it unchanged.

    Args:
        payload: Parsed JSON value, usually ``ApiResponse.json()``.
        schema: One of the schemas in this module, or any JSON Schema.

    Returns:
        The same payload, now known to match the schema.

    Raises:
        ValidationError: Listing every missing, unexpected or malformed field.
    """
    errors = collect_errors(payload, schema)
    if errors:
        raise ValidationError(schema.get("title", "schema"), errors)
    return payload
