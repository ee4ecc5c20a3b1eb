"""Schema helpers for the qvimeo settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_PER_PAGE, DEFAULT_SCOPES, REQUEST_TIMEOUT_SEC

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "qvimeo/settings.schema.json",
    "type": "object",
    "required": ["schema", "authentication", "api"],
    "properties": {
        "schema": {"const": "qvimeo/settings@1"},
        "authentication": {
            "type": "object",
            "properties": {
                "client_id": {"type": "string"},
                "client_secret": {"type": "string"},
                "access_token": {"type": "string"},
                "redirect_uri": {"type": "string"},
                "scopes": {
                    "type": "array",
                    "items": {"type": "string"},
                },
            },
            "additionalProperties": True,
        },
        "api": {
            "type": "object",
            "properties": {
                "per_page": {"type": "integer", "minimum": 1, "maximum": 100},
                "timeout": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "qvimeo/settings@1",
    "authentication": {
        "client_id": "",
        "client_secret": "",
        "access_token": "",
        "redirect_uri": "",
        "scopes": list(DEFAULT_SCOPES),
    },
    "api": {
        "per_page": DEFAULT_PER_PAGE,
        "timeout": REQUEST_TIMEOUT_SEC,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("authentication", "api")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
