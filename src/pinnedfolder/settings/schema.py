"""Schema helpers for the panel settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import SETTINGS_SCHEMA_ID

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "pinnedfolder/settings.schema.json",
    "type": "object",
    "required": ["schema", "ui"],
    "properties": {
        "schema": {"const": SETTINGS_SCHEMA_ID},
        "last_folder": {"type": ["string", "null"]},
        "last_selected_id": {"type": ["string", "null"]},
        "ui": {
            "type": "object",
            "properties": {
                "include_hidden": {"type": "boolean"},
                "window_width": {"type": "integer", "minimum": 120},
                "window_height": {"type": "integer", "minimum": 80},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": SETTINGS_SCHEMA_ID,
    "last_folder": None,
    "last_selected_id": None,
    "ui": {
        "include_hidden": False,
        "window_width": 320,
        "window_height": 480,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def _normalise_optional_string(value: Any) -> Any:
    # Both values are opaque to the panel; empty strings mean "unset".
    # Anything that is neither a string nor a path is left for the schema.
    if value is None or value == "":
        return None
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return value


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "ui" and isinstance(value, dict):
                target = merged.setdefault("ui", {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            if key in {"last_folder", "last_selected_id"}:
                merged[key] = _normalise_optional_string(value)
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
