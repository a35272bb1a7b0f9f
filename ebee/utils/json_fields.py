"""
JSON-in-a-TEXT-column helpers for report content and filters.

Rows written before these helpers existed may hold plain text, so both
directions wrap anything that is not JSON instead of failing.
"""
import json
from typing import Any


def parse_json_field(field_value: Any) -> Any:
    """Decode a stored value; plain text comes back as {"text": value}."""
    if not field_value:
        return {}

    if isinstance(field_value, str):
        try:
            return json.loads(field_value)
        except ValueError:
            return {"text": field_value}

    # Already decoded
    return field_value


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return json.dumps({"error": "Failed to stringify object"})


def stringify_json_field(field_value: Any) -> str:
    """Encode a value for storage, always producing valid JSON text."""
    if isinstance(field_value, str):
        try:
            json.loads(field_value)
            return field_value
        except ValueError:
            return json.dumps({"text": field_value})

    if field_value is None or isinstance(field_value, (dict, list)):
        return _dumps(field_value)

    # numbers, booleans
    return _dumps({"value": field_value})
