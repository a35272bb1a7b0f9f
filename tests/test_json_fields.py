import json
from datetime import datetime

import pytest

from ebee.utils.json_fields import parse_json_field, stringify_json_field


@pytest.mark.parametrize("value", [
    {"total": 12, "byStatus": {"Paid": 3}},
    [1, "two", {"three": 3}],
    {},
    [],
])
def test_plain_objects_and_arrays_survive_storage(value):
    assert parse_json_field(stringify_json_field(value)) == value


def test_parse_plain_text_is_wrapped():
    assert parse_json_field("hello") == {"text": "hello"}


@pytest.mark.parametrize("empty", [None, "", 0])
def test_parse_empty_values_give_empty_object(empty):
    assert parse_json_field(empty) == {}


def test_parse_passes_decoded_values_through():
    value = {"already": "decoded"}
    assert parse_json_field(value) is value


def test_stringify_keeps_valid_json_text():
    assert stringify_json_field('{"a": 1}') == '{"a": 1}'


def test_stringify_wraps_plain_text():
    assert json.loads(stringify_json_field("quarterly notes")) == {"text": "quarterly notes"}


def test_stringify_wraps_scalars():
    assert json.loads(stringify_json_field(42)) == {"value": 42}
    assert json.loads(stringify_json_field(True)) == {"value": True}


def test_stringify_unserializable_object_reports_error():
    stored = stringify_json_field({"when": object()})
    assert json.loads(stored) == {"error": "Failed to stringify object"}


def test_stringify_none_is_json_null():
    assert stringify_json_field(None) == "null"


@pytest.mark.parametrize("value", [{1, 2}, datetime(2026, 1, 1, 9, 30)])
def test_stringify_non_json_values_report_error(value):
    assert json.loads(stringify_json_field(value)) == {"error": "Failed to stringify object"}
