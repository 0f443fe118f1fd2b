"""Tests for hand-built JSON fragments and callback sanitizing."""
import json
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum, IntEnum

import pytest

from classic_api.json_escape import escape_callback_name, escape_json, format_date


def test_null_and_scalars():
    assert escape_json(None) == "null"
    assert escape_json(42) == "42"
    assert escape_json(123456789) == "123456789"
    assert escape_json(3.14) == "3.14"
    assert escape_json(2.71828) == "2.71828"
    assert escape_json(True) == "true"
    assert escape_json(False) == "false"
    assert escape_json(Decimal("1.50")) == "1.50"


def test_non_finite_floats_become_null():
    assert escape_json(float("nan")) == "null"
    assert escape_json(float("inf")) == "null"


def test_strings():
    assert escape_json("test string") == '"test string"'
    assert escape_json('test "quoted" string') == '"test \\"quoted\\" string"'
    assert escape_json("test\nstring\r\nwith\nnewlines") == '"test\\nstring\\r\\nwith\\nnewlines"'
    assert escape_json("test\\path\\file") == '"test\\\\path\\\\file"'
    assert escape_json("test\ttab") == '"test\\ttab"'
    assert escape_json('a"b\nc\\d') == '"a\\"b\\nc\\\\d"'


def test_non_ascii_is_not_escaped():
    assert escape_json("テスト文字列") == '"テスト文字列"'
    assert escape_json("テスト") == '"テスト"'


def test_sequences():
    assert escape_json(["test1", "test2", "test3"]) == '["test1","test2","test3"]'
    assert escape_json(("item1", "item2")) == '["item1","item2"]'
    assert escape_json([]) == "[]"
    assert escape_json(()) == "[]"
    assert escape_json(["text", 42, True, None]) == '["text",42,true,null]'


def test_mappings():
    assert escape_json({}) == "{}"
    result = escape_json({"key1": "value1", "key2": None})
    assert result.startswith("{") and result.endswith("}")
    assert '"key1":"value1"' in result
    assert '"key2":null' in result


def test_nested_structure():
    value = {
        "inner_map": {"nested_string": "value", "nested_number": 100},
        "simple_array": [1, 2, 3],
    }
    result = escape_json(value)
    assert '"inner_map":{' in result
    assert '"nested_string":"value"' in result
    assert '"nested_number":100' in result
    assert '"simple_array":[1,2,3]' in result


def test_non_string_keys_are_quoted():
    assert escape_json({1: "a"}) == '{"1":"a"}'


def test_round_trip_through_json_parser():
    value = {
        "s": 'a"b\\c\n\u0001テスト',
        "i": -7,
        "f": 0.25,
        "b": False,
        "n": None,
        "list": [1, [2, {"x": "y"}], []],
        "map": {"empty": {}},
    }
    assert json.loads(escape_json(value)) == value


def test_dates():
    utc = datetime(2022, 1, 21, 12, 0, 0, tzinfo=timezone.utc)
    assert escape_json(utc) == '"2022-01-21T12:00:00.000Z"'
    tokyo = datetime(2022, 1, 21, 21, 0, 0, 123456, tzinfo=timezone(timedelta(hours=9)))
    assert escape_json(tokyo) == '"2022-01-21T21:00:00.123+09:00"'
    assert format_date(datetime(2022, 1, 21, 6, 30, tzinfo=timezone(timedelta(hours=-5, minutes=-30)))) == (
        "2022-01-21T06:30:00.000-05:30"
    )
    assert escape_json(date(2022, 1, 21)) == '"2022-01-21T00:00:00.000Z"'
    # naive values are taken as UTC
    assert escape_json(datetime(2022, 1, 21, 12, 0)) == '"2022-01-21T12:00:00.000Z"'


def test_unknown_objects_fall_back_to_quoted_str():
    class Thing:
        def __str__(self):
            return 'thing "1"'

    assert escape_json(Thing()) == '"thing \\"1\\""'
    assert escape_json({1, 2}).startswith('"')


def test_broken_str_still_encodes():
    class Broken:
        def __str__(self):
            raise RuntimeError("no")

    assert escape_json(Broken()).startswith('"<')


@pytest.mark.parametrize(
    "name,expected",
    [
        ("myCallback123", "/**/myCallback123"),
        ("my<script>x</script>", "/**/myscriptx"),
        ("my<script>alert('xss')</script>Callback", "/**/myscriptalertxssscriptCallback"),
        ("my$Callback_123.test", "/**/my$Callback_123.test"),
        ("", "/**/"),
        ("callback()", "/**/callback"),
        ("callback[0]", "/**/callback0"),
    ],
)
def test_escape_callback_name(name, expected):
    assert escape_callback_name(name) == expected


def test_int_and_float_subclasses_use_plain_numbers():
    class Code(int):
        def __str__(self):
            return "code-7"

    class Level(float, Enum):
        HIGH = 0.5

    class Priority(IntEnum):
        URGENT = 2

    assert escape_json(Code(7)) == "7"
    assert escape_json(Level.HIGH) == "0.5"
    assert escape_json(Priority.URGENT) == "2"
    value = {"c": Code(7), "l": Level.HIGH, "p": [Priority.URGENT]}
    assert json.loads(escape_json(value)) == {"c": 7, "l": 0.5, "p": [2]}
