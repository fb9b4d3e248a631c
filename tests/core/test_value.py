"""
Tests for the dynamic Value model.

Tests cover:
- Decoding JSON into the right variant (bool before number, int before double)
- Data URL promotion of strings
- Lossless encode/decode
- Structural equality and hashing
- Strict and non-strict scalar conversions
- Conversion from Python data
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import pytest

from ollamakit import NULL, Array, Binary, Bool, DecodingError, Double, Int, Null, Object, String, Value


class TestDecode:
    """Test Value.decode type resolution."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("null", NULL),
            ("true", Bool(True)),
            ("false", Bool(False)),
            ("42", Int(42)),
            ("-7", Int(-7)),
            ("3.5", Double(3.5)),
            ("1.0", Double(1.0)),
            ('"hello"', String("hello")),
            ("[1, 2.5, \"x\"]", Array([Int(1), Double(2.5), String("x")])),
            ('{"a": 1, "b": [true]}', Object({"a": Int(1), "b": Array([Bool(True)])})),
        ],
    )
    def test_variants(self, text, expected):
        assert Value.decode(text) == expected

    def test_decodes_bytes(self):
        assert Value.decode(b'{"model": "llama3.2"}') == Object({"model": String("llama3.2")})

    def test_data_url_string_becomes_binary(self):
        value = Value.decode('"data:text/plain;base64,SGVsbG8sIFdvcmxkIQ=="')
        assert value == Binary(b"Hello, World!", "text/plain")
        assert value.data_value == ("text/plain", b"Hello, World!")

    def test_plain_string_stays_string(self):
        assert Value.decode('"data is not a url"') == String("data is not a url")

    def test_invalid_data_url_falls_back_to_string(self):
        assert Value.decode('"data:;base64,###"') == String("data:;base64,###")

    def test_invalid_json_raises(self):
        with pytest.raises(DecodingError, match="Invalid JSON"):
            Value.decode("{not json")


class TestEncode:
    """Test serialisation."""

    def test_compact_sorted_output(self):
        value = Object({"b": Int(1), "a": Array([NULL, Bool(False)])})
        assert value.encode() == b'{"a":[null,false],"b":1}'

    def test_equal_objects_encode_identically(self):
        first = Value.from_python({"x": 1, "y": "two"})
        second = Value.from_python({"y": "two", "x": 1})
        assert first.encode() == second.encode()

    def test_binary_encodes_as_data_url(self):
        assert Binary(b"Hello", "image/png").encode() == b'"data:image/png;base64,SGVsbG8="'

    def test_binary_without_mime_defaults_to_text_plain(self):
        assert Binary(b"Hi").to_json() == "data:text/plain;base64,SGk="

    @pytest.mark.parametrize("number", [math.nan, math.inf, -math.inf])
    def test_non_finite_double_is_rejected(self, number):
        with pytest.raises(ValueError, match="non-finite"):
            Object({"temperature": Double(number)}).encode()

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "[-Infinity]"])
    def test_non_json_constants_are_not_decoded(self, text):
        with pytest.raises(DecodingError):
            Value.decode(text)

    @pytest.mark.parametrize(
        "value",
        [
            NULL,
            Bool(True),
            Int(-12),
            Double(0.25),
            String("héllo"),
            Binary(b"\x00\x01\xff", "application/octet-stream"),
            Array([Int(1), Object({"k": String("v")})]),
            Object({"nested": Object({"list": Array([Double(1.5), NULL])})}),
        ],
    )
    def test_round_trip(self, value):
        assert Value.decode(value.encode()) == value


class TestEquality:
    """Test structural equality."""

    def test_int_and_double_differ(self):
        assert Int(1) != Double(1.0)

    def test_bool_and_int_differ(self):
        assert Bool(True) != Int(1)

    def test_object_ignores_key_order(self):
        assert Object({"a": Int(1), "b": Int(2)}) == Object({"b": Int(2), "a": Int(1)})

    def test_hashable(self):
        values = {
            Object({"a": Int(1)}),
            Object({"a": Int(1)}),
            Array([Int(1)]),
            NULL,
            Null(),
        }
        assert len(values) == 3

    def test_binary_mime_is_part_of_identity(self):
        assert Binary(b"x", "text/plain") != Binary(b"x", "image/png")


class TestAccessors:
    """Variant accessors return the payload only for their own variant."""

    def test_int_accessors(self):
        value = Int(5)
        assert value.int_value == 5
        assert value.float_value is None
        assert value.str_value is None
        assert not value.is_null

    def test_null(self):
        assert NULL.is_null
        assert NULL.bool_value is None

    def test_containers(self):
        assert Array([Int(1)]).array_value == (Int(1),)
        assert Object({"a": Int(1)}).object_value == {"a": Int(1)}
        assert Object({"a": Int(1)})["a"] == Int(1)
        assert "a" in Object({"a": Int(1)})

    def test_description(self):
        assert str(NULL) == ""
        assert str(Bool(True)) == "true"
        assert str(Int(3)) == "3"
        assert str(String("plain")) == "plain"
        assert str(Array([Int(1), Int(2)])) == "[1, 2]"


class TestStrictConversions:
    """Strict conversions only accept the exact variant (double widens from int)."""

    def test_to_bool(self):
        assert Bool(True).to_bool() is True
        assert Int(1).to_bool() is None
        assert String("true").to_bool() is None

    def test_to_int(self):
        assert Int(3).to_int() == 3
        assert Double(3.0).to_int() is None

    def test_to_float_widens_int(self):
        assert Int(2).to_float() == 2.0
        assert String("2.0").to_float() is None

    def test_to_str(self):
        assert String("s").to_str() == "s"
        assert Int(1).to_str() is None


class TestNonStrictConversions:
    """Non-strict conversions across variants."""

    @pytest.mark.parametrize("token", ["true", "t", "yes", "y", "on", "1"])
    def test_true_tokens(self, token):
        assert String(token).to_bool(strict=False) is True

    @pytest.mark.parametrize("token", ["false", "f", "no", "n", "off", "0"])
    def test_false_tokens(self, token):
        assert String(token).to_bool(strict=False) is False

    def test_bool_tokens_are_case_sensitive(self):
        assert String("TRUE").to_bool(strict=False) is None
        assert String("maybe").to_bool(strict=False) is None

    def test_numbers_to_bool(self):
        assert Int(0).to_bool(strict=False) is False
        assert Int(1).to_bool(strict=False) is True
        assert Int(2).to_bool(strict=False) is None
        assert Double(1.0).to_bool(strict=False) is True
        assert Double(0.5).to_bool(strict=False) is None

    def test_to_int(self):
        assert Double(4.0).to_int(strict=False) == 4
        assert Double(4.5).to_int(strict=False) is None
        assert Double(math.inf).to_int(strict=False) is None
        assert String("-12").to_int(strict=False) == -12
        assert String("12abc").to_int(strict=False) is None
        assert String("1.5").to_int(strict=False) is None

    def test_to_float(self):
        assert String("1.25").to_float(strict=False) == 1.25
        assert String("1e3").to_float(strict=False) == 1000.0
        assert String("1.2.3").to_float(strict=False) is None

    def test_to_str(self):
        assert Int(7).to_str(strict=False) == "7"
        assert Double(2.5).to_str(strict=False) == "2.5"
        assert Bool(False).to_str(strict=False) == "false"

    @pytest.mark.parametrize("value", [NULL, Array([Int(1)]), Object({"a": Int(1)})])
    def test_containers_never_convert(self, value):
        assert value.to_bool(strict=False) is None
        assert value.to_int(strict=False) is None
        assert value.to_float(strict=False) is None
        assert value.to_str(strict=False) is None


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: float


class TestFromPython:
    """Test Value.from_python."""

    def test_scalars(self):
        assert Value.from_python(None) == NULL
        assert Value.from_python(True) == Bool(True)
        assert Value.from_python(1) == Int(1)
        assert Value.from_python(1.5) == Double(1.5)
        assert Value.from_python("s") == String("s")
        assert Value.from_python(b"raw") == Binary(b"raw")

    def test_strings_are_not_promoted(self):
        assert Value.from_python("data:,hello") == String("data:,hello")

    def test_enum_dataclass_and_containers(self):
        value = Value.from_python({"color": Color.RED, "point": Point(1, 2.0), "items": (1, 2)})
        assert value == Object(
            {
                "color": String("red"),
                "point": Object({"x": Int(1), "y": Double(2.0)}),
                "items": Array([Int(1), Int(2)]),
            }
        )

    def test_to_python_round_trip(self):
        data = {"a": [1, 2.5, None, True], "b": {"c": "d"}}
        assert Value.from_python(data).to_python() == data

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            Value.from_python(object())

    def test_non_string_keys_raise(self):
        with pytest.raises(TypeError):
            Value.from_python({1: "one"})
