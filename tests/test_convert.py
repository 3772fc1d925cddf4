"""Tests for the conversion layer."""

from dataclasses import dataclass

import pytest

from bencode_core.convert import (
    BOOL,
    BYTES,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    TEXT,
    UINT8,
    UINT64,
    VALUE,
    Convertible,
    DictOf,
    ListOf,
    ObjectConverter,
    converter_for,
    from_value,
    to_value,
)
from bencode_core.errors import ConversionError
from bencode_core.values import BDict, BInteger, BList, BString, Value


@dataclass
class Point:
    x: int
    y: int

    def to_bencode(self):
        return {b"x": self.x, b"y": self.y}

    @classmethod
    def from_bencode(cls, value):
        return cls(from_value(value[b"x"], int), from_value(value[b"y"], int))


# ---------------------------------------------------------------------------
# Native round trip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("obj, kind", [
    (0, int),
    (-123456789, int),
    (True, bool),
    (False, bool),
    (b"\x00raw", bytes),
    ("naïve text", str),
    ([1, 2, 3], list[int]),
    ([["a"], []], list[list[str]]),
    ({b"k": b"v"}, dict[bytes, bytes]),
    ({b"p": [True]}, dict[bytes, list[bool]]),
    (Point(1, -2), Point),
])
def test_native_round_trip(obj, kind):
    assert from_value(to_value(obj, kind), kind) == obj


# ---------------------------------------------------------------------------
# Value identity
# ---------------------------------------------------------------------------

class TestValue:
    def test_identity(self):
        v = BList([BInteger(1)])
        assert to_value(v) is v
        assert from_value(v, Value) is v
        assert VALUE.from_value(v) is v

    def test_value_class_kind(self):
        assert from_value(BString(b"x"), BString) == BString(b"x")
        with pytest.raises(ConversionError, match="unable to decode dictionary"):
            from_value(BList(), BDict)


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

class TestIntegers:
    def test_to_value(self):
        assert to_value(7) == BInteger(7)

    def test_wrong_tag(self):
        with pytest.raises(ConversionError, match="unable to decode integer"):
            from_value(BString(b"7"), int)

    @pytest.mark.parametrize("conv, good, bad", [
        (INT8, -128, 128),
        (INT16, 32767, -32769),
        (INT32, 2 ** 31 - 1, 2 ** 31),
        (UINT8, 255, -1),
        (UINT64, 2 ** 63 - 1, -1),
    ])
    def test_narrowing_checked(self, conv, good, bad):
        assert conv.from_value(BInteger(good)) == good
        with pytest.raises(ConversionError, match="out of range"):
            conv.from_value(BInteger(bad))
        with pytest.raises(ConversionError):
            conv.to_value(bad)

    def test_int64_is_full_range(self):
        assert INT64.from_value(BInteger(-(2 ** 63))) == -(2 ** 63)

    def test_too_large_for_wire(self):
        with pytest.raises(ConversionError):
            to_value(2 ** 64)

    def test_rejects_bool_as_int(self):
        with pytest.raises(TypeError):
            INT.to_value(True)


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

class TestBool:
    def test_to_value(self):
        assert to_value(True) == BInteger(1)
        assert to_value(False) == BInteger(0)

    def test_from_value(self):
        assert BOOL.from_value(BInteger(1)) is True
        assert BOOL.from_value(BInteger(0)) is False

    def test_other_integer_fails(self):
        with pytest.raises(ConversionError, match="unable to decode bool"):
            from_value(BInteger(2), bool)

    def test_non_integer_fails(self):
        with pytest.raises(ConversionError):
            from_value(BString(b"1"), bool)

    def test_to_value_rejects_non_bool(self):
        with pytest.raises(TypeError):
            to_value("no", bool)
        with pytest.raises(TypeError):
            BOOL.to_value(1)


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

class TestStrings:
    def test_bytes(self):
        assert to_value(b"spam") == BString(b"spam")
        assert BYTES.from_value(BString(b"spam")) == b"spam"

    def test_bytes_wrong_tag(self):
        with pytest.raises(ConversionError, match="unable to decode string"):
            from_value(BInteger(1), bytes)

    def test_text_utf8(self):
        assert to_value("é") == BString(b"\xc3\xa9")
        assert TEXT.from_value(BString(b"\xc3\xa9")) == "é"

    def test_text_invalid_utf8(self):
        with pytest.raises(ConversionError, match="invalid UTF-8"):
            from_value(BString(b"\xff\xfe"), str)

    def test_text_rejects_bytes(self):
        with pytest.raises(TypeError):
            TEXT.to_value(b"raw")

    def test_bytes_rejects_int(self):
        with pytest.raises(TypeError):
            to_value(3, bytes)
        with pytest.raises(TypeError):
            BYTES.to_value(3)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class TestContainers:
    def test_list_to_value(self):
        assert to_value([1, b"a"]) == BList([BInteger(1), BString(b"a")])
        assert to_value((1,)) == BList([BInteger(1)])

    def test_list_wrong_tag(self):
        with pytest.raises(ConversionError, match="unable to decode list"):
            from_value(BDict(), list[int])

    def test_list_first_failure_aborts(self):
        value = BList([BInteger(1), BString(b"x"), BInteger(300)])
        with pytest.raises(ConversionError, match="unable to decode integer"):
            ListOf(INT8).from_value(value)

    def test_dict_to_value_str_keys(self):
        assert to_value({"b": 2, "a": 1}) == BDict(
            ((b"a", BInteger(1)), (b"b", BInteger(2)))
        )

    def test_dict_wrong_tag(self):
        with pytest.raises(ConversionError, match="unable to decode dictionary"):
            DictOf(INT).from_value(BList())

    def test_dict_value_failure(self):
        value = BDict(((b"a", BInteger(1)), (b"b", BString(b"x"))))
        with pytest.raises(ConversionError):
            from_value(value, dict[bytes, int])


# ---------------------------------------------------------------------------
# converter_for
# ---------------------------------------------------------------------------

class TestConverterFor:
    def test_builtin_types(self):
        assert converter_for(int) is INT
        assert converter_for(bool) is BOOL
        assert converter_for(bytes) is BYTES
        assert converter_for(str) is TEXT
        assert converter_for(Value) is VALUE

    def test_converter_passthrough(self):
        assert converter_for(INT8) is INT8

    def test_generics(self):
        assert isinstance(converter_for(list[int]), ListOf)
        assert isinstance(converter_for(dict[bytes, str]), DictOf)

    def test_str_keyed_dict_rejected(self):
        with pytest.raises(TypeError):
            converter_for(dict[str, int])

    def test_convertible_class(self):
        assert isinstance(Point(0, 0), Convertible)
        assert isinstance(converter_for(Point), ObjectConverter)

    def test_unsupported(self):
        with pytest.raises(TypeError):
            converter_for(float)
        with pytest.raises(TypeError):
            to_value(1.5)
