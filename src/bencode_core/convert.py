"""Conversion layer between native Python objects and Bencode values.

Every supported native type has a :class:`Converter` with two operations:

- ``to_value(obj)`` builds a Value and does not fail for objects of the
  type it handles;
- ``from_value(value)`` reads the object back and raises
  :class:`~bencode_core.errors.ConversionError` when the value has the
  wrong kind or content.

Built-in converters cover integers of each width, ``bool``, ``bytes``,
``str`` (UTF-8), lists and byte-keyed dictionaries.  User classes take
part by implementing the :class:`Convertible` protocol.
"""

from __future__ import annotations

import typing
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from .errors import ConversionError
from .values import (
    INT64_MAX,
    INT64_MIN,
    VALUE_TYPES,
    BDict,
    BInteger,
    BList,
    BString,
    Value,
)


def decoding_error(kind: str, detail: str | None = None) -> ConversionError:
    message = f"unable to decode {kind}"
    if detail:
        message = f"{message}: {detail}"
    return ConversionError(message)


def as_key(key) -> bytes:
    """Normalise a dictionary key: bytes as-is, ``str`` as UTF-8."""
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"dictionary keys must be bytes or str, not {type(key).__name__}")


@runtime_checkable
class Convertible(Protocol):
    """Protocol for application classes that convert themselves.

    ``to_bencode`` may return a Value or any object ``to_value`` accepts.
    """

    def to_bencode(self) -> Any: ...

    @classmethod
    def from_bencode(cls, value: Value) -> Any: ...


# ---------------------------------------------------------------------------
# Converter base
# ---------------------------------------------------------------------------

class Converter(ABC):
    name: str = "value"

    @abstractmethod
    def to_value(self, obj) -> Value:
        ...

    @abstractmethod
    def from_value(self, value: Value):
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class _ValueConverter(Converter):
    """Identity on Values; native objects go through ``to_value``."""

    def to_value(self, obj) -> Value:
        return to_value(obj)

    def from_value(self, value: Value) -> Value:
        return value


class KindConverter(Converter):
    """Accepts exactly one Value class and passes it through."""

    def __init__(self, cls: type, name: str) -> None:
        self.cls = cls
        self.name = name

    def to_value(self, obj) -> Value:
        if not isinstance(obj, self.cls):
            raise TypeError(f"expected {self.cls.__name__}, got {type(obj).__name__}")
        return obj

    def from_value(self, value: Value) -> Value:
        if not isinstance(value, self.cls):
            raise decoding_error(self.name)
        return value


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

class IntConverter(Converter):
    """Integer of a fixed width; narrowing is range checked both ways."""

    def __init__(self, name: str, low: int, high: int) -> None:
        self.name = name
        self.low = low
        self.high = high

    def fits(self, number: int) -> bool:
        return self.low <= number <= self.high

    def to_value(self, obj) -> Value:
        if not isinstance(obj, int) or isinstance(obj, bool):
            raise TypeError(f"expected int, got {type(obj).__name__}")
        if not self.fits(obj):
            raise ConversionError(f"{obj} does not fit in {self.name}")
        return BInteger(obj)

    def from_value(self, value: Value) -> int:
        if not isinstance(value, BInteger):
            raise decoding_error("integer")
        if not self.fits(value.value):
            raise decoding_error(self.name, f"{value.value} out of range")
        return value.value


class _BoolConverter(Converter):
    name = "bool"

    def to_value(self, obj) -> Value:
        if not isinstance(obj, bool):
            raise TypeError(f"expected bool, got {type(obj).__name__}")
        return BInteger(1 if obj else 0)

    def from_value(self, value: Value) -> bool:
        number = INT.from_value(value)
        if number == 0:
            return False
        if number == 1:
            return True
        raise decoding_error("bool", f"{number} is neither 0 nor 1")


class _BytesConverter(Converter):
    name = "string"

    def to_value(self, obj) -> Value:
        return BString(obj)

    def from_value(self, value: Value) -> bytes:
        if not isinstance(value, BString):
            raise decoding_error("string")
        return value.value


class _TextConverter(Converter):
    name = "text"

    def to_value(self, obj) -> Value:
        if not isinstance(obj, str):
            raise TypeError(f"expected str, got {type(obj).__name__}")
        return BString(obj.encode("utf-8"))

    def from_value(self, value: Value) -> str:
        raw = BYTES.from_value(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise decoding_error(
                "text", f"invalid UTF-8 at byte {exc.start}"
            ) from None


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class ListOf(Converter):
    """List whose elements all use *item*; the first failing element aborts."""

    name = "list"

    def __init__(self, item: Converter) -> None:
        self.item = item

    def to_value(self, obj) -> Value:
        return BList(tuple(self.item.to_value(x) for x in obj))

    def from_value(self, value: Value) -> list:
        if not isinstance(value, BList):
            raise decoding_error("list")
        return [self.item.from_value(v) for v in value.items]


class DictOf(Converter):
    """Byte-keyed dictionary whose values all use *item*."""

    name = "dictionary"

    def __init__(self, item: Converter) -> None:
        self.item = item

    def to_value(self, obj) -> Value:
        return BDict(tuple((as_key(k), self.item.to_value(v)) for k, v in obj.items()))

    def from_value(self, value: Value) -> dict[bytes, Any]:
        if not isinstance(value, BDict):
            raise decoding_error("dictionary")
        return {k: self.item.from_value(v) for k, v in value.entries}


class ObjectConverter(Converter):
    """Adapts a :class:`Convertible` class."""

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.name = cls.__name__

    def to_value(self, obj) -> Value:
        return to_value(obj.to_bencode())

    def from_value(self, value: Value):
        return self.cls.from_bencode(value)


# ---------------------------------------------------------------------------
# Built-in registry
# ---------------------------------------------------------------------------

VALUE = _ValueConverter()
INT = IntConverter("integer", INT64_MIN, INT64_MAX)
INT8 = IntConverter("int8", -(2 ** 7), 2 ** 7 - 1)
INT16 = IntConverter("int16", -(2 ** 15), 2 ** 15 - 1)
INT32 = IntConverter("int32", -(2 ** 31), 2 ** 31 - 1)
INT64 = IntConverter("int64", INT64_MIN, INT64_MAX)
UINT8 = IntConverter("uint8", 0, 2 ** 8 - 1)
UINT16 = IntConverter("uint16", 0, 2 ** 16 - 1)
UINT32 = IntConverter("uint32", 0, 2 ** 32 - 1)
# the wire only carries signed 64-bit integers
UINT64 = IntConverter("uint64", 0, INT64_MAX)
BOOL = _BoolConverter()
BYTES = _BytesConverter()
TEXT = _TextConverter()

_BUILTINS: dict[Any, Converter] = {
    int: INT,
    bool: BOOL,
    bytes: BYTES,
    str: TEXT,
    BInteger: KindConverter(BInteger, "integer"),
    BString: KindConverter(BString, "string"),
    BList: KindConverter(BList, "list"),
    BDict: KindConverter(BDict, "dictionary"),
}


def converter_for(kind) -> Converter:
    """Resolve the Converter for *kind*.

    *kind* may be a Converter, ``Value``, a Value class, ``int``, ``bool``,
    ``bytes``, ``str``, ``list[T]``, ``dict[bytes, T]`` or a
    :class:`Convertible` class.
    """
    if isinstance(kind, Converter):
        return kind
    if kind == Value:
        return VALUE
    if isinstance(kind, type) and kind in _BUILTINS:
        return _BUILTINS[kind]

    origin = typing.get_origin(kind)
    args = typing.get_args(kind)
    if origin is list and len(args) == 1:
        return ListOf(converter_for(args[0]))
    if origin is dict and len(args) == 2:
        if args[0] is not bytes:
            raise TypeError(f"dictionary keys must be bytes, not {args[0]!r}")
        return DictOf(converter_for(args[1]))

    if isinstance(kind, type) and hasattr(kind, "from_bencode"):
        return ObjectConverter(kind)
    raise TypeError(f"no converter for {kind!r}")


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def to_value(obj, kind=None) -> Value:
    """Convert *obj* to a Value, by *kind* if given, else by its runtime type."""
    if kind is not None:
        return converter_for(kind).to_value(obj)
    if isinstance(obj, VALUE_TYPES):
        return obj
    if isinstance(obj, bool):
        return BOOL.to_value(obj)
    if isinstance(obj, int):
        return INT.to_value(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BYTES.to_value(obj)
    if isinstance(obj, str):
        return TEXT.to_value(obj)
    if isinstance(obj, (list, tuple)):
        return ListOf(VALUE).to_value(obj)
    if isinstance(obj, Mapping):
        return DictOf(VALUE).to_value(obj)
    if isinstance(obj, Convertible):
        return to_value(obj.to_bencode())
    raise TypeError(f"cannot convert {type(obj).__name__} to a Bencode value")


def from_value(value: Value, kind):
    """Convert *value* back to the native type described by *kind*."""
    return converter_for(kind).from_value(value)
