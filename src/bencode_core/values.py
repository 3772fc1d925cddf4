"""Value model for bencode_core: the four Bencode kinds."""

from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Union

from .errors import ConversionError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ---------------------------------------------------------------------------
# Structural ordering
# ---------------------------------------------------------------------------

class _Ordered:
    """Total order shared by every Value: integers < strings < lists < dicts."""

    __slots__ = ()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, _Ordered):
            return NotImplemented
        return sort_key(self) < sort_key(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, _Ordered):
            return NotImplemented
        return sort_key(self) <= sort_key(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, _Ordered):
            return NotImplemented
        return sort_key(self) > sort_key(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, _Ordered):
            return NotImplemented
        return sort_key(self) >= sort_key(other)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BInteger(_Ordered):
    value: int

    def __post_init__(self) -> None:
        value = operator.index(self.value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise ConversionError(f"integer {value} does not fit in 64 bits")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True, slots=True)
class BString(_Ordered):
    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"BString holds bytes, not {type(self.value).__name__}")
        object.__setattr__(self, "value", bytes(self.value))

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True, slots=True)
class BList(_Ordered):
    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            _check_value(item)
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


@dataclass(frozen=True, slots=True)
class BDict(_Ordered, Mapping):
    """Dictionary keyed by raw bytes.

    Entries are always held in ascending key order with unique keys.  Input
    that is already strictly ascending is stored as given; anything else is
    sorted, and for a repeated key the last entry wins.
    """

    entries: tuple[tuple[bytes, Value], ...] = ()
    _index: dict[bytes, Value] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple((_as_key(k), _check_value(v)) for k, v in self.entries)
        if not is_ascending(k for k, _ in entries):
            entries = tuple(sorted(dict(entries).items(), key=operator.itemgetter(0)))
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_index", dict(entries))

    @classmethod
    def from_mapping(cls, mapping: Mapping[bytes, Value]) -> BDict:
        return cls(tuple(mapping.items()))

    # -- Mapping interface ----------------------------------------------

    def __getitem__(self, key: bytes) -> Value:
        return self._index[key]

    def __iter__(self) -> Iterator[bytes]:
        return (k for k, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index


Value = Union[BInteger, BString, BList, BDict]
VALUE_TYPES = (BInteger, BString, BList, BDict)


def _check_value(value):
    if not isinstance(value, VALUE_TYPES):
        raise TypeError(
            f"not a Bencode value: {type(value).__name__}; convert it with to_value()"
        )
    return value


def _as_key(key) -> bytes:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError(f"dictionary keys must be bytes, not {type(key).__name__}")
    return bytes(key)


def is_ascending(keys: Iterable[bytes]) -> bool:
    """True when *keys* are strictly ascending (hence also unique)."""
    previous: bytes | None = None
    for key in keys:
        if previous is not None and key <= previous:
            return False
        previous = key
    return True


def sort_key(value: Value) -> tuple:
    """Key ordering Values structurally, kind first and payload second."""
    if isinstance(value, BInteger):
        return (0, value.value)
    if isinstance(value, BString):
        return (1, value.value)
    if isinstance(value, BList):
        return (2, tuple(sort_key(v) for v in value.items))
    if isinstance(value, BDict):
        return (3, tuple((k, sort_key(v)) for k, v in value.entries))
    raise TypeError(f"not a Bencode value: {type(value).__name__}")


# ---------------------------------------------------------------------------
# Classification predicates
# ---------------------------------------------------------------------------

def is_integer(value: Value) -> bool:
    return isinstance(value, BInteger)


def is_string(value: Value) -> bool:
    return isinstance(value, BString)


def is_list(value: Value) -> bool:
    return isinstance(value, BList)


def is_dict(value: Value) -> bool:
    return isinstance(value, BDict)
