"""Encoder: Value -> canonical bytes."""

from __future__ import annotations

from .convert import to_value
from .grammar import format_integer, format_string
from .values import BDict, BInteger, BList, BString, Value


def encode(value: Value) -> bytes:
    """Encode *value* in canonical form.

    Dictionary keys are written in ascending byte order regardless of how
    the dictionary was built.
    """
    out: list[bytes] = []
    _write(value, out)
    return b"".join(out)


def encode_of(obj, kind=None) -> bytes:
    """Convert a native object with ``to_value`` and encode the result."""
    return encode(to_value(obj, kind))


def _write(value: Value, out: list[bytes]) -> None:
    if isinstance(value, BInteger):
        out.append(format_integer(value.value))
    elif isinstance(value, BString):
        out.append(format_string(value.value))
    elif isinstance(value, BList):
        out.append(b"l")
        for item in value.items:
            _write(item, out)
        out.append(b"e")
    elif isinstance(value, BDict):
        out.append(b"d")
        for key, item in sorted(value.entries, key=lambda kv: kv[0]):
            out.append(format_string(key))
            _write(item, out)
        out.append(b"e")
    else:
        raise TypeError(f"cannot encode {type(value).__name__}; convert it with to_value()")
