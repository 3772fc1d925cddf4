"""Dictionary assembly from named required/optional entries.

Usage::

    info = build_dict([
        required("name", "ubuntu.iso"),
        required("length", 3_654_957_056),
        optional("comment", maybe_comment),   # dropped when None
    ])
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .convert import as_key, to_value
from .errors import BencodeError
from .values import BDict, Value, is_ascending


@dataclass(frozen=True)
class Required:
    key: bytes
    value: Value


@dataclass(frozen=True)
class Optional:
    key: bytes
    value: Value | None


Assoc = Required | Optional


def required(key, value, kind=None) -> Required:
    return Required(as_key(key), to_value(value, kind))


def optional(key, value, kind=None) -> Optional:
    """Entry written only when *value* is not None."""
    if value is None:
        return Optional(as_key(key), None)
    return Optional(as_key(key), to_value(value, kind))


def _present(entries: Iterable[Assoc]) -> list[tuple[bytes, Value]]:
    return [(e.key, e.value) for e in entries if e.value is not None]


def build_dict(entries: Iterable[Assoc]) -> BDict:
    """Build a dictionary from entries in any order.

    Absent optionals are skipped; for a repeated key the last entry wins.
    """
    return BDict(tuple(_present(entries)))


def build_dict_asc(entries: Iterable[Assoc]) -> BDict:
    """Build a dictionary from entries whose keys are strictly ascending.

    Nothing is sorted.  The ordering is checked in one pass and a caller
    that breaks it gets a :class:`BencodeError` instead of a silently
    reordered dictionary.
    """
    pairs = _present(entries)
    if not is_ascending(k for k, _ in pairs):
        raise BencodeError("build_dict_asc: keys are not strictly ascending")
    return BDict(tuple(pairs))


def dict_assoc(pairs: Iterable[tuple[bytes, object]]) -> BDict:
    """Build a dictionary from plain ``(key, value)`` pairs."""
    return BDict(tuple((as_key(k), to_value(v)) for k, v in pairs))
