"""Decoder: bytes -> Value by recursive descent with one byte of lookahead."""

from __future__ import annotations

import logging

from .convert import from_value
from .errors import DecodeError
from .grammar import read_integer, read_string
from .values import INT64_MAX, INT64_MIN, BDict, BInteger, BList, BString, Value

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

_DIGITS = b"0123456789"
_INT = ord("i")
_LIST = ord("l")
_DICT = ord("d")
_END = ord("e")


class Decoder:
    """Parses a single Bencode value from an in-memory buffer.

    Dispatch peeks at the next byte without consuming it:

    - digit -> byte string
    - ``i`` -> integer
    - ``l`` -> list
    - ``d`` -> dictionary

    With ``strict=True`` non-canonical input is rejected: leading zeros,
    ``i-0e``, and dictionary keys that are out of order or repeated.
    Otherwise such dictionaries are accepted and stored canonically.

    ``max_depth`` bounds list/dict nesting so hostile input cannot exhaust
    the interpreter stack.
    """

    def __init__(
        self,
        data: bytes,
        *,
        strict: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if isinstance(data, str):
            raise TypeError("decode() expects bytes, not str")
        self._data = bytes(data)
        self._index = 0
        self.strict = strict
        self.max_depth = max_depth

    @property
    def offset(self) -> int:
        """Position just past the last byte consumed."""
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._data) - self._index

    def decode(self) -> Value:
        return self._value(0)

    # -- Dispatch -------------------------------------------------------

    def _value(self, depth: int) -> Value:
        if self._index >= len(self._data):
            raise DecodeError("unexpected end of input, expected a value", self._index)

        byte = self._data[self._index]
        if byte in _DIGITS:
            return self._string()
        if byte == _INT:
            return self._integer()
        if byte == _LIST:
            return self._list(depth + 1)
        if byte == _DICT:
            return self._dict(depth + 1)
        raise DecodeError(f"unexpected token {bytes([byte])!r}", self._index)

    def _enter(self, depth: int) -> None:
        if depth > self.max_depth:
            raise DecodeError(f"nesting deeper than {self.max_depth}", self._index)
        self._index += 1  # skip 'l' / 'd'

    def _closing(self, what: str) -> bool:
        """True when the next byte is the ``e`` terminator."""
        if self._index >= len(self._data):
            raise DecodeError(f"unexpected end of input inside {what}", self._index)
        return self._data[self._index] == _END

    # -- Kinds ----------------------------------------------------------

    def _string(self) -> BString:
        raw, self._index = read_string(self._data, self._index, self.strict)
        return BString(raw)

    def _integer(self) -> BInteger:
        start = self._index
        number, self._index = read_integer(self._data, self._index + 1, self.strict)
        if not INT64_MIN <= number <= INT64_MAX:
            raise DecodeError(f"integer {number} does not fit in 64 bits", start)
        return BInteger(number)

    def _list(self, depth: int) -> BList:
        self._enter(depth)
        items: list[Value] = []
        while not self._closing("list"):
            items.append(self._value(depth))
        self._index += 1  # skip 'e'
        return BList(tuple(items))

    def _dict(self, depth: int) -> BDict:
        start = self._index
        self._enter(depth)
        pairs: list[tuple[bytes, Value]] = []
        canonical = True
        while not self._closing("dictionary"):
            key_at = self._index
            if self._data[key_at] not in _DIGITS:
                raise DecodeError("dictionary key must be a string", key_at)
            key, self._index = read_string(self._data, self._index, self.strict)
            if pairs and key <= pairs[-1][0]:
                if self.strict:
                    raise DecodeError(
                        f"dictionary key {key!r} out of order or repeated", key_at
                    )
                canonical = False
            pairs.append((key, self._value(depth)))
        self._index += 1  # skip 'e'

        if not canonical:
            logger.debug("sorting non-canonical dictionary keys at offset %d", start)
        return BDict(tuple(pairs))


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def decode(
    data: bytes,
    *,
    strict: bool = False,
    exact: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Decode the value at the start of *data*.

    Bytes following the first complete value are ignored unless
    ``exact=True``, in which case they are an error.
    """
    decoder = Decoder(data, strict=strict, max_depth=max_depth)
    value = decoder.decode()
    if decoder.remaining:
        if exact:
            raise DecodeError(
                f"{decoder.remaining} trailing bytes after value", decoder.offset
            )
        logger.debug(
            "ignoring %d trailing bytes after offset %d",
            decoder.remaining,
            decoder.offset,
        )
    return value


def decode_as(data: bytes, kind, **options):
    """Decode *data* and convert the result to *kind* (see ``converter_for``)."""
    return from_value(decode(data, **options), kind)
