"""Grammar primitives shared by the decoder and the encoder.

::

    STR   ::= NUM ":" <NUM raw bytes>
    SNUM  ::= "-" NUM | NUM
    NUM   ::= 1*DIGIT
"""

from __future__ import annotations

from .errors import DecodeError

_DIGITS = b"0123456789"
_MINUS = ord("-")
_COLON = ord(":")
_END = ord("e")


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _read_digits(data: bytes, pos: int, strict: bool) -> tuple[int, int]:
    """Read ``1*DIGIT`` starting at *pos*; return (number, next position)."""
    start = pos
    while pos < len(data) and data[pos] in _DIGITS:
        pos += 1
    if pos == start:
        if pos >= len(data):
            raise DecodeError("unexpected end of input, expected digit", pos)
        raise DecodeError(f"expected digit, got {bytes(data[pos:pos + 1])!r}", pos)
    if strict and data[start] == ord("0") and pos - start > 1:
        raise DecodeError("leading zero in number", start)
    try:
        return int(data[start:pos]), pos
    except ValueError:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise DecodeError("number too long", start) from None


def _expect(data: bytes, pos: int, byte: int) -> int:
    if pos >= len(data):
        raise DecodeError(f"unexpected end of input, expected {chr(byte)!r}", pos)
    if data[pos] != byte:
        raise DecodeError(
            f"expected {chr(byte)!r}, got {bytes(data[pos:pos + 1])!r}", pos
        )
    return pos + 1


def read_length(data: bytes, pos: int, strict: bool = False) -> tuple[int, int]:
    """Read a string length prefix ``NUM ":"``; return (length, next position)."""
    length, pos = _read_digits(data, pos, strict)
    return length, _expect(data, pos, _COLON)


def read_string(data: bytes, pos: int, strict: bool = False) -> tuple[bytes, int]:
    """Read a whole ``STR`` token; return (raw bytes, next position)."""
    length, pos = read_length(data, pos, strict)
    end = pos + length
    if end > len(data):
        raise DecodeError(
            f"truncated string: expected {length} bytes, {len(data) - pos} available",
            pos,
        )
    return bytes(data[pos:end]), end


def read_integer(data: bytes, pos: int, strict: bool = False) -> tuple[int, int]:
    """Read ``SNUM "e"`` (the leading ``i`` already consumed)."""
    start = pos
    negative = pos < len(data) and data[pos] == _MINUS
    if negative:
        pos += 1
    number, pos = _read_digits(data, pos, strict)
    if strict and negative and number == 0:
        raise DecodeError("negative zero", start)
    return (-number if negative else number), _expect(data, pos, _END)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def format_integer(number: int) -> bytes:
    return b"i%de" % number


def format_string(raw: bytes) -> bytes:
    return b"%d:%s" % (len(raw), raw)
