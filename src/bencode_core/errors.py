"""Exceptions raised by bencode_core."""

from __future__ import annotations


class BencodeError(ValueError):
    """Base class for every descriptive failure reported by the codec."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(BencodeError):
    """Malformed input: bad length prefix, missing terminator, truncation..."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)
        self.offset = offset


class ConversionError(BencodeError):
    """A Value does not have the shape the requested native type expects."""


class MissingFieldError(ConversionError):
    def __init__(self, key: bytes) -> None:
        super().__init__(f"required field '{_show_key(key)}' not found")
        self.key = key


def _show_key(key: bytes) -> str:
    return key.decode("utf-8", errors="backslashreplace")
