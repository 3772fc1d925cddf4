"""Human-readable rendering of Values, for diagnostics only."""

from __future__ import annotations

import json
import sys
from typing import IO

from .values import BDict, BInteger, BList, BString, Value


def _fmt_bytes(raw: bytes) -> str:
    """Quoted text when *raw* is printable UTF-8, ``<hex:...>`` otherwise."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return f"<hex:{raw.hex()}>"
    if not text.isprintable():
        return f"<hex:{raw.hex()}>"
    return json.dumps(text, ensure_ascii=False)


def _is_scalar(value: Value) -> bool:
    return isinstance(value, (BInteger, BString))


def _render(value: Value, indent: int, level: int) -> str:
    if isinstance(value, BInteger):
        return str(value.value)
    if isinstance(value, BString):
        return _fmt_bytes(value.value)

    pad = " " * (indent * (level + 1))
    end = " " * (indent * level)

    if isinstance(value, BList):
        if not value.items:
            return "[]"
        if all(_is_scalar(v) for v in value.items):
            return "[" + ", ".join(_render(v, indent, level) for v in value.items) + "]"
        lines = [pad + _render(v, indent, level + 1) for v in value.items]
        return "[\n" + ",\n".join(lines) + "\n" + end + "]"

    if isinstance(value, BDict):
        if not value.entries:
            return "{}"
        lines = [
            f"{pad}{_fmt_bytes(k)}: {_render(v, indent, level + 1)}"
            for k, v in value.entries
        ]
        return "{\n" + ",\n".join(lines) + "\n" + end + "}"

    raise TypeError(f"not a Bencode value: {type(value).__name__}")


def render_pretty(value: Value, indent: int = 2) -> str:
    """Render *value* as an indented, JSON-like tree.

    Example::

        {
          "announce": "http://tracker/announce",
          "info": {
            "length": 42,
            "pieces": <hex:9f1c...>
          }
        }
    """
    return _render(value, indent, 0)


def print_pretty(value: Value, file: IO[str] | None = None) -> None:
    print(render_pretty(value), file=file if file is not None else sys.stdout)
