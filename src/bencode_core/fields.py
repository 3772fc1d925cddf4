"""Field extraction from decoded dictionaries."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .convert import VALUE, as_key, decoding_error, from_value
from .errors import ConversionError, MissingFieldError
from .values import Value

logger = logging.getLogger(__name__)


def _fields(d) -> Mapping[bytes, Value]:
    if not isinstance(d, Mapping):
        raise decoding_error("dictionary")
    return d


def require(d: Mapping[bytes, Value], key, kind=VALUE):
    """Return field *key* converted to *kind*.

    Raises :class:`MissingFieldError` when the key is absent; conversion
    failures propagate unchanged.
    """
    d = _fields(d)
    key = as_key(key)
    if key not in d:
        raise MissingFieldError(key)
    return from_value(d[key], kind)


def lookup(d: Mapping[bytes, Value], key, kind=VALUE, *, lenient: bool = False):
    """Return field *key* converted to *kind*, or None when absent.

    A present field that does not convert raises :class:`ConversionError`.
    With ``lenient=True`` it is treated as absent instead.
    """
    d = _fields(d)
    key = as_key(key)
    if key not in d:
        return None
    try:
        return from_value(d[key], kind)
    except ConversionError as exc:
        if not lenient:
            raise
        logger.debug("treating malformed optional field %r as absent: %s", key, exc)
        return None
