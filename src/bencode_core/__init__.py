"""bencode_core — canonical Bencode codec with typed conversion helpers."""

import logging

from .values import (
    BDict,
    BInteger,
    BList,
    BString,
    Value,
    is_dict,
    is_integer,
    is_list,
    is_string,
)
from .errors import BencodeError, ConversionError, DecodeError, MissingFieldError
from .convert import (
    BOOL,
    BYTES,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    TEXT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    VALUE,
    Convertible,
    Converter,
    DictOf,
    ListOf,
    converter_for,
    from_value,
    to_value,
)
from .decoder import DEFAULT_MAX_DEPTH, Decoder, decode, decode_as
from .encoder import encode, encode_of
from .assoc import Optional, Required, build_dict, build_dict_asc, dict_assoc, optional, required
from .fields import lookup, require
from .pretty import print_pretty, render_pretty

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BDict",
    "BInteger",
    "BList",
    "BString",
    "Value",
    "is_dict",
    "is_integer",
    "is_list",
    "is_string",
    "BencodeError",
    "ConversionError",
    "DecodeError",
    "MissingFieldError",
    "Converter",
    "Convertible",
    "DictOf",
    "ListOf",
    "VALUE",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "BOOL",
    "BYTES",
    "TEXT",
    "converter_for",
    "from_value",
    "to_value",
    "DEFAULT_MAX_DEPTH",
    "Decoder",
    "decode",
    "decode_as",
    "encode",
    "encode_of",
    "Required",
    "Optional",
    "required",
    "optional",
    "build_dict",
    "build_dict_asc",
    "dict_assoc",
    "require",
    "lookup",
    "render_pretty",
    "print_pretty",
]
