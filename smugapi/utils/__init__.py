"""Utility functions for smugapi."""

from smugapi.utils.jsonutil import (
    get_bool,
    get_float,
    get_int,
    get_list,
    get_object,
    get_property,
    get_string,
)
from smugapi.utils.params import (
    base64_encode,
    is_empty,
    md5_hex,
    read_stream,
    to_param,
)

__all__ = [
    "get_bool",
    "get_float",
    "get_int",
    "get_list",
    "get_object",
    "get_property",
    "get_string",
    "base64_encode",
    "is_empty",
    "md5_hex",
    "read_stream",
    "to_param",
]
