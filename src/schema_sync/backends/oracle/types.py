"""Mapping from Python types to Oracle column types."""

import ctypes
import datetime
import decimal
import enum
import types
import typing
import uuid
from types import MappingProxyType
from typing import Any, Optional

BLOB_THRESHOLD = 2000
NCLOB_THRESHOLD = 1024
DEFAULT_STRING_LENGTH = 50
DEFAULT_DECIMAL_PRECISION = 18
DEFAULT_DECIMAL_SCALE = 7
MAX_DECIMAL_PRECISION = 38

BLOB_TYPE = "BLOB"
NCLOB_TYPE = "NCLOB"
CHAR_ARRAY_TYPE = "CHAR({0})"


class AwareDateTime(datetime.datetime):
    """Marker for timestamps stored with their time zone offset."""


# Templates take (max_length, min_length) as {0} and {1}.
TYPE_MAP: MappingProxyType = MappingProxyType({
    int: "NUMBER(11, 0)",
    bool: "NUMBER(1,0)",
    float: "BINARY_DOUBLE",
    str: "NVARCHAR2({0})",
    bytes: "RAW({0})",
    bytearray: "RAW({0})",
    decimal.Decimal: "NUMBER({0},{1})",
    datetime.datetime: "TIMESTAMP(6)",
    AwareDateTime: "TIMESTAMP(7) WITH TIME ZONE",
    datetime.date: "DATE",
    datetime.timedelta: "INTERVAL DAY(9) TO SECOND(6)",
    uuid.UUID: "VARCHAR2(50)",
    ctypes.c_bool: "NUMBER(1,0)",
    ctypes.c_byte: "NUMBER(3, 0)",
    ctypes.c_ubyte: "NUMBER(3, 0)",
    ctypes.c_int16: "NUMBER(5, 0)",
    ctypes.c_uint16: "NUMBER(5, 0)",
    ctypes.c_int32: "NUMBER(11, 0)",
    ctypes.c_uint32: "NUMBER(11, 0)",
    ctypes.c_int64: "NUMBER(19, 0)",
    ctypes.c_uint64: "NUMBER(19, 0)",
    ctypes.c_float: "BINARY_FLOAT",
    ctypes.c_double: "BINARY_DOUBLE",
    ctypes.c_char: "CHAR(1)",
    ctypes.c_wchar: "CHAR(1)",
})

_BINARY_TYPES = (bytes, bytearray)
_CHAR_ARRAY_META = type(ctypes.c_char * 1)


def _unwrap_optional(logical_type: Any) -> Any:
    """Return ``T`` for ``Optional[T]`` or ``T | None``."""
    origin = typing.get_origin(logical_type)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(logical_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return logical_type


def _is_char_array(logical_type: Any) -> bool:
    return isinstance(logical_type, _CHAR_ARRAY_META) and getattr(logical_type, "_type_", None) in (
        ctypes.c_char,
        ctypes.c_wchar,
    )


def get_column_type(logical_type: Any, max_length: int = 0, min_length: int = 0) -> Optional[str]:
    """Get the Oracle column type for a Python type.

    Returns None when the type has no mapping. Pure: does not touch the
    database.

    Args:
        logical_type: Python type of the attribute (``str``, ``Decimal``, an
            ``Enum`` subclass, ``Optional[int]``...).
        max_length: Length, or precision for decimals. 0 means unset.
        min_length: Scale for decimals. 0 means unset.
    """
    logical_type = _unwrap_optional(logical_type)
    max_length = max_length or 0
    min_length = min_length or 0
    native = None

    if isinstance(logical_type, enum.EnumMeta):
        logical_type = int
    elif _is_char_array(logical_type):
        native = CHAR_ARRAY_TYPE
        if max_length <= 0:
            max_length = logical_type._length_
    elif logical_type in _BINARY_TYPES:
        if max_length <= 0 or max_length > BLOB_THRESHOLD:
            native = BLOB_TYPE
    elif logical_type is str:
        if max_length > NCLOB_THRESHOLD:
            native = NCLOB_TYPE
        elif max_length <= 0:
            max_length = DEFAULT_STRING_LENGTH
    elif logical_type is decimal.Decimal:
        if max_length == 0 and min_length == 0:
            max_length = DEFAULT_DECIMAL_PRECISION
            min_length = DEFAULT_DECIMAL_SCALE
        if max_length <= 0:
            max_length = MAX_DECIMAL_PRECISION
        if min_length > max_length:
            min_length = max_length - 1

    if native is None:
        try:
            native = TYPE_MAP.get(logical_type)
        except TypeError:
            # unhashable argument
            return None
        if native is None:
            return None

    return native.format(max_length, min_length)
