"""Oracle backend."""

from .catalog import OracleCatalogReader
from .connection import OracleConnection, is_duplicate_object_error
from .schema import OracleTableSchema
from .types import AwareDateTime, get_column_type

__all__ = [
    "AwareDateTime",
    "OracleConnection",
    "OracleCatalogReader",
    "OracleTableSchema",
    "get_column_type",
    "is_duplicate_object_error",
]
