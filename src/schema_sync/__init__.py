"""Schema reflection and DDL synthesis for relational databases."""

from .base import ColumnInfo, IndexInfo, TableInfo, TableSchema
from .config import SchemaConfig

__version__ = "0.1.0"

SUPPORTED_BACKENDS = ["oracle"]

__all__ = [
    "ColumnInfo",
    "IndexInfo",
    "TableInfo",
    "TableSchema",
    "SchemaConfig",
    "SUPPORTED_BACKENDS",
    "__version__",
]
