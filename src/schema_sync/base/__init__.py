"""Base classes and shared interfaces."""

from .catalog import BaseCatalogReader, IndexColumnRow, TabColumnRow, TriggerRow
from .connection import BaseConnection, Transaction
from .models import ColumnInfo, IndexInfo, TableInfo
from .naming import contains_name, names_equal
from .schema import TableSchema

__all__ = [
    "BaseConnection",
    "Transaction",
    "BaseCatalogReader",
    "TabColumnRow",
    "TriggerRow",
    "IndexColumnRow",
    "TableSchema",
    "TableInfo",
    "ColumnInfo",
    "IndexInfo",
    "names_equal",
    "contains_name",
]
