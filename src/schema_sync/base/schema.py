"""Abstract schema contract implemented by each dialect."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .models import ColumnInfo, IndexInfo, TableInfo


class TableSchema(ABC):
    """Reads the physical schema and applies missing structure to it.

    Write operations return ``True`` when a statement changed the database
    and ``False`` when there was nothing to do. Missing identifiers raise
    :class:`~schema_sync.exceptions.InvalidArgumentError` before any I/O.
    """

    @property
    @abstractmethod
    def log(self) -> Optional[Callable[[str], None]]:
        """Callback receiving every executed statement."""
        pass

    @log.setter
    @abstractmethod
    def log(self, value: Optional[Callable[[str], None]]) -> None:
        pass

    @abstractmethod
    def get_tables(self) -> list[TableInfo]:
        pass

    @abstractmethod
    def get_table_columns(self, table: str) -> list[ColumnInfo]:
        pass

    @abstractmethod
    def create_table(self, table: TableInfo, columns: list[ColumnInfo]) -> bool:
        pass

    @abstractmethod
    def delete_table(self, table: str) -> bool:
        pass

    @abstractmethod
    def add_column(self, table: str, column: ColumnInfo) -> bool:
        pass

    @abstractmethod
    def delete_column(self, table: str, column: ColumnInfo) -> bool:
        pass

    @abstractmethod
    def alter_column(self, table: str, column: ColumnInfo) -> bool:
        pass

    @abstractmethod
    def add_index(self, table: str, index_name: str, is_unique: bool, columns: list[str]) -> bool:
        pass

    @abstractmethod
    def add_index_model(self, table: str, index: IndexInfo) -> bool:
        pass

    @abstractmethod
    def add_indexes(self, table: str, indexes: list[IndexInfo]) -> bool:
        pass

    @abstractmethod
    def delete_index(self, table: str, index_name: str) -> bool:
        pass

    @abstractmethod
    def get_column_type(self, logical_type: Any, max_length: int = 0, min_length: int = 0) -> Optional[str]:
        pass

    @abstractmethod
    def equal_column(self, left: Optional[ColumnInfo], right: Optional[ColumnInfo]) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the owned connection. Safe to call more than once."""
        pass

    def __enter__(self) -> "TableSchema":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
