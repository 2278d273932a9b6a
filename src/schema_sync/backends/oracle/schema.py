"""Oracle implementation of the table schema contract."""

import logging
from typing import Any, Callable, Optional

from ...base.catalog import BaseCatalogReader
from ...base.connection import BaseConnection
from ...base.models import ColumnInfo, IndexInfo, TableInfo
from ...base.naming import names_equal
from ...base.schema import TableSchema
from ...config import SchemaConfig
from ...exceptions import ConnectionError, InvalidArgumentError
from . import ddl
from .autoincrement import AutoIncrementEmulator
from .catalog import OracleCatalogReader, build_column_infos
from .connection import OracleConnection
from .types import get_column_type

logger = logging.getLogger(__name__)

LENGTH_COMPARED_TYPES = ("NCHAR", "NVARCHAR", "NVARCHAR2")
PRECISION_COMPARED_TYPES = ("DECIMAL", "NUMBER")


def _require(value: Any, param: str) -> None:
    if not value:
        raise InvalidArgumentError(param)


def _require_not_none(value: Any, param: str) -> None:
    if value is None:
        raise InvalidArgumentError(param)


class OracleTableSchema(TableSchema):
    """Reads and extends the tables of one Oracle schema owner.

    Every write checks the catalog first and only issues DDL for objects
    that are missing. Multi-statement writes run inside one transaction
    scope; since Oracle commits DDL implicitly, the scope undoes created
    objects with compensating DROP statements when it is not committed.
    """

    def __init__(
        self,
        connection: BaseConnection,
        owner: Optional[str] = None,
        catalog: Optional[BaseCatalogReader] = None,
    ):
        self._connection: Optional[BaseConnection] = connection
        self.owner = (owner or connection.config.resolved_owner).upper()
        self._catalog = catalog or OracleCatalogReader(connection)
        self.auto_increment = AutoIncrementEmulator(connection, self._catalog, self.owner)

    @classmethod
    def from_config(cls, config: SchemaConfig) -> "OracleTableSchema":
        """Connect with ``config`` and return a schema owning the connection."""
        config.validate()
        connection = OracleConnection(config)
        connection.connect()
        return cls(connection)

    @property
    def connection(self) -> BaseConnection:
        if self._connection is None:
            raise ConnectionError("Schema has been closed")
        return self._connection

    @property
    def catalog(self) -> BaseCatalogReader:
        if self._connection is None:
            raise ConnectionError("Schema has been closed")
        return self._catalog

    @property
    def log(self) -> Optional[Callable[[str], None]]:
        return self.connection.log

    @log.setter
    def log(self, value: Optional[Callable[[str], None]]) -> None:
        self.connection.log = value

    def get_tables(self) -> list[TableInfo]:
        return self.catalog.list_tables(self.owner)

    def get_table_columns(self, table: str) -> list[ColumnInfo]:
        """Get the physical columns of a table in ordinal order."""
        _require(table, "table")
        rows = self.catalog.list_columns(self.owner, table)
        triggers = self.catalog.list_auto_increment_triggers(self.owner, table)
        key_columns = self.catalog.list_primary_key_columns(self.owner, table)
        index_rows = self.catalog.list_index_columns(self.owner, table)
        sequences = self.catalog.list_sequences(self.owner)
        return build_column_infos(table, rows, triggers, key_columns, index_rows, sequences)

    def create_table(self, table: TableInfo, columns: list[ColumnInfo]) -> bool:
        """Create a table with its primary key, auto-increment columns and column indexes.

        Returns False without touching the database when ``columns`` is empty.
        """
        _require(table and table.name, "table")
        _require_not_none(columns, "columns")
        if not columns:
            return False

        sql = ddl.build_create_table(table.name, columns)
        indexes = [
            index if index.column_name else IndexInfo(index.name, column.name, index.is_unique)
            for column in columns
            for index in column.indexes
        ]

        with self.connection.begin_transaction() as tx:
            count = self.connection.execute_non_query(sql)
            tx.on_rollback(ddl.build_drop_table(table.name, purge=True))
            logger.info(f"Created table {table.name}")

            for column in columns:
                if column.is_auto_increment:
                    self.auto_increment.ensure(table.name, column.name, tx)

            if indexes:
                self.add_indexes(table.name, indexes)

            tx.commit()

        return count != 0

    def delete_table(self, table: str) -> bool:
        """Drop a table and the sequences behind its auto-increment columns.

        The table is dropped before its sequences.
        """
        _require(table, "table")
        if not self.catalog.table_exists(self.owner, table):
            return False

        columns = self.get_table_columns(table)
        with self.connection.begin_transaction() as tx:
            count = self.connection.execute_non_query(ddl.build_drop_table(table))
            logger.info(f"Dropped table {table}")
            for column in columns:
                if column.is_auto_increment:
                    self.auto_increment.remove(table, column.name)
            tx.commit()

        return count != 0

    def add_column(self, table: str, column: ColumnInfo) -> bool:
        _require(table, "table")
        _require_not_none(column, "column")

        with self.connection.begin_transaction() as tx:
            count = self.connection.execute_non_query(ddl.build_add_column(table, column))
            tx.on_rollback(ddl.build_drop_column(table, column.name))
            logger.info(f"Added column {table}.{column.name}")
            if column.is_auto_increment:
                self.auto_increment.ensure(table, column.name, tx)
            tx.commit()

        return count != 0

    def delete_column(self, table: str, column: ColumnInfo) -> bool:
        """Drop a column together with its indexes and auto-increment objects."""
        _require(table, "table")
        _require_not_none(column, "column")
        if not self.catalog.column_exists(self.owner, table, column.name):
            return False

        with self.connection.begin_transaction() as tx:
            for index in column.indexes:
                if index.name and self.catalog.index_exists(self.owner, table, index.name):
                    self.connection.execute_non_query(ddl.build_drop_index(index.name))
            if column.is_auto_increment:
                self.auto_increment.remove(table, column.name)
            count = self.connection.execute_non_query(ddl.build_drop_column(table, column.name))
            logger.info(f"Dropped column {table}.{column.name}")
            tx.commit()

        return count != 0

    def alter_column(self, table: str, column: ColumnInfo) -> bool:
        """Change a column's type and nullability to match ``column``."""
        _require(table, "table")
        _require_not_none(column, "column")
        current = next(
            (c for c in self.get_table_columns(table) if names_equal(c.name, column.name)),
            None,
        )
        if current is None:
            return False

        include_nullability = current.is_nullable != column.is_nullable
        with self.connection.begin_transaction() as tx:
            count = self.connection.execute_non_query(
                ddl.build_modify_column(table, column, include_nullability)
            )
            if column.is_auto_increment:
                self.auto_increment.ensure(table, column.name, tx)
            tx.commit()

        return count != 0

    def add_index(self, table: str, index_name: str, is_unique: bool, columns: list[str]) -> bool:
        """Create an index over ``columns`` unless one with that name exists."""
        _require(table, "table")
        _require_not_none(columns, "columns")
        if not columns:
            return False
        _require(index_name, "index_name")

        if self.catalog.index_exists(self.owner, table, index_name):
            logger.debug(f"Index {index_name} already exists on {table}")
            return False

        count = self.connection.execute_non_query(
            ddl.build_create_index(table, index_name, is_unique, columns)
        )
        logger.info(f"Created index {index_name} on {table}")
        return count != 0

    def add_index_model(self, table: str, index: IndexInfo) -> bool:
        """Create a single-column index; incomplete models are ignored."""
        _require(table, "table")
        _require_not_none(index, "index")
        if not index.name or not index.column_name:
            return False
        return self.add_index(table, index.name, index.is_unique, [index.column_name])

    def add_indexes(self, table: str, indexes: list[IndexInfo]) -> bool:
        """Create indexes from per-column entries grouped by index name.

        Entries without a name or column are dropped. A group is unique when
        any of its entries is. Returns True if any index was created.
        """
        _require(table, "table")
        _require_not_none(indexes, "indexes")

        groups: dict[str, tuple[str, bool, list[str]]] = {}
        for index in indexes:
            if not index.name or not index.column_name:
                continue
            key = index.name.casefold()
            name, is_unique, columns = groups.get(key, (index.name, False, []))
            columns.append(index.column_name)
            groups[key] = (name, is_unique or index.is_unique, columns)

        created = False
        for name, is_unique, columns in groups.values():
            created = self.add_index(table, name, is_unique, columns) or created
        return created

    def delete_index(self, table: str, index_name: str) -> bool:
        _require(table, "table")
        if not index_name:
            return False
        if not self.catalog.index_exists(self.owner, table, index_name):
            return False

        count = self.connection.execute_non_query(ddl.build_drop_index(index_name))
        logger.info(f"Dropped index {index_name}")
        return count != 0

    def get_column_type(self, logical_type: Any, max_length: int = 0, min_length: int = 0) -> Optional[str]:
        return get_column_type(logical_type, max_length, min_length)

    def equal_column(self, left: Optional[ColumnInfo], right: Optional[ColumnInfo]) -> bool:
        """Compare two column definitions structurally.

        Base type names must match. Length is compared for national
        character types; precision and scale for fixed-point types, which
        only differ when both do.
        """
        if left is None or right is None:
            return True

        left_type = left.base_type.upper()
        if left_type != right.base_type.upper():
            return False
        if left_type in LENGTH_COMPARED_TYPES and left.max_length != right.max_length:
            return False
        if (
            left_type in PRECISION_COMPARED_TYPES
            and left.max_length != right.max_length
            and left.min_length != right.min_length
        ):
            return False
        return True

    def close(self) -> None:
        if self._connection is not None:
            self._connection.disconnect()
            self._connection = None
