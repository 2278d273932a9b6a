"""Oracle system catalog queries."""

from typing import Any, Iterable

from ...base.catalog import BaseCatalogReader, IndexColumnRow, TabColumnRow, TriggerRow
from ...base.models import ColumnInfo, IndexInfo, TableInfo
from ...base.naming import contains_name, names_equal
from .autoincrement import is_auto_increment


class OracleCatalogReader(BaseCatalogReader):
    """Reads tables, columns, keys, indexes, triggers and sequences from the ALL_* views."""

    def list_tables(self, owner: str) -> list[TableInfo]:
        """Get tables owned by ``owner``."""
        query = "SELECT table_name FROM all_tables WHERE owner = :owner"
        rows = self.connection.execute_dict(query, {"owner": owner})
        self.logger.debug(f"Found {len(rows)} tables owned by {owner}")
        return [TableInfo(name=row["table_name"]) for row in rows]

    def list_columns(self, owner: str, table: str) -> list[TabColumnRow]:
        """Get columns of a table in ordinal order."""
        query = """
            SELECT
                column_id,
                column_name,
                data_type,
                data_length,
                char_length,
                data_precision,
                data_scale,
                nullable
            FROM all_tab_columns
            WHERE owner = :owner AND table_name = :table_name
            ORDER BY column_id
        """
        rows = self.connection.execute_dict(query, {"owner": owner, "table_name": table})
        return [
            TabColumnRow(
                column_id=row["column_id"],
                column_name=row["column_name"],
                data_type=row["data_type"],
                data_length=row["data_length"],
                char_length=row["char_length"],
                data_precision=row["data_precision"],
                data_scale=row["data_scale"],
                nullable=row["nullable"],
            )
            for row in rows
        ]

    def list_primary_key_columns(self, owner: str, table: str) -> list[str]:
        """Get the column names of the table's primary key."""
        query = """
            SELECT a.column_name
            FROM all_cons_columns a
            INNER JOIN all_constraints b
                ON a.owner = b.owner
                AND a.constraint_name = b.constraint_name
                AND a.table_name = b.table_name
            WHERE b.owner = :owner AND b.table_name = :table_name AND b.constraint_type = 'P'
            ORDER BY a.position
        """
        rows = self.connection.execute_dict(query, {"owner": owner, "table_name": table})
        return [row["column_name"] for row in rows]

    def list_index_columns(self, owner: str, table: str) -> list[IndexColumnRow]:
        """Get user-defined index membership, excluding indexes generated for constraints."""
        query = """
            SELECT a.index_name, a.column_name, b.uniqueness
            FROM all_ind_columns a
            INNER JOIN all_indexes b
                ON a.table_owner = b.table_owner
                AND a.table_name = b.table_name
                AND a.index_name = b.index_name
            WHERE a.table_owner = :owner
                AND a.table_name = :table_name
                AND b.table_type = 'TABLE'
                AND b.generated = 'N'
            ORDER BY a.index_name, a.column_position
        """
        rows = self.connection.execute_dict(query, {"owner": owner, "table_name": table})
        return [
            IndexColumnRow(
                index_name=row["index_name"],
                column_name=row["column_name"],
                uniqueness=row["uniqueness"],
            )
            for row in rows
        ]

    def list_auto_increment_triggers(self, owner: str, table: str) -> list[TriggerRow]:
        """Get the table's INSERT triggers with their bodies."""
        query = """
            SELECT trigger_name, trigger_body
            FROM all_triggers
            WHERE owner = :owner AND triggering_event = 'INSERT' AND table_name = :table_name
        """
        rows = self.connection.execute_dict(query, {"owner": owner, "table_name": table})
        return [
            TriggerRow(trigger_name=row["trigger_name"], trigger_body=row["trigger_body"] or "")
            for row in rows
        ]

    def list_sequences(self, owner: str) -> list[str]:
        query = "SELECT sequence_name FROM all_sequences WHERE sequence_owner = :owner"
        rows = self.connection.execute_dict(query, {"owner": owner})
        return [row["sequence_name"] for row in rows]

    def table_exists(self, owner: str, table: str) -> bool:
        query = "SELECT COUNT(1) FROM all_tables WHERE owner = :owner AND table_name = :table_name"
        return self._count(query, {"owner": owner, "table_name": table}) > 0

    def column_exists(self, owner: str, table: str, column: str) -> bool:
        query = """
            SELECT COUNT(1) FROM all_tab_columns
            WHERE owner = :owner AND table_name = :table_name AND column_name = :column_name
        """
        return self._count(query, {"owner": owner, "table_name": table, "column_name": column}) > 0

    def index_exists(self, owner: str, table: str, index_name: str) -> bool:
        query = """
            SELECT COUNT(1) FROM all_indexes
            WHERE owner = :owner AND table_name = :table_name
                AND table_type = 'TABLE' AND index_name = :index_name
        """
        return self._count(query, {"owner": owner, "table_name": table, "index_name": index_name}) > 0

    def sequence_exists(self, owner: str, sequence_name: str) -> bool:
        query = """
            SELECT COUNT(1) FROM all_sequences
            WHERE sequence_owner = :owner AND sequence_name = :sequence_name
        """
        return self._count(query, {"owner": owner, "sequence_name": sequence_name}) > 0

    def trigger_exists(self, owner: str, table: str, trigger_name: str) -> bool:
        query = """
            SELECT COUNT(1) FROM all_triggers
            WHERE owner = :owner AND triggering_event = 'INSERT'
                AND table_name = :table_name AND trigger_name = :trigger_name
        """
        return self._count(query, {"owner": owner, "table_name": table, "trigger_name": trigger_name}) > 0

    def _count(self, query: str, params: dict[str, Any]) -> int:
        return int(self.connection.execute_scalar(query, params) or 0)


def _lengths(row: TabColumnRow) -> tuple[int, int]:
    """(max_length, min_length) as reported for the column's physical type."""
    data_type = row.data_type.upper()
    if data_type == "NUMBER":
        return row.data_precision or 0, row.data_scale or 0
    if data_type == "RAW":
        return row.data_length or 0, 0
    return row.char_length or 0, 0


def build_column_infos(
    table: str,
    rows: Iterable[TabColumnRow],
    triggers: list[TriggerRow],
    key_columns: list[str],
    index_rows: list[IndexColumnRow],
    sequences: list[str],
) -> list[ColumnInfo]:
    """Fold the catalog reads for one table into column models, in row order."""
    columns = []
    for row in rows:
        max_length, min_length = _lengths(row)
        columns.append(
            ColumnInfo(
                name=row.column_name,
                data_type=row.data_type,
                is_nullable=row.nullable.upper() == "Y",
                is_key=contains_name(key_columns, row.column_name),
                is_auto_increment=is_auto_increment(table, row.column_name, triggers, sequences),
                order=row.column_id,
                max_length=max_length,
                min_length=min_length,
                indexes=[
                    IndexInfo(name=ir.index_name, column_name=row.column_name, is_unique=ir.is_unique)
                    for ir in index_rows
                    if names_equal(ir.column_name, row.column_name)
                ],
            )
        )
    return columns
