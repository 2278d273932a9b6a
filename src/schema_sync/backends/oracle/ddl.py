"""Oracle DDL statement builders.

Every builder is pure. Identifiers are always double-quoted so that mixed
case and reserved words survive. Statements carry no trailing semicolon,
except PL/SQL blocks which require one after ``END``.
"""

from typing import Iterable

from ...base.models import ColumnInfo

SEQUENCE_MAX_VALUE = "9999999999999999999999999999"


def quote(name: str) -> str:
    return f'"{name}"'


def sequence_name(table: str, column: str) -> str:
    """Name of the sequence backing an auto-increment column."""
    return f"SQ_{table}_{column}"


def trigger_name(table: str, column: str) -> str:
    """Name of the insert trigger backing an auto-increment column."""
    return f"TR_{table}_{column}"


def primary_key_name(table: str) -> str:
    return f"PK_{table}"


def _nullability(is_nullable: bool) -> str:
    return "NULL" if is_nullable else "NOT NULL"


def column_clause(column: ColumnInfo, include_nullability: bool = True) -> str:
    """Render ``"name" type [NOT] NULL``."""
    clause = f"{quote(column.name)} {column.data_type}"
    if include_nullability:
        clause = f"{clause} {_nullability(column.is_nullable)}"
    return clause


def _column_list(names: Iterable[str]) -> str:
    return ", ".join(quote(name) for name in names)


def build_create_table(table: str, columns: list[ColumnInfo]) -> str:
    """Build CREATE TABLE with an optional named primary key.

    Returns an empty string when there are no columns.
    """
    if not columns:
        return ""

    clauses = [column_clause(column) for column in columns]
    key_columns = [column.name for column in columns if column.is_key]
    if key_columns:
        clauses.append(
            f"CONSTRAINT {quote(primary_key_name(table))} PRIMARY KEY ({_column_list(key_columns)})"
        )
    return f"CREATE TABLE {quote(table)} ({', '.join(clauses)})"


def build_drop_table(table: str, purge: bool = False) -> str:
    sql = f"DROP TABLE {quote(table)}"
    return f"{sql} PURGE" if purge else sql


def build_add_column(table: str, column: ColumnInfo) -> str:
    return f"ALTER TABLE {quote(table)} ADD ({column_clause(column)})"


def build_modify_column(table: str, column: ColumnInfo, include_nullability: bool = True) -> str:
    """Build ALTER TABLE ... MODIFY.

    Oracle rejects a nullability clause that matches the current state, so
    callers leave it out when nullability is unchanged.
    """
    return f"ALTER TABLE {quote(table)} MODIFY ({column_clause(column, include_nullability)})"


def build_drop_column(table: str, column: str) -> str:
    return f"ALTER TABLE {quote(table)} DROP COLUMN {quote(column)}"


def build_create_index(table: str, index_name: str, is_unique: bool, columns: list[str]) -> str:
    """Build CREATE [UNIQUE] INDEX. Returns an empty string when there are no columns."""
    if not columns:
        return ""
    unique = "UNIQUE " if is_unique else ""
    return f"CREATE {unique}INDEX {quote(index_name)} ON {quote(table)} ({_column_list(columns)})"


def build_drop_index(index_name: str) -> str:
    return f"DROP INDEX {quote(index_name)}"


def build_create_sequence(name: str) -> str:
    return (
        f"CREATE SEQUENCE {quote(name)} MINVALUE 1 MAXVALUE {SEQUENCE_MAX_VALUE} "
        f"START WITH 1 INCREMENT BY 1 NOCACHE"
    )


def build_drop_sequence(name: str) -> str:
    return f"DROP SEQUENCE {quote(name)}"


def build_create_trigger(name: str, table: str, sequence: str, column: str) -> str:
    return (
        f"CREATE TRIGGER {quote(name)} BEFORE INSERT ON {quote(table)} FOR EACH ROW "
        f"BEGIN SELECT {quote(sequence)}.NEXTVAL INTO :NEW.{quote(column)} FROM DUAL; END;"
    )


def build_drop_trigger(name: str) -> str:
    return f"DROP TRIGGER {quote(name)}"
