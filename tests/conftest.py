"""Shared fixtures: an in-memory stand-in for an Oracle schema."""

import re
from typing import Any, Optional

import pytest
from schema_sync.backends.oracle import OracleTableSchema
from schema_sync.base.connection import BaseConnection
from schema_sync.config import SchemaConfig

NATIONAL_CHAR_TYPES = ("NVARCHAR2", "NCHAR")
CHAR_TYPES = ("VARCHAR2", "CHAR") + NATIONAL_CHAR_TYPES

CREATE_TABLE = re.compile(r'^CREATE TABLE "([^"]+)" \((.*)\)$', re.S)
ADD_COLUMN = re.compile(r'^ALTER TABLE "([^"]+)" ADD \((.*)\)$', re.S)
MODIFY_COLUMN = re.compile(r'^ALTER TABLE "([^"]+)" MODIFY \((.*)\)$', re.S)
DROP_COLUMN = re.compile(r'^ALTER TABLE "([^"]+)" DROP COLUMN "([^"]+)"$')
DROP_TABLE = re.compile(r'^DROP TABLE "([^"]+)"( PURGE)?$')
CREATE_INDEX = re.compile(r'^CREATE (UNIQUE )?INDEX "([^"]+)" ON "([^"]+)" \((.*)\)$')
DROP_INDEX = re.compile(r'^DROP INDEX "([^"]+)"$')
CREATE_SEQUENCE = re.compile(r'^CREATE SEQUENCE "([^"]+)" ')
DROP_SEQUENCE = re.compile(r'^DROP SEQUENCE "([^"]+)"$')
CREATE_TRIGGER = re.compile(r'^CREATE TRIGGER "([^"]+)" BEFORE INSERT ON "([^"]+)" FOR EACH ROW (.*)$', re.S)
DROP_TRIGGER = re.compile(r'^DROP TRIGGER "([^"]+)"$')
COLUMN_CLAUSE = re.compile(r'^"([^"]+)" (.+?)(?: (NOT NULL|NULL))?$')
PRIMARY_KEY = re.compile(r'^CONSTRAINT "([^"]+)" PRIMARY KEY \((.*)\)$')
TYPE_ARGS = re.compile(r'^(\w+)\s*(?:\((\d+)(?:\s*,\s*(\d+))?\))?')
QUOTED = re.compile(r'"([^"]+)"')


class FakeDatabaseError(Exception):
    """Raised by the fake for failed or conflicting statements."""


def _split_clauses(body: str) -> list[str]:
    clauses, depth, current = [], 0, []
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            clauses.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    clauses.append("".join(current).strip())
    return clauses


def _parse_column(clause: str) -> dict[str, Any]:
    match = COLUMN_CLAUSE.match(clause)
    name, type_text, nullability = match.groups()
    base, first, second = TYPE_ARGS.match(type_text).groups()
    base = base.upper()
    column = {
        "column_name": name,
        "data_type": base,
        "data_length": None,
        "char_length": 0,
        "data_precision": None,
        "data_scale": None,
        "nullable": "N" if nullability == "NOT NULL" else "Y",
        "has_nullability": nullability is not None,
    }
    if base == "NUMBER":
        column["data_length"] = 22
        column["data_precision"] = int(first) if first else None
        column["data_scale"] = int(second) if second else None
    elif base in CHAR_TYPES and first:
        column["char_length"] = int(first)
        column["data_length"] = int(first) * (2 if base in NATIONAL_CHAR_TYPES else 1)
    elif base == "RAW" and first:
        column["data_length"] = int(first)
    return column


class FakeOracleConnection(BaseConnection):
    """Answers the catalog queries from memory and applies DDL text to it."""

    def __init__(self, config: Optional[SchemaConfig] = None):
        super().__init__(config or SchemaConfig(
            host="localhost", service_name="ORCL", username="scott", password="tiger",
        ))
        self.owner = self.config.resolved_owner
        self.tables: dict[str, dict[str, Any]] = {}
        self.indexes: dict[str, dict[str, Any]] = {}
        self.sequences: list[str] = []
        self.triggers: dict[str, dict[str, str]] = {}
        self.statements: list[str] = []
        self.queries: list[str] = []
        self.fail_on: Optional[str] = None
        self.commits = 0
        self.rollbacks = 0
        self.disconnects = 0

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        self.disconnects += 1

    @property
    def connection(self) -> Any:
        return self

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    # Reads

    def execute_dict(self, query: str, params: Any = ()) -> list[dict[str, Any]]:
        self._trace(query)
        self.queries.append(query)
        q = " ".join(query.lower().split())
        if params.get("owner") != self.owner:
            return []
        table = params.get("table_name")

        if "from all_tab_columns" in q:
            columns = self.tables.get(table, {}).get("columns", [])
            return [
                {key: value for key, value in dict(col, column_id=i).items() if key != "has_nullability"}
                for i, col in enumerate(columns, start=1)
            ]
        if "from all_cons_columns" in q:
            return [{"column_name": c} for c in self.tables.get(table, {}).get("primary_key", [])]
        if "from all_ind_columns" in q:
            rows = []
            for name in sorted(self.indexes):
                index = self.indexes[name]
                if index["table"] != table:
                    continue
                for column in index["columns"]:
                    rows.append({
                        "index_name": name,
                        "column_name": column,
                        "uniqueness": "UNIQUE" if index["unique"] else "NONUNIQUE",
                    })
            return rows
        if "from all_triggers" in q:
            return [
                {"trigger_name": name, "trigger_body": trigger["body"]}
                for name, trigger in self.triggers.items()
                if trigger["table"] == table
            ]
        if "from all_sequences" in q:
            return [{"sequence_name": name} for name in self.sequences]
        if "from all_tables" in q:
            return [{"table_name": name} for name in self.tables]
        raise AssertionError(f"Unexpected query: {query}")

    def execute_scalar(self, query: str, params: Any = ()) -> Any:
        self._trace(query)
        self.queries.append(query)
        q = " ".join(query.lower().split())
        if params.get("owner") != self.owner:
            return 0
        table = params.get("table_name")

        if "from all_tables" in q:
            return int(table in self.tables)
        if "from all_tab_columns" in q:
            columns = self.tables.get(table, {}).get("columns", [])
            return int(any(c["column_name"] == params["column_name"] for c in columns))
        if "from all_indexes" in q:
            index = self.indexes.get(params["index_name"])
            return int(index is not None and index["table"] == table)
        if "from all_sequences" in q:
            return int(params["sequence_name"] in self.sequences)
        if "from all_triggers" in q:
            trigger = self.triggers.get(params["trigger_name"])
            return int(trigger is not None and trigger["table"] == table)
        raise AssertionError(f"Unexpected query: {query}")

    # Writes

    def execute_non_query(self, sql: str) -> int:
        self._trace(sql)
        self.statements.append(sql)
        if self.fail_on and sql.startswith(self.fail_on):
            raise FakeDatabaseError(f"ORA-01031: insufficient privileges: {sql}")
        self._apply(sql)
        return -1

    def _apply(self, sql: str) -> None:
        if match := CREATE_TABLE.match(sql):
            name, body = match.groups()
            self._ensure_free(name)
            columns, primary_key = [], []
            for clause in _split_clauses(body):
                if pk := PRIMARY_KEY.match(clause):
                    primary_key = QUOTED.findall(pk.group(2))
                else:
                    columns.append(_parse_column(clause))
            for column in columns:
                if column["column_name"] in primary_key:
                    column["nullable"] = "N"
            self.tables[name] = {"columns": columns, "primary_key": primary_key}
        elif match := ADD_COLUMN.match(sql):
            table, clause = match.groups()
            column = _parse_column(clause)
            existing = self.tables[table]["columns"]
            if any(c["column_name"] == column["column_name"] for c in existing):
                raise FakeDatabaseError("ORA-01430: column being added already exists in table")
            existing.append(column)
        elif match := MODIFY_COLUMN.match(sql):
            table, clause = match.groups()
            column = _parse_column(clause)
            columns = self.tables[table]["columns"]
            for i, current in enumerate(columns):
                if current["column_name"] == column["column_name"]:
                    if not column["has_nullability"]:
                        column["nullable"] = current["nullable"]
                    elif column["nullable"] == current["nullable"]:
                        raise FakeDatabaseError("ORA-01451: column to be modified to NULL cannot be modified")
                    columns[i] = column
        elif match := DROP_COLUMN.match(sql):
            table, column = match.groups()
            self.tables[table]["columns"] = [
                c for c in self.tables[table]["columns"] if c["column_name"] != column
            ]
        elif match := DROP_TABLE.match(sql):
            table = match.group(1)
            if table not in self.tables:
                raise FakeDatabaseError("ORA-00942: table or view does not exist")
            del self.tables[table]
            self.indexes = {k: v for k, v in self.indexes.items() if v["table"] != table}
            self.triggers = {k: v for k, v in self.triggers.items() if v["table"] != table}
        elif match := CREATE_INDEX.match(sql):
            unique, name, table, columns = match.groups()
            self._ensure_free(name)
            self.indexes[name] = {
                "table": table,
                "columns": QUOTED.findall(columns),
                "unique": bool(unique),
            }
        elif match := DROP_INDEX.match(sql):
            del self.indexes[match.group(1)]
        elif match := CREATE_SEQUENCE.match(sql):
            self._ensure_free(match.group(1))
            self.sequences.append(match.group(1))
        elif match := DROP_SEQUENCE.match(sql):
            self.sequences.remove(match.group(1))
        elif match := CREATE_TRIGGER.match(sql):
            name, table, body = match.groups()
            if name in self.triggers:
                raise FakeDatabaseError("ORA-04081: trigger already exists")
            self.triggers[name] = {"table": table, "body": body}
        elif match := DROP_TRIGGER.match(sql):
            del self.triggers[match.group(1)]
        else:
            raise AssertionError(f"Unexpected statement: {sql}")

    def _ensure_free(self, name: str) -> None:
        if name in self.tables or name in self.indexes or name in self.sequences:
            raise FakeDatabaseError("ORA-00955: name is already used by an existing object")


@pytest.fixture
def connection() -> FakeOracleConnection:
    return FakeOracleConnection()


@pytest.fixture
def schema(connection: FakeOracleConnection) -> OracleTableSchema:
    return OracleTableSchema(connection)
