"""Abstract base class for database connections."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional, Union

logger = logging.getLogger(__name__)

Params = Union[tuple, dict]


class Transaction:
    """Handle for one transaction scope.

    Statements registered with :meth:`on_rollback` undo work the database
    committed implicitly (DDL). They run in reverse order when the scope is
    left without :meth:`commit`.
    """

    def __init__(self, connection: "BaseConnection"):
        self._connection = connection
        self._compensations: list[str] = []
        self.committed = False

    def on_rollback(self, sql: str) -> None:
        """Register a statement that reverses work done in this scope."""
        self._compensations.append(sql)

    def commit(self) -> None:
        """Commit the scope and forget the compensating statements."""
        self._connection.commit()
        self.committed = True
        self._compensations.clear()

    def rollback(self) -> None:
        """Roll back the driver transaction and run compensations.

        Failures here are logged, never raised, so the error that caused the
        rollback is the one that propagates.
        """
        try:
            self._connection.rollback()
        except Exception as e:
            logger.warning(f"Rollback failed: {e}")
        while self._compensations:
            sql = self._compensations.pop()
            try:
                self._connection.execute_non_query(sql)
            except Exception as e:
                logger.warning(f"Compensating statement failed: {sql}: {e}")


class BaseConnection(ABC):
    """Abstract base class for database connections."""

    def __init__(self, config: Any):
        self.config = config
        self._connection = None
        self.log: Optional[Callable[[str], None]] = None

    @abstractmethod
    def connect(self) -> None:
        """Establish database connection."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close database connection."""
        pass

    @property
    @abstractmethod
    def connection(self) -> Any:
        """Get the active connection."""
        pass

    @contextmanager
    def cursor(self) -> Generator[Any, None, None]:
        """Get a cursor context manager."""
        cur = self.connection.cursor()
        try:
            yield cur
        finally:
            cur.close()

    def _trace(self, sql: str) -> None:
        logger.debug(f"Executing: {sql}")
        if self.log is not None:
            self.log(sql)

    def execute_dict(self, query: str, params: Params = ()) -> list[dict[str, Any]]:
        """Execute a query and return rows as dictionaries keyed by lower-case column name."""
        self._trace(query)
        with self.cursor() as cur:
            cur.execute(query, params)
            columns = [column[0].lower() for column in cur.description]
            return [dict(zip(columns, row)) for row in cur.fetchall()]

    def execute_scalar(self, query: str, params: Params = ()) -> Any:
        """Execute a query and return a single value."""
        self._trace(query)
        with self.cursor() as cur:
            cur.execute(query, params)
            row = cur.fetchone()
            return row[0] if row else None

    def execute_non_query(self, sql: str) -> int:
        """Execute a statement without parameters and return the affected row count.

        Returns -1 when the driver cannot report a count.
        """
        self._trace(sql)
        with self.cursor() as cur:
            cur.execute(sql)
            return cur.rowcount if cur.rowcount is not None and cur.rowcount >= 0 else -1

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    @contextmanager
    def begin_transaction(self) -> Generator[Transaction, None, None]:
        """Open a transaction scope that rolls back unless committed."""
        tx = Transaction(self)
        try:
            yield tx
        finally:
            if not tx.committed:
                logger.info("Rolling back transaction")
                tx.rollback()

    def __enter__(self) -> "BaseConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()
