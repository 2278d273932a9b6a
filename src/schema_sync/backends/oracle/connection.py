"""Oracle database connection."""

import logging
from typing import Optional

import oracledb

from ...base.connection import BaseConnection
from ...config import SchemaConfig
from ...exceptions import ConnectionError

logger = logging.getLogger(__name__)

DDL_KEYWORDS = ("CREATE", "ALTER", "DROP", "TRUNCATE", "RENAME", "COMMENT", "GRANT", "REVOKE")

# name already used, column list already indexed, column already exists,
# table already has a primary key, trigger already exists
DUPLICATE_OBJECT_CODES = frozenset({955, 1408, 1430, 2260, 4081})


def is_ddl(sql: str) -> bool:
    words = sql.lstrip().split(None, 1)
    return bool(words) and words[0].upper() in DDL_KEYWORDS


def is_duplicate_object_error(exc: BaseException) -> bool:
    """Check if a driver error means the object already exists.

    A caller that retries after losing a check-then-create race can treat
    these as already satisfied.
    """
    if not isinstance(exc, oracledb.DatabaseError) or not exc.args:
        return False
    error = exc.args[0]
    code = getattr(error, "code", None)
    if code is None:
        return any(f"ORA-{c:05d}" in str(error) for c in DUPLICATE_OBJECT_CODES)
    return code in DUPLICATE_OBJECT_CODES


class OracleConnection(BaseConnection):
    """Oracle connection using oracledb."""

    def __init__(self, config: SchemaConfig):
        super().__init__(config)
        self._connection: Optional[oracledb.Connection] = None

    def connect(self) -> None:
        """Establish database connection."""
        try:
            if self.config.dsn:
                dsn = self.config.dsn
            elif self.config.service_name:
                dsn = oracledb.makedsn(
                    self.config.host,
                    self.config.port or 1521,
                    service_name=self.config.service_name,
                )
            else:
                dsn = oracledb.makedsn(
                    self.config.host,
                    self.config.port or 1521,
                    sid=self.config.sid,
                )

            logger.debug(f"Connecting to Oracle: {dsn}")
            self._connection = oracledb.connect(
                user=self.config.username,
                password=self.config.password,
                dsn=dsn,
            )
            logger.info("Connected to Oracle database")
        except oracledb.Error as e:
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from database")

    @property
    def connection(self) -> oracledb.Connection:
        """Get the active connection."""
        if not self._connection:
            raise ConnectionError("Not connected to database")
        return self._connection

    def execute_non_query(self, sql: str) -> int:
        """Execute a statement; DDL reports -1 since Oracle gives no row count for it."""
        count = super().execute_non_query(sql)
        return -1 if is_ddl(sql) else count

    def get_version(self) -> str:
        """Get Oracle version."""
        return self.execute_scalar("SELECT banner FROM v$version WHERE ROWNUM = 1") or "Unknown"
