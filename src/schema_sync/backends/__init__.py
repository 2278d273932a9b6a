"""Database backend implementations."""

from typing import TYPE_CHECKING, Type

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..base import BaseConnection, TableSchema


def get_backend(db_type: str) -> tuple[Type["BaseConnection"], Type["TableSchema"]]:
    """
    Get the connection class and schema class for a database type.

    Returns:
        Tuple of (ConnectionClass, SchemaClass)
    """
    if db_type == "oracle":
        from .oracle import OracleConnection, OracleTableSchema
        return OracleConnection, OracleTableSchema

    raise ConfigurationError(
        f"Unknown database type: {db_type}. Supported types: oracle"
    )
