"""Click CLI interface for schema sync."""

import datetime
import decimal
import logging
import sys
import uuid
from typing import Callable

import click

from . import SUPPORTED_BACKENDS, __version__
from .backends import get_backend
from .backends.oracle import AwareDateTime, get_column_type, is_duplicate_object_error
from .base import TableSchema
from .config import SchemaConfig
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    SchemaSyncError,
)

LOGICAL_TYPES = {
    "int": int,
    "bool": bool,
    "float": float,
    "str": str,
    "bytes": bytes,
    "decimal": decimal.Decimal,
    "datetime": datetime.datetime,
    "datetimetz": AwareDateTime,
    "date": datetime.date,
    "timedelta": datetime.timedelta,
    "uuid": uuid.UUID,
}


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def connection_options(func: Callable) -> Callable:
    """Attach the shared connection options to a command."""
    options = [
        click.option("--db-type", "-t", type=click.Choice(SUPPORTED_BACKENDS, case_sensitive=False),
                     default="oracle", help="Database type"),
        click.option("-h", "--host", envvar="DB_HOST", help="Database server hostname"),
        click.option("-P", "--port", type=int, envvar="DB_PORT", help="Database server port"),
        click.option("--service-name", envvar="DB_SERVICE_NAME", help="Oracle service name"),
        click.option("--sid", envvar="DB_SID", help="Oracle SID"),
        click.option("--dsn", envvar="DB_DSN", help="Full connect descriptor or EZConnect string"),
        click.option("-u", "--username", envvar="DB_USER", help="Database username"),
        click.option("-p", "--password", envvar="DB_PASSWORD", help="Database password"),
        click.option("--owner", envvar="DB_OWNER", help="Schema owner (defaults to the username)"),
        click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _open_schema(db_type: str, verbose: int, **settings) -> TableSchema:
    setup_logging(verbose)
    config = SchemaConfig(verbosity=verbose, **settings)
    config.validate()

    ConnectionClass, SchemaClass = get_backend(db_type.lower())
    connection = ConnectionClass(config)
    connection.connect()
    schema = SchemaClass(connection)
    if verbose >= 2:
        schema.log = lambda sql: click.echo(f"SQL: {sql}", err=True)
    return schema


def _fail(e: Exception) -> None:
    if isinstance(e, ConfigurationError):
        click.echo(f"Configuration error: {e}", err=True)
    elif isinstance(e, ConnectionError):
        click.echo(f"Connection error: {e}", err=True)
    elif isinstance(e, SchemaSyncError):
        click.echo(f"Error: {e}", err=True)
    else:
        logging.getLogger(__name__).exception("Unexpected error")
        click.echo(f"Unexpected error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Schema Sync - Inspect tables and apply missing structure.

    Supports: Oracle
    """
    pass


@cli.command()
@connection_options
def tables(db_type: str, verbose: int, **settings) -> None:
    """List tables of the schema owner."""
    try:
        with _open_schema(db_type, verbose, **settings) as schema:
            for table in schema.get_tables():
                click.echo(table.name)
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("table")
@connection_options
def columns(table: str, db_type: str, verbose: int, **settings) -> None:
    """Show the columns of TABLE."""
    try:
        with _open_schema(db_type, verbose, **settings) as schema:
            for column in schema.get_table_columns(table):
                flags = []
                if column.is_key:
                    flags.append("KEY")
                if column.is_auto_increment:
                    flags.append("AUTO")
                if not column.is_nullable:
                    flags.append("NOT NULL")
                indexes = ", ".join(index.name for index in column.indexes)
                click.echo(
                    f"{column.order:>3} {column.name:<30} {column.data_type:<14} "
                    f"{column.max_length:>5} {column.min_length:>3}  {' '.join(flags)}"
                    + (f"  [{indexes}]" if indexes else "")
                )
    except Exception as e:
        _fail(e)


@cli.command("column-type")
@click.argument("type_name", type=click.Choice(sorted(LOGICAL_TYPES), case_sensitive=False))
@click.option("--max-length", type=int, default=0, help="Length, or precision for decimals")
@click.option("--min-length", type=int, default=0, help="Scale for decimals")
def column_type(type_name: str, max_length: int, min_length: int) -> None:
    """Show the column type used for a Python type."""
    native = get_column_type(LOGICAL_TYPES[type_name.lower()], max_length, min_length)
    if native is None:
        click.echo(f"No column type for {type_name}", err=True)
        sys.exit(1)
    click.echo(native)


@cli.command("add-index")
@click.argument("table")
@click.argument("name")
@click.argument("index_columns", nargs=-1, required=True)
@click.option("--unique", is_flag=True, help="Create a unique index")
@connection_options
def add_index(table: str, name: str, index_columns: tuple[str, ...], unique: bool,
              db_type: str, verbose: int, **settings) -> None:
    """Create index NAME on TABLE unless it exists."""
    try:
        with _open_schema(db_type, verbose, **settings) as schema:
            if schema.add_index(table, name, unique, list(index_columns)):
                click.echo(f"Created index {name}")
            else:
                click.echo(f"Index {name} already exists")
    except Exception as e:
        if is_duplicate_object_error(e):
            click.echo(f"Index {name} already exists")
            return
        _fail(e)


@cli.command("drop-index")
@click.argument("table")
@click.argument("name")
@connection_options
def drop_index(table: str, name: str, db_type: str, verbose: int, **settings) -> None:
    """Drop index NAME from TABLE if it exists."""
    try:
        with _open_schema(db_type, verbose, **settings) as schema:
            if schema.delete_index(table, name):
                click.echo(f"Dropped index {name}")
            else:
                click.echo(f"Index {name} does not exist")
    except Exception as e:
        _fail(e)


@cli.command("test-connection")
@connection_options
def test_connection(db_type: str, verbose: int, **settings) -> None:
    """Test database connection."""
    try:
        click.echo(f"Connecting to {db_type} database...")
        with _open_schema(db_type, verbose, **settings) as schema:
            connection = schema.connection
            version = connection.get_version() if hasattr(connection, "get_version") else "Unknown"
            click.echo("Connection successful!")
            click.echo(f"\nServer version:\n{version}")
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    cli()
