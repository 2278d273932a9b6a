"""Abstract base class for catalog readers and the rows they return."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .connection import BaseConnection
from .models import TableInfo


@dataclass(frozen=True)
class TabColumnRow:
    """One row of the column catalog."""

    column_id: int
    column_name: str
    data_type: str
    data_length: Optional[int] = None
    char_length: Optional[int] = None
    data_precision: Optional[int] = None
    data_scale: Optional[int] = None
    nullable: str = "Y"


@dataclass(frozen=True)
class TriggerRow:
    """An INSERT-timing trigger and its body."""

    trigger_name: str
    trigger_body: str = ""


@dataclass(frozen=True)
class IndexColumnRow:
    """One (index, column) membership row."""

    index_name: str
    column_name: str
    uniqueness: str = "NONUNIQUE"

    @property
    def is_unique(self) -> bool:
        return self.uniqueness.upper() == "UNIQUE"


class BaseCatalogReader(ABC):
    """Read-only queries against the system catalog of one owner.

    Every method re-queries the catalog; nothing is cached.
    """

    def __init__(self, connection: BaseConnection):
        self.connection = connection
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def list_tables(self, owner: str) -> list[TableInfo]:
        pass

    @abstractmethod
    def list_columns(self, owner: str, table: str) -> list[TabColumnRow]:
        """Columns ordered by ordinal position."""
        pass

    @abstractmethod
    def list_primary_key_columns(self, owner: str, table: str) -> list[str]:
        pass

    @abstractmethod
    def list_index_columns(self, owner: str, table: str) -> list[IndexColumnRow]:
        """User-defined table indexes ordered by index name and column position."""
        pass

    @abstractmethod
    def list_auto_increment_triggers(self, owner: str, table: str) -> list[TriggerRow]:
        pass

    @abstractmethod
    def list_sequences(self, owner: str) -> list[str]:
        pass

    @abstractmethod
    def table_exists(self, owner: str, table: str) -> bool:
        pass

    @abstractmethod
    def column_exists(self, owner: str, table: str, column: str) -> bool:
        pass

    @abstractmethod
    def index_exists(self, owner: str, table: str, index_name: str) -> bool:
        pass

    @abstractmethod
    def sequence_exists(self, owner: str, sequence_name: str) -> bool:
        pass

    @abstractmethod
    def trigger_exists(self, owner: str, table: str, trigger_name: str) -> bool:
        pass
