"""Dataclasses for tables, columns and indexes."""

from dataclasses import dataclass, field


@dataclass
class TableInfo:
    """Represents a table."""

    name: str


@dataclass
class IndexInfo:
    """Represents one column of an index.

    A multi-column index is described by several entries sharing ``name``.
    """

    name: str
    column_name: str = ""
    is_unique: bool = False


@dataclass
class ColumnInfo:
    """Represents a table column.

    For NUMBER columns ``max_length`` and ``min_length`` hold precision and
    scale; for RAW columns ``max_length`` is the byte length; otherwise it is
    the character length.
    """

    name: str
    data_type: str
    is_nullable: bool = True
    is_key: bool = False
    is_auto_increment: bool = False
    order: int = 0
    max_length: int = 0
    min_length: int = 0
    indexes: list[IndexInfo] = field(default_factory=list)

    @property
    def base_type(self) -> str:
        """Type name without length/precision arguments."""
        return self.data_type.split("(", 1)[0].strip()
