"""Sequence + trigger emulation of auto-increment columns."""

import logging
from typing import Iterable, Optional

from ...base.catalog import BaseCatalogReader, TriggerRow
from ...base.connection import BaseConnection, Transaction
from ...base.naming import contains_name, names_equal
from . import ddl

logger = logging.getLogger(__name__)


def is_auto_increment(
    table: str,
    column: str,
    triggers: Iterable[TriggerRow],
    sequences: Iterable[str],
) -> bool:
    """Check if a column is backed by its conventional sequence and trigger.

    All of these must hold: a trigger with the conventional name is among the
    table's INSERT triggers, its body mentions both the sequence and the
    column, and the sequence exists.
    """
    expected_trigger = ddl.trigger_name(table, column)
    expected_sequence = ddl.sequence_name(table, column)

    trigger = next((t for t in triggers if names_equal(t.trigger_name, expected_trigger)), None)
    if trigger is None:
        return False

    body = (trigger.trigger_body or "").lower()
    if expected_sequence.lower() not in body or column.lower() not in body:
        return False

    return contains_name(sequences, expected_sequence)


class AutoIncrementEmulator:
    """Creates and removes the sequence and trigger behind auto-increment columns."""

    def __init__(self, connection: BaseConnection, catalog: BaseCatalogReader, owner: str):
        self.connection = connection
        self.catalog = catalog
        self.owner = owner

    def ensure(self, table: str, column: str, tx: Optional[Transaction] = None) -> int:
        """Create whichever of the sequence and trigger is missing.

        Returns the number of statements executed: 0 when the column is
        already configured.
        """
        count = 0

        seq_name = ddl.sequence_name(table, column)
        if not contains_name(self.catalog.list_sequences(self.owner), seq_name):
            count += self._execute(ddl.build_create_sequence(seq_name))
            logger.info(f"Created sequence {seq_name}")
            if tx is not None:
                tx.on_rollback(ddl.build_drop_sequence(seq_name))

        tr_name = ddl.trigger_name(table, column)
        triggers = self.catalog.list_auto_increment_triggers(self.owner, table)
        if not any(names_equal(t.trigger_name, tr_name) for t in triggers):
            count += self._execute(ddl.build_create_trigger(tr_name, table, seq_name, column))
            logger.info(f"Created trigger {tr_name}")
            if tx is not None:
                tx.on_rollback(ddl.build_drop_trigger(tr_name))

        return count

    def remove(self, table: str, column: str) -> int:
        """Drop the sequence and trigger of a column if they exist."""
        count = 0

        tr_name = ddl.trigger_name(table, column)
        if self.catalog.trigger_exists(self.owner, table, tr_name):
            count += self._execute(ddl.build_drop_trigger(tr_name))
            logger.info(f"Dropped trigger {tr_name}")

        seq_name = ddl.sequence_name(table, column)
        if self.catalog.sequence_exists(self.owner, seq_name):
            count += self._execute(ddl.build_drop_sequence(seq_name))
            logger.info(f"Dropped sequence {seq_name}")

        return count

    def _execute(self, sql: str) -> int:
        self.connection.execute_non_query(sql)
        return 1
