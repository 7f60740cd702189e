"""
Data access for the ``commands`` table.

``CommandRepo`` wraps one open SQLite connection, normally the
per‑request connection from ``core.db.get_db``.  Reads return
``Command`` entities which the repository keeps track of; inserts and
deletions are staged.  Nothing reaches the database until
``save_changes`` runs, which writes staged inserts, field changes on
tracked entities and staged deletions in a single transaction.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Dict, List, Optional, Tuple

from command_api.app.models.command import Command

logger = logging.getLogger(__name__)

_Snapshot = Tuple[str, str, str]

# Range of an SQLite INTEGER column.
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


class CommandNotFoundError(Exception):
    """Raised by handlers when no command has the requested id."""

    def __init__(self, command_id: int) -> None:
        super().__init__(f"Command {command_id} not found")
        self.command_id = command_id


def _snapshot(command: Command) -> _Snapshot:
    return (command.how_to, command.platform, command.command_line)


class CommandRepo:
    """Repository and unit of work for ``Command`` entities."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        # id -> (entity, field values as last loaded or saved)
        self._tracked: Dict[int, Tuple[Command, _Snapshot]] = {}
        self._pending_inserts: List[Command] = []
        self._pending_deletes: List[Command] = []

    def _track(self, row: sqlite3.Row) -> Command:
        tracked = self._tracked.get(row["id"])
        if tracked is not None:
            return tracked[0]
        command = Command(
            id=row["id"],
            how_to=row["how_to"],
            platform=row["platform"],
            command_line=row["command_line"],
        )
        self._tracked[command.id] = (command, _snapshot(command))
        return command

    def get_all_commands(self) -> List[Command]:
        """Return every stored command ordered by id."""
        rows = self._conn.execute(
            "SELECT id, how_to, platform, command_line FROM commands ORDER BY id"
        ).fetchall()
        return [self._track(row) for row in rows]

    def get_command_by_id(self, command_id: int) -> Optional[Command]:
        """Return the command with ``command_id`` or ``None`` if absent."""
        if not SQLITE_INT_MIN <= command_id <= SQLITE_INT_MAX:
            return None
        row = self._conn.execute(
            "SELECT id, how_to, platform, command_line FROM commands WHERE id = ?",
            (command_id,),
        ).fetchone()
        if row is None:
            return None
        return self._track(row)

    def count_commands(self) -> int:
        """Return the number of stored commands without loading them."""
        return self._conn.execute("SELECT COUNT(*) FROM commands").fetchone()[0]

    def create_command(self, command: Command) -> None:
        """Stage ``command`` for insertion.

        The identifier is assigned by the database when
        ``save_changes`` runs.
        """
        if command is None:
            raise ValueError("command must not be None")
        self._pending_inserts.append(command)
        logger.debug("Staged insert of command %r", command.how_to)

    def delete_command(self, command: Command) -> None:
        """Stage removal of ``command``."""
        if command is None:
            raise ValueError("command must not be None")
        if command.id is None:
            # Never saved: dropping the staged insert is enough.
            for i, pending in enumerate(self._pending_inserts):
                if pending is command:
                    del self._pending_inserts[i]
                    return
            raise ValueError("command has not been saved")
        self._pending_deletes.append(command)
        logger.debug("Staged delete of command %s", command.id)

    def _dirty(self) -> List[Command]:
        deleting = {c.id for c in self._pending_deletes}
        return [
            command
            for command_id, (command, snapshot) in self._tracked.items()
            if command_id not in deleting and _snapshot(command) != snapshot
        ]

    def save_changes(self) -> None:
        """Write all staged changes and commit.

        On a database error the transaction is rolled back, staged
        changes are kept and the error is re‑raised.
        """
        dirty = self._dirty()
        new_ids: List[int] = []
        try:
            cursor = self._conn.cursor()
            for command in self._pending_inserts:
                cursor.execute(
                    "INSERT INTO commands (how_to, platform, command_line) VALUES (?, ?, ?)",
                    (command.how_to, command.platform, command.command_line),
                )
                new_ids.append(cursor.lastrowid)
            for command in dirty:
                cursor.execute(
                    "UPDATE commands SET how_to = ?, platform = ?, command_line = ? WHERE id = ?",
                    (command.how_to, command.platform, command.command_line, command.id),
                )
            for command in self._pending_deletes:
                cursor.execute("DELETE FROM commands WHERE id = ?", (command.id,))
            self._conn.commit()
        except sqlite3.Error:
            self._conn.rollback()
            logger.exception("Failed to save command changes")
            raise

        for command, new_id in zip(self._pending_inserts, new_ids):
            command.id = new_id
            self._tracked[new_id] = (command, _snapshot(command))
            logger.info("Created command %s", new_id)
        for command in dirty:
            self._tracked[command.id] = (command, _snapshot(command))
            logger.info("Updated command %s", command.id)
        for command in self._pending_deletes:
            self._tracked.pop(command.id, None)
            logger.info("Deleted command %s", command.id)
        self._pending_inserts = []
        self._pending_deletes = []
