import sqlite3
from unittest.mock import MagicMock

import pytest

from command_api.app.core.db import get_connection
from command_api.app.models.command import Command
from command_api.app.services.command_repo import CommandRepo


def _count(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM commands").fetchone()[0]


class TestCommandRepo:
    @pytest.fixture
    def repo(self, conn: sqlite3.Connection) -> CommandRepo:
        return CommandRepo(conn)

    def test_create_is_staged_until_save(self, repo: CommandRepo, conn: sqlite3.Connection) -> None:
        command = Command(how_to="List files", platform="linux", command_line="ls")
        repo.create_command(command)
        assert command.id is None
        assert _count(conn) == 0

        repo.save_changes()
        assert isinstance(command.id, int) and command.id > 0
        assert _count(conn) == 1

    def test_save_assigns_distinct_ids(self, repo: CommandRepo) -> None:
        first = Command(how_to="a", platform="x", command_line="1")
        second = Command(how_to="b", platform="x", command_line="2")
        repo.create_command(first)
        repo.create_command(second)
        repo.save_changes()
        assert first.id != second.id

    def test_changes_are_visible_to_other_connections(self, repo: CommandRepo, db_path: str) -> None:
        command = Command(how_to="a", platform="x", command_line="1")
        repo.create_command(command)
        repo.save_changes()

        other = get_connection()
        try:
            found = CommandRepo(other).get_command_by_id(command.id)
        finally:
            other.close()
        assert found == command

    def test_get_by_id_missing_returns_none(self, repo: CommandRepo) -> None:
        assert repo.get_command_by_id(12345) is None

    @pytest.mark.parametrize("command_id", [2 ** 63, -(2 ** 63) - 1, 10 ** 30])
    def test_get_by_id_outside_integer_range_returns_none(self, repo: CommandRepo, command_id: int) -> None:
        assert repo.get_command_by_id(command_id) is None

    def test_count_commands(self, repo: CommandRepo) -> None:
        assert repo.count_commands() == 0
        for text in ("one", "two"):
            repo.create_command(Command(how_to=text, platform="x", command_line=text))
        assert repo.count_commands() == 0
        repo.save_changes()
        assert repo.count_commands() == 2

    def test_count_does_not_load_rows(self, repo: CommandRepo, conn: sqlite3.Connection) -> None:
        conn.execute("INSERT INTO commands (how_to, platform, command_line) VALUES ('a', 'x', '1')")
        conn.commit()
        fresh = CommandRepo(conn)
        assert fresh.count_commands() == 1
        assert fresh._tracked == {}

    def test_get_all_returns_rows_in_id_order(self, repo: CommandRepo) -> None:
        for text in ("one", "two", "three"):
            repo.create_command(Command(how_to=text, platform="x", command_line=text))
        repo.save_changes()
        assert [c.how_to for c in repo.get_all_commands()] == ["one", "two", "three"]

    def test_loaded_entities_are_shared(self, repo: CommandRepo) -> None:
        repo.create_command(Command(how_to="a", platform="x", command_line="1"))
        repo.save_changes()
        listed = repo.get_all_commands()[0]
        assert repo.get_command_by_id(listed.id) is listed

    def test_modified_entity_is_updated_on_save(self, repo: CommandRepo, conn: sqlite3.Connection) -> None:
        command = Command(how_to="old", platform="x", command_line="old")
        repo.create_command(command)
        repo.save_changes()

        fresh = CommandRepo(conn)
        loaded = fresh.get_command_by_id(command.id)
        loaded.how_to = "new"
        loaded.command_line = "new"
        fresh.save_changes()

        row = conn.execute("SELECT how_to, command_line FROM commands WHERE id = ?", (command.id,)).fetchone()
        assert (row["how_to"], row["command_line"]) == ("new", "new")

    def test_unmodified_entities_are_not_written(self, repo: CommandRepo) -> None:
        repo.create_command(Command(how_to="a", platform="x", command_line="1"))
        repo.save_changes()
        repo.get_all_commands()

        conn = MagicMock()
        repo._conn = conn
        repo.save_changes()
        conn.cursor.return_value.execute.assert_not_called()
        conn.commit.assert_called_once()

    def test_delete_is_staged_until_save(self, repo: CommandRepo, conn: sqlite3.Connection) -> None:
        command = Command(how_to="a", platform="x", command_line="1")
        repo.create_command(command)
        repo.save_changes()

        repo.delete_command(command)
        assert _count(conn) == 1
        repo.save_changes()
        assert _count(conn) == 0
        assert repo.get_command_by_id(command.id) is None

    def test_delete_of_unsaved_command_drops_staged_insert(self, repo: CommandRepo, conn: sqlite3.Connection) -> None:
        command = Command(how_to="a", platform="x", command_line="1")
        repo.create_command(command)
        repo.delete_command(command)
        repo.save_changes()
        assert _count(conn) == 0
        assert command.id is None

    def test_delete_of_unknown_unsaved_command_raises(self, repo: CommandRepo) -> None:
        with pytest.raises(ValueError):
            repo.delete_command(Command(how_to="a", platform="x", command_line="1"))

    @pytest.mark.parametrize("operation", ["create_command", "delete_command"])
    def test_none_is_rejected(self, repo: CommandRepo, operation: str) -> None:
        with pytest.raises(ValueError):
            getattr(repo, operation)(None)

    def test_failed_save_rolls_back_and_keeps_staged_changes(
        self, repo: CommandRepo, conn: sqlite3.Connection
    ) -> None:
        good = Command(how_to="a", platform="x", command_line="1")
        bad = Command(how_to=None, platform="x", command_line="2")
        repo.create_command(good)
        repo.create_command(bad)

        with pytest.raises(sqlite3.IntegrityError):
            repo.save_changes()
        assert _count(conn) == 0
        assert good.id is None

        bad.how_to = "fixed"
        repo.save_changes()
        assert _count(conn) == 2
