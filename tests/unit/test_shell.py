"""Unit tests for the interactive menu shell."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from ipmanager.inventory.persistence import load, save
from ipmanager.inventory.record import Record
from ipmanager.inventory.store import RecordStore
from ipmanager.shell import MENU, InteractiveShell, load_store, main


def scripted(*answers: str) -> Callable[[str], str]:
    """Return an input function that replays *answers* in order."""
    remaining = iter(answers)

    def read(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read


@pytest.fixture
def make_shell(
    database: Path,
    fake_probe: Callable[[str, int], bool],
    console: Console,
    err_console: Console,
) -> Callable[..., InteractiveShell]:
    """Factory building a shell around a store with scripted input."""

    def build(store: RecordStore, *answers: str) -> InteractiveShell:
        return InteractiveShell(
            store,
            database,
            probe=fake_probe,
            input_fn=scripted(*answers),
            console=console,
            err_console=err_console,
        )

    return build


class TestMenu:
    """Tests for menu handling."""

    def test_exit_saves_and_returns_zero(
        self, make_shell: Callable[..., InteractiveShell], store: RecordStore, database: Path
    ) -> None:
        shell = make_shell(store, "5")
        assert shell.run() == 0
        assert [r.ip for r in load(database)] == ["10.0.0.1", "192.168.1.1"]

    def test_menu_is_shown(
        self, make_shell: Callable[..., InteractiveShell], console: Console
    ) -> None:
        make_shell(RecordStore(), "5").run()
        assert MENU in console.file.getvalue()

    def test_non_numeric_choice_is_reported(
        self,
        make_shell: Callable[..., InteractiveShell],
        err_console: Console,
        database: Path,
    ) -> None:
        assert make_shell(RecordStore(), "abc", "5").run() == 0
        assert "not a number" in err_console.file.getvalue()

    def test_out_of_range_choice_is_reported(
        self, make_shell: Callable[..., InteractiveShell], err_console: Console
    ) -> None:
        make_shell(RecordStore(), "9", "5").run()
        assert "Invalid choice" in err_console.file.getvalue()

    def test_closed_input_propagates_without_saving(
        self, make_shell: Callable[..., InteractiveShell], database: Path
    ) -> None:
        with pytest.raises(EOFError):
            make_shell(RecordStore(), "1").run()
        assert not database.exists()

    def test_save_failure_is_reported(
        self,
        fake_probe: Callable[[str, int], bool],
        console: Console,
        err_console: Console,
        tmp_path: Path,
    ) -> None:
        shell = InteractiveShell(
            RecordStore(),
            tmp_path / "missing" / "db.json",
            probe=fake_probe,
            input_fn=scripted("5"),
            console=console,
            err_console=err_console,
        )
        assert shell.run() == 1
        assert "Error saving to database" in err_console.file.getvalue()


class TestOperations:
    """Tests for the add, delete, edit, and display menu operations."""

    def test_display_shows_status(
        self,
        make_shell: Callable[..., InteractiveShell],
        store: RecordStore,
        console: Console,
    ) -> None:
        make_shell(store, "1", "5").run()
        output = console.file.getvalue()
        assert "Online" in output
        assert "Offline" in output

    def test_add_record(
        self, make_shell: Callable[..., InteractiveShell], database: Path
    ) -> None:
        shell = make_shell(
            RecordStore(), "2", "10.0.0.1", "10.0.0.0/24", "10.0.0.254", "core switch", "22", "5"
        )
        shell.run()
        assert shell.store.records == [
            Record(1, "10.0.0.1", "10.0.0.0/24", "10.0.0.254", "core switch", 22)
        ]

    def test_add_invalid_ip_is_rejected(
        self,
        make_shell: Callable[..., InteractiveShell],
        store: RecordStore,
        err_console: Console,
    ) -> None:
        shell = make_shell(store, "2", "999.1.1.1", "10.0.0.0/24", "10.0.0.254", "bad", "", "5")
        shell.run()
        assert len(shell.store) == 2
        assert "999.1.1.1" in err_console.file.getvalue()

    def test_delete_out_of_range(
        self,
        make_shell: Callable[..., InteractiveShell],
        store: RecordStore,
        err_console: Console,
    ) -> None:
        shell = make_shell(store, "3", "5", "5")
        shell.run()
        assert len(shell.store) == 2
        assert "out of range" in err_console.file.getvalue()

    def test_delete_by_ip(
        self, make_shell: Callable[..., InteractiveShell], store: RecordStore
    ) -> None:
        shell = make_shell(store, "3", "192.168.1.1", "5")
        shell.run()
        assert [r.id for r in shell.store] == [1]

    def test_edit_keeps_blank_fields(
        self, make_shell: Callable[..., InteractiveShell], store: RecordStore
    ) -> None:
        shell = make_shell(store, "4", "1", "", "", "10.0.0.253", "", "", "5")
        shell.run()
        record = shell.store.find(1)
        assert record.gateway == "10.0.0.253"
        assert record.description == "core switch"

    def test_edit_invalid_gateway_leaves_record(
        self,
        make_shell: Callable[..., InteractiveShell],
        store: RecordStore,
        core_switch: Record,
        err_console: Console,
    ) -> None:
        before = store.find(1)
        shell = make_shell(store, "4", "1", "", "10.0.2.0/24", "not-an-ip", "new", "", "5")
        shell.run()
        assert shell.store.find(1) == before
        assert "gateway" in err_console.file.getvalue()

    def test_display_with_markup_like_description_then_exit_saves(
        self,
        make_shell: Callable[..., InteractiveShell],
        console: Console,
        database: Path,
    ) -> None:
        shell = make_shell(
            RecordStore(),
            "2", "10.0.0.1", "10.0.0.0/24", "10.0.0.254", "see [/notes]", "22",
            "1",
            "5",
        )
        assert shell.run() == 0
        assert "see [/notes]" in console.file.getvalue()
        assert [r.description for r in load(database)] == ["see [/notes]"]

    def test_edit_unknown_target(
        self,
        make_shell: Callable[..., InteractiveShell],
        store: RecordStore,
        err_console: Console,
    ) -> None:
        make_shell(store, "4", "10.9.9.9", "5").run()
        assert "not found" in err_console.file.getvalue()


class TestLoadStore:
    """Tests for load_store."""

    def test_missing_file_starts_empty(self, database: Path, err_console: Console) -> None:
        assert len(load_store(database, err_console=err_console)) == 0
        assert err_console.file.getvalue() == ""

    def test_malformed_file_starts_empty_and_reports(
        self, database: Path, err_console: Console
    ) -> None:
        database.write_text("{broken", encoding="utf-8")
        assert len(load_store(database, err_console=err_console)) == 0
        assert "Error loading database" in err_console.file.getvalue()

    def test_existing_file_is_loaded(
        self, database: Path, sample_records: list[Record], err_console: Console
    ) -> None:
        save(database, sample_records)
        assert load_store(database, err_console=err_console).records == sample_records


class TestMain:
    """Tests for the main entry point."""

    def test_main_round_trip(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        answers = scripted("2", "10.0.0.1", "10.0.0.0/24", "10.0.0.254", "core switch", "22", "5")
        with patch("builtins.input", side_effect=answers):
            assert main() == 0
        data = json.loads((tmp_path / "ip_database.json").read_text(encoding="utf-8"))
        assert data == [
            {
                "id": 1,
                "ip": "10.0.0.1",
                "subnet": "10.0.0.0/24",
                "gateway": "10.0.0.254",
                "description": "core switch",
                "port": 22,
            }
        ]

    def test_main_uses_configured_database(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "ipmanager.yml").write_text("database: custom.json\n", encoding="utf-8")
        with patch("builtins.input", side_effect=scripted("5")):
            assert main() == 0
        assert (tmp_path / "custom.json").exists()

    def test_main_closed_input_exits_without_saving(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        with patch("builtins.input", side_effect=EOFError):
            assert main() == 1
        assert not (tmp_path / "ip_database.json").exists()
