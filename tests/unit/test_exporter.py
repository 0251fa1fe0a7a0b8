"""Tests for the high-level Exporter API."""

from pathlib import Path
from unittest.mock import patch

import pytest

from apple_notes_exporter import exporter as exporter_mod
from apple_notes_exporter.errors import FolderNotFoundError, OutputDirectoryError
from apple_notes_exporter.exporter import Exporter, export_folder_from_account
from tests.unit.fakes import FakeNotesSource


def test_folders_parses_listing(fake_source: FakeNotesSource) -> None:
    accounts = Exporter(fake_source).folders()

    assert [a.name for a in accounts] == ["iCloud", "Google"]


def test_export_creates_output_dir(fake_source: FakeNotesSource, tmp_path: Path) -> None:

    out = tmp_path / "nested" / "out"

    stats = Exporter(fake_source).export("Work", out)

    assert stats.notes_written == 1
    assert (out / "Work").is_dir()


def test_export_unqualified_prefers_shallow_match(
    fake_source: FakeNotesSource, tmp_path: Path
) -> None:

    stats = Exporter(fake_source).export("Recipes", tmp_path)

    assert stats.notes_written == 3
    assert "body note-5" not in fake_source.calls


def test_export_from_account_picks_that_account(
    fake_source: FakeNotesSource, tmp_path: Path
) -> None:

    stats = Exporter(fake_source).export_from_account("Google", "Recipes", tmp_path)

    assert stats.notes_written == 1
    assert fake_source.calls == ["list", "body note-5"]


def test_export_qualified_string_target(fake_source: FakeNotesSource, tmp_path: Path) -> None:

    stats = Exporter(fake_source).export("Google:Recipes", tmp_path)

    assert stats.notes_written == 1


def test_export_missing_folder_raises(fake_source: FakeNotesSource, tmp_path: Path) -> None:

    with pytest.raises(FolderNotFoundError, match="Nope"):
        Exporter(fake_source).export("Nope", tmp_path)


def test_export_dry_run_does_not_create_output_dir(
    fake_source: FakeNotesSource, tmp_path: Path
) -> None:
    out = tmp_path / "out"

    stats = Exporter(fake_source).export("Recipes", out, dry_run=True)

    assert stats.notes_written == 3
    assert not out.exists()


def test_export_reports_uncreatable_output_dir(
    fake_source: FakeNotesSource, tmp_path: Path
) -> None:

    (tmp_path / "file").write_text("x")

    with pytest.raises(OutputDirectoryError, match="Unable to create output directory"):
        Exporter(fake_source).export("Work", tmp_path / "file" / "out")


def test_module_function_uses_notes_script(fake_source: FakeNotesSource, tmp_path: Path) -> None:

    with patch.object(exporter_mod, "NotesScript", return_value=fake_source) as script_cls:
        stats = export_folder_from_account("iCloud", "Work", tmp_path)

    script_cls.assert_called_once_with(None)
    assert stats.notes_written == 1
