"""High-level export API: list folders, export one folder tree."""

from pathlib import Path

from loguru import logger

from apple_notes_exporter.core.export.walker import export_tree
from apple_notes_exporter.core.tree.listing import parse_listing
from apple_notes_exporter.core.tree.resolver import parse_target, resolve_folder
from apple_notes_exporter.errors import OutputDirectoryError
from apple_notes_exporter.models.attachment import ExportStats
from apple_notes_exporter.models.folder import Account, FolderNode, FolderTarget
from apple_notes_exporter.protocols import NotesSourceProtocol
from apple_notes_exporter.script import NotesScript
from apple_notes_exporter.writer import NoteWriter


class Exporter:
    """Export Notes folders from a notes source.

    The source is the bundled AppleScript in normal use; tests pass a fake.
    """

    def __init__(self, source: NotesSourceProtocol) -> None:
        self.source = source

    def folders(self) -> list[Account]:
        """Fetch and parse the full account/folder listing."""
        return parse_listing(self.source.list_tree())

    def find(self, target: str | FolderTarget) -> FolderNode:
        if isinstance(target, str):
            target = parse_target(target)
        return resolve_folder(self.folders(), target)

    def export(
        self,
        target: str | FolderTarget,
        output_dir: str | Path,
        *,
        extract: bool = True,
        dry_run: bool = False,
    ) -> ExportStats:
        """Export a folder, found by breadth-first search, and its subfolders.

        Args:
            target: `Folder` or `Account:Folder`.
            output_dir: Created if missing (unless dry_run).
            extract: Move inline images out of each written note.
            dry_run: Log what would be written, write nothing.

        Raises:
            FolderNotFoundError: No folder matches `target`.
            CollaboratorUnavailableError, CollaboratorFailedError: The listing
                could not be obtained.
        """
        output_dir = Path(output_dir).expanduser()
        if not dry_run:
            try:
                output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputDirectoryError(output_dir, e) from e
        output_dir = output_dir.resolve()

        folder = self.find(target)
        logger.info(
            "Exporting {} ({} notes) to {}", folder.qualified_name, folder.note_count(), output_dir
        )

        writer = NoteWriter(output_dir, dry_run=dry_run)
        stats = export_tree(folder, output_dir, self.source, writer, extract=extract)
        writer.finalize()
        return stats

    def export_from_account(
        self,
        account: str,
        folder: str,
        output_dir: str | Path,
        *,
        extract: bool = True,
        dry_run: bool = False,
    ) -> ExportStats:
        """Like `export`, restricted to one account."""
        target = FolderTarget(folder=folder, account=account)
        return self.export(target, output_dir, extract=extract, dry_run=dry_run)


def list_folders(script_path: Path | None = None) -> list[Account]:
    """List all accounts and folders using the Notes script."""
    return Exporter(NotesScript(script_path)).folders()


def export_folder(
    folder: str,
    output_dir: str | Path,
    *,
    script_path: Path | None = None,
    extract: bool = True,
) -> ExportStats:
    """Export a folder (searching all accounts) using the Notes script."""
    return Exporter(NotesScript(script_path)).export(folder, output_dir, extract=extract)


def export_folder_from_account(
    account: str,
    folder: str,
    output_dir: str | Path,
    *,
    script_path: Path | None = None,
    extract: bool = True,
) -> ExportStats:
    """Export a folder from one account using the Notes script."""
    return Exporter(NotesScript(script_path)).export_from_account(
        account, folder, output_dir, extract=extract
    )
