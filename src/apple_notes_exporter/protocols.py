"""Protocols for dependency injection in the exporter."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class NotesSourceProtocol(Protocol):
    """Protocol for whatever supplies the folder listing and note bodies."""

    def list_tree(self) -> str:
        """Return the raw account/folder/note listing text."""
        ...

    def note_body(self, note_id: str) -> str:
        """Return the raw HTML body of one note."""
        ...


@runtime_checkable
class WriterProtocol(Protocol):
    """Protocol for note writers used by the export walker."""

    dry_run: bool

    def make_unique_name(self, base: str, *, suffix: str = "") -> str:
        """Generate a unique filename or prefix."""
        ...

    def write_note(self, fname_rel: str, contents: str) -> Path:
        """Write a note file relative to the output directory."""
        ...
