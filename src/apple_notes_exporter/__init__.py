"""Apple Notes folder export with inline image extraction."""

from apple_notes_exporter.core.attachments.extractor import extract_directory, extract_file
from apple_notes_exporter.exporter import (
    Exporter,
    export_folder,
    export_folder_from_account,
    list_folders,
)
from apple_notes_exporter.protocols import NotesSourceProtocol, WriterProtocol
from apple_notes_exporter.script import NotesScript
from apple_notes_exporter.writer import NoteWriter

__all__ = [
    "Exporter",
    "NoteWriter",
    "NotesScript",
    "NotesSourceProtocol",
    "WriterProtocol",
    "export_folder",
    "export_folder_from_account",
    "extract_directory",
    "extract_file",
    "list_folders",
]
