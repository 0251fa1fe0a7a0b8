"""Domain models."""

from apple_notes_exporter.models.attachment import (
    AttachmentFile,
    AttachmentMatch,
    ExportStats,
    ExtractionResult,
    SkippedAttachment,
)
from apple_notes_exporter.models.folder import Account, FolderNode, FolderTarget, NoteRef

__all__ = [
    "Account",
    "AttachmentFile",
    "AttachmentMatch",
    "ExportStats",
    "ExtractionResult",
    "FolderNode",
    "FolderTarget",
    "NoteRef",
    "SkippedAttachment",
]
