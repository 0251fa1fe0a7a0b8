"""Domain models for inline image attachments."""

from dataclasses import dataclass, field
from pathlib import Path

from apple_notes_exporter.config import ATTACHMENT_NAME_FORMAT


@dataclass(frozen=True)
class AttachmentMatch:
    """A `data:image/...;base64,...` URI located in a note's HTML.

    `html[start:end]` is exactly the URI. `payload` may contain line-wrapping
    whitespace; it is stripped before decoding.
    """

    start: int
    end: int
    mime_type: str
    payload: str

    @property
    def subtype(self) -> str:
        return self.mime_type.partition("/")[2]


@dataclass(frozen=True)
class AttachmentFile:
    """A decoded image written next to its note."""

    directory: Path
    index: int
    extension: str

    @property
    def file_name(self) -> str:
        return ATTACHMENT_NAME_FORMAT.format(index=self.index, ext=self.extension)

    @property
    def path(self) -> Path:
        return self.directory / self.file_name

    @property
    def relative_ref(self) -> str:
        """Reference usable from the note's HTML, which lives beside the directory."""
        return f"{self.directory.name}/{self.file_name}"


@dataclass(frozen=True)
class SkippedAttachment:
    """A match left inline because it could not be decoded or written."""

    position: int
    reason: str


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of running extraction over one HTML file."""

    path: Path
    attachments: tuple[AttachmentFile, ...] = ()
    skipped: tuple[SkippedAttachment, ...] = ()
    error: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.attachments)


@dataclass
class ExportStats:
    """Counters collected over one export run."""

    folders_exported: int = 0
    folders_failed: int = 0
    notes_written: int = 0
    notes_failed: int = 0
    extractions: list[ExtractionResult] = field(default_factory=list)

    @property
    def attachments_extracted(self) -> int:
        return sum(len(r.attachments) for r in self.extractions)

    @property
    def attachments_skipped(self) -> int:
        return sum(len(r.skipped) for r in self.extractions)
