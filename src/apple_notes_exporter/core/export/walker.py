"""Mirror a resolved folder subtree to disk, one HTML file per note."""

import re
from pathlib import Path

from loguru import logger

from apple_notes_exporter.config import (
    ATTACHMENTS_DIR_SUFFIX,
    DISAMBIGUATOR_LENGTH,
    NOTE_NAME_SEPARATOR,
    NOTE_SUFFIX,
)
from apple_notes_exporter.core.attachments.extractor import extract_file
from apple_notes_exporter.errors import CollaboratorFailedError
from apple_notes_exporter.models.attachment import ExportStats, ExtractionResult
from apple_notes_exporter.models.folder import FolderNode, NoteRef
from apple_notes_exporter.protocols import NotesSourceProtocol, WriterProtocol

_UNSAFE_CHARS = re.compile(r"[/\\:\x00-\x1f\x7f]+")
# Most filesystems cap a path component at 255 bytes. The longest name derived
# from a title is "<title> -- <id>-NNN-attachments".
_MAX_NAME_BYTES = 255 - (
    len(NOTE_NAME_SEPARATOR) + DISAMBIGUATOR_LENGTH + len("-NNN") + len(ATTACHMENTS_DIR_SUFFIX)
)


def safe_name(title: str) -> str:
    """Turn a folder or note title into a single path component.

    Path separators and control characters become "_". Leading/trailing dots
    and spaces are stripped so names can neither hide nor climb directories.
    Long titles are cut to a UTF-8 byte budget, on a character boundary.
    """
    name = _UNSAFE_CHARS.sub("_", title).strip(". ")
    encoded = name.encode("utf-8")
    if len(encoded) > _MAX_NAME_BYTES:
        name = encoded[:_MAX_NAME_BYTES].decode("utf-8", errors="ignore")
    return name.rstrip(". ") or "unnamed"


def note_file_stem(note: NoteRef) -> str:
    """`<title> -- <disambiguator>`, the stem of a note's HTML file."""
    return f"{safe_name(note.title)}{NOTE_NAME_SEPARATOR}{note.disambiguator}"


class ExportWalker:
    """Write a folder subtree through a writer, extracting attachments per note.

    Failures stay local: a folder whose directory cannot be created loses its
    own subtree only, and a note that cannot be fetched or written is skipped.
    Both are counted in the returned stats.
    """

    def __init__(
        self,
        source: NotesSourceProtocol,
        writer: WriterProtocol,
        output_dir: Path,
        *,
        extract: bool = True,
    ) -> None:
        self._source = source
        self._writer = writer
        self._output_dir = output_dir
        self._extract = extract
        self.stats = ExportStats()

    def export(self, folder: FolderNode) -> ExportStats:
        """Export `folder` into `<output_dir>/<folder name>/`."""
        self._export_folder(folder, "")
        logger.info(
            "Exported {} folder(s), {} note(s); {} attachment(s) extracted",
            self.stats.folders_exported,
            self.stats.notes_written,
            self.stats.attachments_extracted,
        )
        if self.stats.folders_failed or self.stats.notes_failed:
            logger.warning(
                "{} folder(s) and {} note(s) could not be exported",
                self.stats.folders_failed,
                self.stats.notes_failed,
            )
        return self.stats

    def _export_folder(self, folder: FolderNode, parent_rel: str) -> None:
        rel_dir = self._writer.make_unique_name(parent_rel + safe_name(folder.name))
        if not self._writer.dry_run:
            try:
                (self._output_dir / rel_dir).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning("Cannot create folder {!r}, skipping its subtree: {}", rel_dir, e)
                self.stats.folders_failed += 1
                return
        self.stats.folders_exported += 1
        logger.debug("Exporting folder {} ({} notes)", folder.qualified_name, len(folder.notes))

        for note in folder.notes:
            self._export_note(note, rel_dir)
        for child in folder.children:
            self._export_folder(child, rel_dir + "/")

    def _export_note(self, note: NoteRef, rel_dir: str) -> None:
        base = f"{rel_dir}/{note_file_stem(note)}"
        stem = self._writer.make_unique_name(base, suffix=NOTE_SUFFIX)
        try:
            html = self._source.note_body(note.note_id)
            path = self._writer.write_note(stem + NOTE_SUFFIX, html)
        except (CollaboratorFailedError, OSError) as e:
            logger.debug("Cannot export note {!r}: {}", note.title, e)
            self.stats.notes_failed += 1
            return
        self.stats.notes_written += 1

        if not self._extract or self._writer.dry_run:
            return
        try:
            result = extract_file(path)
        except OSError as e:
            logger.debug("Cannot extract attachments from {}: {}", path, e)
            result = ExtractionResult(path=path, error=str(e))
        self.stats.extractions.append(result)


def export_tree(
    folder: FolderNode,
    output_dir: Path,
    source: NotesSourceProtocol,
    writer: WriterProtocol,
    *,
    extract: bool = True,
) -> ExportStats:
    """Export `folder` and its descendants below `output_dir`."""
    return ExportWalker(source, writer, output_dir, extract=extract).export(folder)
