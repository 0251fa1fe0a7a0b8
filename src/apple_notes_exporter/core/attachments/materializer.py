"""Decode base64 attachments and write them beside their note."""

import base64
import binascii
from pathlib import Path

from loguru import logger

from apple_notes_exporter.config import ATTACHMENTS_DIR_SUFFIX
from apple_notes_exporter.core.attachments.codec import guess_extension
from apple_notes_exporter.core.attachments.scanner import clean_payload
from apple_notes_exporter.models.attachment import (
    AttachmentFile,
    AttachmentMatch,
    SkippedAttachment,
)


def companion_dir_for(note_path: Path) -> Path:
    """Directory holding a note's attachments: "<stem>-attachments" next to the note."""
    return note_path.with_name(note_path.stem + ATTACHMENTS_DIR_SUFFIX)


class AttachmentMaterializer:
    """Write the attachments of one note.

    Indices are handed out only to successfully decoded images, so a corrupt
    image does not leave a gap. The companion directory is created on the first
    image actually written.

    An existing file with the candidate name is reused when its bytes are equal,
    and skipped over otherwise. Re-extracting a re-exported note therefore maps
    onto the files of the previous run instead of piling up copies.
    """

    def __init__(self, note_path: Path) -> None:
        self.note_path = note_path
        self.directory = companion_dir_for(note_path)
        self._last_index = 0
        self._position = 0

    def materialize(self, match: AttachmentMatch) -> AttachmentFile | SkippedAttachment:
        """Decode and store one match; return the file, or why it was skipped."""
        self._position += 1
        position = self._position

        try:
            data = base64.b64decode(clean_payload(match.payload), validate=True)
        except (binascii.Error, ValueError) as e:
            logger.debug("{}: cannot decode attachment #{}: {}", self.note_path, position, e)
            return SkippedAttachment(position=position, reason=f"decode failed: {e}")
        if not data:
            return SkippedAttachment(position=position, reason="empty payload")

        extension = guess_extension(data, match.mime_type)
        try:
            self.directory.mkdir(exist_ok=True)
            attachment = self._claim(data, extension)
        except OSError as e:
            logger.debug("{}: cannot write attachment #{}: {}", self.note_path, position, e)
            return SkippedAttachment(position=position, reason=f"write failed: {e}")

        logger.debug("{}: attachment #{} -> {}", self.note_path, position, attachment.path)
        return attachment

    def _claim(self, data: bytes, extension: str) -> AttachmentFile:
        index = self._last_index + 1
        while True:
            candidate = AttachmentFile(directory=self.directory, index=index, extension=extension)
            try:
                with open(candidate.path, "xb") as f:
                    f.write(data)
                break
            except FileExistsError:
                if candidate.path.read_bytes() == data:
                    break
            index += 1
        self._last_index = index
        return candidate
