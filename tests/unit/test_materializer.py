"""Tests for decoding and storing attachments."""

import base64
from pathlib import Path

from apple_notes_exporter.core.attachments.materializer import (
    AttachmentMaterializer,
    companion_dir_for,
)
from apple_notes_exporter.models.attachment import (
    AttachmentFile,
    AttachmentMatch,
    SkippedAttachment,
)
from tests.unit.samples import GIF_BYTES, JPEG_BYTES, PNG_BYTES


def _match(data: bytes | str, mime_type: str = "image/png") -> AttachmentMatch:
    payload = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
    return AttachmentMatch(start=0, end=0, mime_type=mime_type, payload=payload)


def test_companion_dir_appends_suffix_to_stem(tmp_path: Path) -> None:
    note = tmp_path / "Recipe -- 9f3c.html"

    assert companion_dir_for(note) == tmp_path / "Recipe -- 9f3c-attachments"


def test_materialize_writes_decoded_bytes(tmp_path: Path) -> None:
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    result = materializer.materialize(_match(PNG_BYTES))

    assert isinstance(result, AttachmentFile)
    assert result.path == tmp_path / "note-attachments" / "attachment-001.png"
    assert result.path.read_bytes() == PNG_BYTES
    assert result.relative_ref == "note-attachments/attachment-001.png"


def test_materialized_bytes_reencode_to_original_payload(tmp_path: Path) -> None:
    payload = base64.b64encode(JPEG_BYTES * 50).decode("ascii")
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    result = materializer.materialize(_match(payload, "image/jpeg"))

    assert isinstance(result, AttachmentFile)
    assert base64.b64encode(result.path.read_bytes()).decode("ascii") == payload


def test_indices_are_contiguous_across_decode_failures(tmp_path: Path) -> None:
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    first = materializer.materialize(_match(PNG_BYTES))
    broken = materializer.materialize(_match("abc"))
    second = materializer.materialize(_match(GIF_BYTES, "image/gif"))

    assert isinstance(first, AttachmentFile) and first.index == 1
    assert isinstance(broken, SkippedAttachment)
    assert broken.position == 2
    assert "decode failed" in broken.reason
    assert isinstance(second, AttachmentFile) and second.file_name == "attachment-002.gif"


def test_directory_not_created_when_nothing_decodes(tmp_path: Path) -> None:
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    result = materializer.materialize(_match("abc"))

    assert isinstance(result, SkippedAttachment)
    assert not (tmp_path / "note-attachments").exists()


def test_existing_file_with_same_bytes_is_reused(tmp_path: Path) -> None:
    directory = tmp_path / "note-attachments"
    directory.mkdir()
    (directory / "attachment-001.png").write_bytes(PNG_BYTES)
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    result = materializer.materialize(_match(PNG_BYTES))

    assert isinstance(result, AttachmentFile)
    assert result.index == 1
    assert sorted(p.name for p in directory.iterdir()) == ["attachment-001.png"]


def test_existing_file_with_other_bytes_advances_index(tmp_path: Path) -> None:
    directory = tmp_path / "note-attachments"
    directory.mkdir()
    (directory / "attachment-001.png").write_bytes(b"\x89PNG\r\n\x1a\nother")
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    result = materializer.materialize(_match(PNG_BYTES))

    assert isinstance(result, AttachmentFile)
    assert result.index == 2
    assert (directory / "attachment-001.png").read_bytes() == b"\x89PNG\r\n\x1a\nother"
    assert (directory / "attachment-002.png").read_bytes() == PNG_BYTES


def test_write_failure_is_skipped(tmp_path: Path) -> None:
    # A file where the companion directory should be makes mkdir fail.
    (tmp_path / "note-attachments").write_text("in the way")
    materializer = AttachmentMaterializer(tmp_path / "note.html")

    result = materializer.materialize(_match(PNG_BYTES))

    assert isinstance(result, SkippedAttachment)
    assert "write failed" in result.reason
