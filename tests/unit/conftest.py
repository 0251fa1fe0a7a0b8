"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from tests.unit.fakes import FakeNotesSource
from tests.unit.samples import GIF_BYTES, JPEG_BYTES, LISTING, PNG_BYTES, img_tag


@pytest.fixture
def fake_source() -> FakeNotesSource:
    """A notes source serving LISTING; Pancakes and Cake carry inline images."""
    return FakeNotesSource(
        LISTING,
        bodies={
            "note-1": f"<div><h1>Pancakes</h1>{img_tag(PNG_BYTES)}</div>",
            "note-3": (
                f"<div>{img_tag(JPEG_BYTES, 'image/jpeg')}{img_tag(GIF_BYTES, 'image/gif')}</div>"
            ),
        },
    )


@pytest.fixture
def write_note(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing an HTML file below tmp_path."""

    def _write(name: str, html: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(html.encode("utf-8"))
        return path

    return _write
