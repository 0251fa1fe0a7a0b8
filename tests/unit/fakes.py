"""Fake implementations for testing the exporter."""

from apple_notes_exporter.errors import CollaboratorFailedError


class FakeNotesSource:
    """In-memory fake for NotesScript.

    Serves a fixed listing and per-note bodies, and records every body request.
    """

    def __init__(self, listing: str, bodies: dict[str, str] | None = None) -> None:
        self.listing = listing
        self.bodies: dict[str, str] = dict(bodies or {})
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def fail_on(self, note_id: str) -> None:
        """Make fetching this note's body fail like a script error."""
        self.failing.add(note_id)

    def list_tree(self) -> str:
        self.calls.append("list")
        return self.listing

    def note_body(self, note_id: str) -> str:
        self.calls.append(f"body {note_id}")
        if note_id in self.failing:
            raise CollaboratorFailedError(1, f"Can't get note id {note_id}")
        return self.bodies.get(note_id, f"<div>{note_id}</div>")
