"""Domain models for the Notes account/folder forest."""

import hashlib
from dataclasses import dataclass

from apple_notes_exporter.config import DISAMBIGUATOR_LENGTH


@dataclass(frozen=True)
class NoteRef:
    """A note listed inside a folder. The HTML body is fetched on export."""

    note_id: str
    title: str

    @property
    def disambiguator(self) -> str:
        """Short stable tag derived from the note id, so repeated titles do not collide."""
        digest = hashlib.sha1(self.note_id.encode("utf-8")).hexdigest()
        return digest[:DISAMBIGUATOR_LENGTH]


@dataclass(frozen=True)
class FolderNode:
    """A folder and its whole subtree, in listing order."""

    account: str
    name: str
    path: tuple[str, ...] = ()
    children: tuple["FolderNode", ...] = ()
    notes: tuple[NoteRef, ...] = ()

    @property
    def depth(self) -> int:
        """1 for a top-level folder of its account."""
        return len(self.path) + 1

    @property
    def qualified_name(self) -> str:
        return f"{self.account}:{'/'.join((*self.path, self.name))}"

    def note_count(self) -> int:
        """Number of notes in this folder and all descendants."""
        return len(self.notes) + sum(child.note_count() for child in self.children)


@dataclass(frozen=True)
class Account:
    """A Notes account (iCloud, On My Mac, ...) with its top-level folders."""

    name: str
    folders: tuple[FolderNode, ...] = ()


@dataclass(frozen=True)
class FolderTarget:
    """A parsed `[Account:]Folder` export target."""

    folder: str
    account: str | None = None

    def __str__(self) -> str:
        if self.account is None:
            return self.folder
        return f"{self.account}:{self.folder}"
