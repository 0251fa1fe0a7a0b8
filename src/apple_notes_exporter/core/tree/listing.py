"""Parse the Notes script's folder listing into an account/folder forest.

The listing is one record per line, tab-separated, in pre-order:

    account<TAB>iCloud
    folder<TAB>1<TAB>Work
    note<TAB>1<TAB>x-coredata://.../ICNote/p12<TAB>Meeting notes
    folder<TAB>2<TAB>Archive

A folder's depth is 1 at the top of its account and one more for each level
below. A note's depth is the depth of the folder it belongs to.
"""

from dataclasses import dataclass, field

from apple_notes_exporter.errors import ListingParseError
from apple_notes_exporter.models.folder import Account, FolderNode, NoteRef


@dataclass
class _Draft:
    """Mutable stand-in for a FolderNode while its subtree is still being read."""

    name: str
    path: tuple[str, ...]
    children: list["_Draft"] = field(default_factory=list)
    notes: list[NoteRef] = field(default_factory=list)

    def freeze(self, account: str) -> FolderNode:
        return FolderNode(
            account=account,
            name=self.name,
            path=self.path,
            children=tuple(c.freeze(account) for c in self.children),
            notes=tuple(self.notes),
        )


def _parse_depth(raw: str, line_no: int, line: str) -> int:
    try:
        depth = int(raw)
    except ValueError:
        raise ListingParseError(line_no, line, "depth is not a number") from None
    if depth < 1:
        raise ListingParseError(line_no, line, "depth must be at least 1")
    return depth


def parse_listing(text: str) -> list[Account]:
    """Build the folder forest from listing text.

    Raises:
        ListingParseError: On unknown record kinds, missing fields, records
            outside an account, or depths that skip a level.
    """
    accounts: list[tuple[str, list[_Draft]]] = []
    # stack[i] is the open folder at depth i + 1
    stack: list[_Draft] = []

    # Only "\n" ends a record; titles may carry other line-breaking characters.
    for line_no, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        if not line.strip():
            continue
        kind, *fields = line.split("\t")

        if kind == "account":
            if len(fields) != 1 or not fields[0]:
                raise ListingParseError(line_no, line, "account needs a name")
            accounts.append((fields[0], []))
            stack = []
            continue

        if not accounts:
            raise ListingParseError(line_no, line, "record before any account")

        if kind == "folder":
            if len(fields) != 2 or not fields[1]:
                raise ListingParseError(line_no, line, "folder needs depth and name")
            depth = _parse_depth(fields[0], line_no, line)
            if depth > len(stack) + 1:
                raise ListingParseError(line_no, line, "folder skips a level")
            del stack[depth - 1 :]
            draft = _Draft(name=fields[1], path=tuple(f.name for f in stack))
            if stack:
                stack[-1].children.append(draft)
            else:
                accounts[-1][1].append(draft)
            stack.append(draft)

        elif kind == "note":
            if len(fields) < 3 or not fields[1]:
                raise ListingParseError(line_no, line, "note needs depth, id and title")
            depth = _parse_depth(fields[0], line_no, line)
            if depth > len(stack):
                raise ListingParseError(line_no, line, "note outside an open folder")
            # Titles may themselves contain tabs.
            title = "\t".join(fields[2:])
            stack[depth - 1].notes.append(NoteRef(note_id=fields[1], title=title))

        else:
            raise ListingParseError(line_no, line, f"unknown record {kind!r}")

    return [
        Account(name=name, folders=tuple(d.freeze(name) for d in drafts))
        for name, drafts in accounts
    ]


def render_listing(accounts: list[Account], *, with_notes: bool = False) -> str:
    """Render the forest as an indented tree for display."""
    lines: list[str] = []

    def walk(folder: FolderNode) -> None:
        indent = "  " * folder.depth
        lines.append(f"{indent}{folder.name} ({folder.note_count()} notes)")
        if with_notes:
            lines.extend(f"{indent}  - {n.title}" for n in folder.notes)
        for child in folder.children:
            walk(child)

    for account in accounts:
        lines.append(f"{account.name}:")
        for folder in account.folders:
            walk(folder)
    return "\n".join(lines)
