"""Errors raised by the exporter.

Only fatal conditions are exceptions. Per-note and per-attachment failures are
recovered where they happen and reported through the result objects instead.
"""

from pathlib import Path


class ExportError(Exception):
    """Base class for all fatal export errors."""


class CollaboratorUnavailableError(ExportError):
    """The Notes script cannot be run at all."""


class CollaboratorFailedError(ExportError):
    """The Notes script ran but exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr.strip()
        msg = f"AppleScript exited with status {returncode}"
        if self.stderr:
            msg += f": {self.stderr}"
        super().__init__(msg)


class FolderNotFoundError(ExportError):
    """No folder in the listing matches the requested target."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Folder {target!r} not found")


class ListingParseError(ExportError):
    """The folder listing produced by the script is malformed."""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        super().__init__(f"Bad listing line {line_no} ({reason}): {line!r}")


class OutputDirectoryError(ExportError):
    """The export output directory cannot be created."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Unable to create output directory {str(path)!r}: {cause}")
