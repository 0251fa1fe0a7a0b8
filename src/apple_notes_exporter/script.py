"""Run the Notes AppleScript through osascript."""

import subprocess
import sys
from pathlib import Path

from loguru import logger

from apple_notes_exporter.config import OSASCRIPT, resolve_script_path
from apple_notes_exporter.errors import CollaboratorFailedError, CollaboratorUnavailableError


class NotesScript:
    """Client for the AppleScript that reads the Notes app.

    The script understands two commands: `list` prints the folder listing and
    `body <note-id>` prints one note's HTML. Both write to stdout.
    """

    def __init__(self, script_path: Path | None = None) -> None:
        self.script_path = resolve_script_path(script_path)
        if not self.script_path.is_file():
            msg = f"AppleScript not found at {str(self.script_path)!r}"
            raise CollaboratorUnavailableError(msg)
        logger.debug("Notes script ready: {!r}", str(self.script_path))

    def run(self, *args: str) -> str:
        """Run the script with `args` and return its stdout.

        Raises:
            CollaboratorUnavailableError: Not on macOS, or osascript cannot be launched.
            CollaboratorFailedError: The script exited with a non-zero status.
        """
        if sys.platform != "darwin":
            msg = (
                "This tool only works on macOS. It relies on AppleScript and the Notes app, "
                f"which are not available on {sys.platform}."
            )
            raise CollaboratorUnavailableError(msg)

        cmd = [OSASCRIPT, str(self.script_path.resolve()), *args]
        logger.debug("Running: {} {}", OSASCRIPT, " ".join(repr(a) for a in args))
        try:
            proc = subprocess.run(cmd, capture_output=True, encoding="utf-8", check=False)
        except OSError as e:
            msg = f"Failed to launch {OSASCRIPT}: {e}"
            raise CollaboratorUnavailableError(msg) from e

        if proc.returncode != 0:
            raise CollaboratorFailedError(proc.returncode, proc.stderr)
        return proc.stdout

    def list_tree(self) -> str:
        return self.run("list")

    def note_body(self, note_id: str) -> str:
        # osascript appends a newline to the value the script returns.
        return self.run("body", note_id).removesuffix("\n")
