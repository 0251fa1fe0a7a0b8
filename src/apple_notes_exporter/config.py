"""Configuration constants for apple-notes-exporter."""

import os
from pathlib import Path

# Bundled AppleScript used to talk to the Notes app.
BUNDLED_SCRIPT: Path = Path(__file__).parent / "scripts" / "notes.applescript"

# Environment variable pointing at a replacement script. Used when no --script is passed.
SCRIPT_PATH_ENV: str = "APPLE_NOTES_EXPORTER_SCRIPT"

# Interpreter for the script.
OSASCRIPT: str = "osascript"

# Exported note files are named "<title><separator><disambiguator>.html".
NOTE_NAME_SEPARATOR: str = " -- "
DISAMBIGUATOR_LENGTH: int = 4
NOTE_SUFFIX: str = ".html"

# Files picked up by the standalone attachment extraction.
HTML_SUFFIXES: tuple[str, ...] = (".html", ".htm")

# Decoded images go to "<note stem>-attachments/attachment-001.png".
ATTACHMENTS_DIR_SUFFIX: str = "-attachments"
ATTACHMENT_NAME_FORMAT: str = "attachment-{index:03d}.{ext}"


def resolve_script_path(explicit: Path | None = None) -> Path:
    """Return the AppleScript to run.

    An explicit path wins, then the environment variable, then the bundled script.
    The path is not checked for existence here.
    """
    if explicit is not None:
        return explicit.expanduser()
    from_env = os.environ.get(SCRIPT_PATH_ENV)
    if from_env:
        return Path(from_env).expanduser()
    return BUNDLED_SCRIPT
