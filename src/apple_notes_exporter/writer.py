"""Note file writer that tracks changes between runs."""

from pathlib import Path

from loguru import logger

from apple_notes_exporter.config import HTML_SUFFIXES


class NoteWriter:
    """Write exported notes in a smart way.

    - Do not rewrite files whose contents are the same.
    - Never write outside the output directory, nor anything but HTML.
    - Hand out unique names, so two notes never land in the same file.

    A note whose attachments were extracted on a previous run differs from its
    freshly exported HTML, so it counts as changed and is written again; the
    extraction that follows maps it back onto the existing attachment files.
    """

    def __init__(self, datadir: str | Path, dry_run: bool) -> None:
        self.datadir = str(Path(datadir).resolve())
        self.dry_run = dry_run

        if not dry_run and not Path(self.datadir).is_dir():
            msg = f"Output directory {self.datadir!r} not found"
            raise ValueError(msg)

        logger.debug("Writer ready, datadir {!r}, dry_run {!r}", self.datadir, dry_run)
        # Absolute paths written this run.
        self._files_made: set[str] = set()
        # Absolute paths handed out by make_unique_name.
        self._unique_names: set[str] = set()

        # list of (action, filename) tuples
        self.updates: list[tuple[str, str]] = []

        self._num_same = 0
        self._num_changed = 0
        self._finalized = False

    def is_possible_output(self, fname: str) -> bool:
        """Only HTML files are ever written by the exporter."""
        return fname.lower().endswith(HTML_SUFFIXES)

    def _absolute(self, fname_rel: str) -> str:
        if Path(fname_rel).is_absolute():
            msg = f"must be relative: {fname_rel!r}"
            raise ValueError(msg)
        fname = str((Path(self.datadir) / fname_rel).resolve())
        if not fname.startswith(self.datadir + "/"):
            msg = f"Path escapes datadir: {fname!r}"
            raise ValueError(msg)
        return fname

    def make_unique_name(self, base: str, *, suffix: str = "") -> str:
        """Generate unique filename or file prefix.

        Append numbers to "base" until (base + suffix) does not match any files made nor
        any previous result of this function.
        """
        unique_str = ""
        unique_count = 0
        while True:
            fname = self._absolute(base + unique_str + suffix)
            if fname not in self._files_made and fname not in self._unique_names:
                break
            unique_count += 1
            unique_str = f"-{unique_count}"

        self._unique_names.add(fname)
        return base + unique_str

    def write_note(self, fname_rel: str, contents: str) -> Path:
        """Write note HTML to a path relative to the output directory.

        Returns:
            Absolute path of the note file.
        """
        fname = self._absolute(fname_rel)
        if not self.is_possible_output(fname):
            msg = f"Wanted to write {fname!r} but is_possible_output() returns False"
            raise ValueError(msg)

        self._files_made.add(fname)
        data = contents.encode("utf-8", errors="surrogateescape")
        action = "create"
        try:
            if Path(fname).read_bytes() == data:
                self._num_same += 1
                return Path(fname)
            self._num_changed += 1
            action = "update"
        except FileNotFoundError:
            pass

        self.updates.append((action, fname))

        if self.dry_run:
            logger.info("dry-run: would {} {!r}", action, fname)
        else:
            logger.debug("Writing ({}) {!r}", action, fname)
            Path(fname).parent.mkdir(parents=True, exist_ok=True)
            Path(fname).write_bytes(data)
        return Path(fname)

    def finalize(self) -> None:
        """Log update statistics. May be called once."""
        if self._finalized:
            msg = "finalize() called twice"
            raise RuntimeError(msg)
        self._finalized = True

        num_new = len(self._files_made) - self._num_same - self._num_changed
        log_msg = (
            f"Outputs: {self._num_same} same, {self._num_changed} changed, {num_new} new"
        )
        if self._num_same == len(self._files_made):
            logger.debug(log_msg)
        else:
            logger.info(log_msg)
