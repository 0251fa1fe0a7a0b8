"""Extract inline images from exported HTML files, in place."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from loguru import logger

from apple_notes_exporter.config import HTML_SUFFIXES
from apple_notes_exporter.core.attachments.materializer import AttachmentMaterializer
from apple_notes_exporter.core.attachments.rewriter import rewrite_html
from apple_notes_exporter.core.attachments.scanner import scan_attachments
from apple_notes_exporter.models.attachment import (
    AttachmentFile,
    AttachmentMatch,
    ExtractionResult,
    SkippedAttachment,
)

# Notes are not guaranteed to be valid UTF-8; surrogateescape round-trips any bytes.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def extract_file(path: Path) -> ExtractionResult:
    """Move the base64 images of one HTML file into its companion directory.

    The file is rewritten only when at least one image was extracted, so a file
    without images, or whose images all failed, stays byte-for-byte unchanged.
    Running this again on its own output finds nothing and changes nothing.

    Raises:
        OSError: If the file cannot be read, or the rewritten HTML cannot be
            written back.
    """
    text = path.read_bytes().decode(_ENCODING, errors=_ERRORS)
    matches = scan_attachments(text)
    if not matches:
        return ExtractionResult(path=path)

    materializer = AttachmentMaterializer(path)
    replacements: list[tuple[AttachmentMatch, AttachmentFile | None]] = []
    attachments: list[AttachmentFile] = []
    skipped: list[SkippedAttachment] = []
    for match in matches:
        outcome = materializer.materialize(match)
        if isinstance(outcome, SkippedAttachment):
            skipped.append(outcome)
            replacements.append((match, None))
        else:
            attachments.append(outcome)
            replacements.append((match, outcome))

    if attachments:
        rewritten = rewrite_html(text, replacements)
        path.write_bytes(rewritten.encode(_ENCODING, errors=_ERRORS))

    if skipped:
        logger.debug("{}: {} attachment(s) left inline", path, len(skipped))
    return ExtractionResult(path=path, attachments=tuple(attachments), skipped=tuple(skipped))


def find_html_files(root: Path) -> list[Path]:
    """All HTML files below `root`, sorted by path."""
    return sorted(
        p for p in root.rglob("*") if p.suffix.lower() in HTML_SUFFIXES and p.is_file()
    )


def _extract_isolated(path: Path) -> ExtractionResult:
    try:
        return extract_file(path)
    except OSError as e:
        logger.warning("Cannot extract attachments from {}: {}", path, e)
        return ExtractionResult(path=path, error=str(e))


def extract_directory(root: Path, *, workers: int = 1) -> list[ExtractionResult]:
    """Run `extract_file` over every HTML file below `root`.

    Every file found gets exactly one result, including files with nothing to
    extract and files that failed. Results are in path order regardless of
    `workers`.
    """
    files = find_html_files(root)
    logger.debug("Found {} HTML file(s) under {}", len(files), root)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_extract_isolated, files))
    else:
        results = [_extract_isolated(p) for p in files]
    results.sort(key=lambda r: r.path)

    extracted = sum(len(r.attachments) for r in results)
    skipped = sum(len(r.skipped) for r in results)
    failed = sum(1 for r in results if r.error is not None)
    logger.info(
        "Extraction complete: {} file(s), {} attachment(s) extracted, {} left inline, {} failed",
        len(results), extracted, skipped, failed,
    )
    return results
