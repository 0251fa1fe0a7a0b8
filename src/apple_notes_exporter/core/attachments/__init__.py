"""Inline image extraction: sniff, scan, materialize, rewrite."""

from apple_notes_exporter.core.attachments.codec import (
    ImageFormat,
    guess_extension,
    sniff_image_format,
)
from apple_notes_exporter.core.attachments.extractor import extract_directory, extract_file
from apple_notes_exporter.core.attachments.scanner import scan_attachments

__all__ = [
    "ImageFormat",
    "extract_directory",
    "extract_file",
    "guess_extension",
    "scan_attachments",
    "sniff_image_format",
]
