"""Locate inline base64 images in note HTML."""

import re

from apple_notes_exporter.models.attachment import AttachmentMatch

# data:image/<subtype>[;param=value...];base64,<payload>
# The payload may be wrapped over several lines but always ends on a base64
# character, so a trailing newline before the closing quote is not part of it.
# Padding ends the payload: nothing after "=" is consumed.
_DATA_URI = re.compile(
    r"data:image/(?P<subtype>[A-Za-z0-9.+-]+)"
    r"(?:;[A-Za-z0-9_.+-]+=[^;,\"'\s>]*)*"
    r";base64,"
    r"(?P<payload>[A-Za-z0-9+/]+(?:\s+[A-Za-z0-9+/]+)*(?:\s*={1,2})?)",
    re.IGNORECASE,
)

_WHITESPACE = re.compile(r"\s+")


def scan_attachments(html: str) -> list[AttachmentMatch]:
    """Return every base64 image URI in `html`, in source order.

    Offsets index into `html` itself, so `html[m.start:m.end]` is the whole URI.
    URIs with an empty payload are not reported.
    """
    matches: list[AttachmentMatch] = []
    for m in _DATA_URI.finditer(html):
        matches.append(
            AttachmentMatch(
                start=m.start(),
                end=m.end(),
                mime_type=f"image/{m.group('subtype').lower()}",
                payload=m.group("payload"),
            )
        )
    return matches


def clean_payload(payload: str) -> str:
    """Drop line-wrapping whitespace from a base64 payload."""
    return _WHITESPACE.sub("", payload)
