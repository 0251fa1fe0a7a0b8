"""Point extracted attachments' URIs at their files."""

import html
from collections.abc import Sequence

from apple_notes_exporter.models.attachment import AttachmentFile, AttachmentMatch


def rewrite_html(
    text: str,
    replacements: Sequence[tuple[AttachmentMatch, AttachmentFile | None]],
) -> str:
    """Replace each materialized match's URI with the attachment's relative path.

    Pairs with `None` keep their inline data. Everything outside the replaced
    spans is left exactly as it was.
    """
    ordered = sorted(
        ((m, f) for m, f in replacements if f is not None),
        key=lambda pair: pair[0].start,
        reverse=True,
    )
    result = text
    previous_start = len(text)
    for match, attachment in ordered:
        if match.end > previous_start:
            msg = f"Overlapping attachment spans at offset {match.start}"
            raise ValueError(msg)
        ref = html.escape(attachment.relative_ref, quote=True)
        result = result[: match.start] + ref + result[match.end :]
        previous_start = match.start
    return result
