"""Classify decoded image bytes by their magic signature."""

from enum import Enum


class ImageFormat(Enum):
    """Known image formats, valued by their canonical file extension."""

    PNG = "png"
    JPEG = "jpg"
    GIF = "gif"
    WEBP = "webp"
    SVG = "svg"
    BMP = "bmp"
    TIFF = "tiff"
    UNKNOWN = "bin"

    @property
    def extension(self) -> str:
        return self.value


_SIGNATURES: tuple[tuple[bytes, ImageFormat], ...] = (
    (b"\x89PNG\r\n\x1a\n", ImageFormat.PNG),
    (b"\xff\xd8", ImageFormat.JPEG),
    (b"GIF87a", ImageFormat.GIF),
    (b"GIF89a", ImageFormat.GIF),
    (b"II*\x00", ImageFormat.TIFF),
    (b"MM\x00*", ImageFormat.TIFF),
    (b"BM", ImageFormat.BMP),
)

# How far into the payload an <svg tag is looked for.
_SVG_SNIFF_BYTES = 512

# MIME subtypes accepted as a fallback when the bytes are not recognised.
_SUBTYPE_FORMATS: dict[str, ImageFormat] = {
    "png": ImageFormat.PNG,
    "jpeg": ImageFormat.JPEG,
    "jpg": ImageFormat.JPEG,
    "pjpeg": ImageFormat.JPEG,
    "gif": ImageFormat.GIF,
    "webp": ImageFormat.WEBP,
    "svg+xml": ImageFormat.SVG,
    "svg": ImageFormat.SVG,
    "bmp": ImageFormat.BMP,
    "x-ms-bmp": ImageFormat.BMP,
    "tiff": ImageFormat.TIFF,
    "tif": ImageFormat.TIFF,
}


def _sniff_binary(data: bytes) -> ImageFormat:
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return ImageFormat.WEBP
    for signature, fmt in _SIGNATURES:
        if data.startswith(signature):
            return fmt
    return ImageFormat.UNKNOWN


def _looks_like_svg(data: bytes) -> bool:
    head = data[:_SVG_SNIFF_BYTES].decode("utf-8", errors="ignore").lower()
    return "<svg" in head


def sniff_image_format(data: bytes) -> ImageFormat:
    """Classify image bytes.

    Binary signatures always win over the declared MIME type. SVG, which has no
    signature, is recognised from its text when nothing binary matched.
    """
    fmt = _sniff_binary(data)
    if fmt is not ImageFormat.UNKNOWN:
        return fmt
    if _looks_like_svg(data):
        return ImageFormat.SVG
    return ImageFormat.UNKNOWN


def guess_extension(data: bytes, mime_type: str) -> str:
    """Pick a file extension for decoded image bytes. Never fails.

    Falls back to the MIME subtype when it names a known format, then to "bin".
    """
    fmt = sniff_image_format(data)
    if fmt is ImageFormat.UNKNOWN:
        subtype = mime_type.partition("/")[2].strip().lower()
        fmt = _SUBTYPE_FORMATS.get(subtype, ImageFormat.UNKNOWN)
    return fmt.extension
