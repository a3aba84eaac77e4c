"""
Content sniffing: image format from magic bytes, PDF page count by marker scan.
"""

import base64
import binascii
import re
from typing import Optional, Tuple

from slides_mcp.utils.exceptions import ErrorKind, ValidationError

# Matches "/Type /Page" and "/Type/Page"; "/Type /Pages" is filtered by the next byte.
_PAGE_MARKER = re.compile(rb"/Type ?/Page")


def detect_image_mime_type(data: bytes) -> Optional[str]:
    """
    Detect an image MIME type from its leading bytes.

    Returns None for input shorter than 4 bytes or an unknown signature.
    """
    if not data or len(data) < 4:
        return None

    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"GIF8"):
        return "image/gif"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data.startswith(b"BM"):
        return "image/bmp"
    return None


def count_pdf_pages(data: bytes) -> int:
    """
    Best-effort page count: number of page object markers in the raw PDF bytes.

    Not a parser. Compressed object streams hide their markers, in which case
    the count is low (possibly 0).
    """
    if not data:
        return 0
    count = 0
    for match in _PAGE_MARKER.finditer(data):
        # A marker at the very end of the data has no object behind it
        following = data[match.end():match.end() + 1]
        if following and following != b"s":
            count += 1
    return count


def decode_image_data(image_base64: str) -> Tuple[bytes, str]:
    """
    Decode base64 image data and detect its format.

    Returns:
        (raw bytes, MIME type)

    Raises:
        ValidationError: INVALID_IMAGE_DATA for empty, non-base64 or unrecognised data
    """
    if not image_base64 or not image_base64.strip():
        raise ValidationError(
            "image_base64 is required",
            kind=ErrorKind.INVALID_IMAGE_DATA,
            field="image_base64"
        )

    try:
        data = base64.b64decode(image_base64.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(
            f"invalid base64 encoding: {e}",
            kind=ErrorKind.INVALID_IMAGE_DATA,
            field="image_base64"
        ) from e

    mime_type = detect_image_mime_type(data)
    if mime_type is None:
        raise ValidationError(
            "unsupported or unrecognized image format",
            kind=ErrorKind.INVALID_IMAGE_DATA,
            field="image_base64"
        )
    return data, mime_type
