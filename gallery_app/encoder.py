# gallery_app/encoder.py
from __future__ import annotations

import base64
import binascii
import io
import re
from pathlib import Path
from typing import Any, Optional, Tuple

from loguru import logger
from PIL import Image, UnidentifiedImageError

from .errors import EncodeError


FALLBACK_MIME_TYPE = "application/octet-stream"

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?;base64,(?P<payload>.*)$", re.DOTALL)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def sniff_mime_type(file_bytes: bytes) -> str:
    """
    Guess the mime type of image bytes with Pillow.

    Returns FALLBACK_MIME_TYPE for anything Pillow does not recognise.
    """
    try:
        with Image.open(io.BytesIO(file_bytes)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError, ValueError):
        return FALLBACK_MIME_TYPE
    return Image.MIME.get(fmt or "", FALLBACK_MIME_TYPE)


def _read_source(source: Any) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    # Streamlit's UploadedFile is a BytesIO; getvalue() ignores the read cursor.
    if hasattr(source, "getvalue"):
        return source.getvalue()
    if hasattr(source, "read"):
        return source.read()
    raise TypeError(f"Cannot read image data from {type(source).__name__}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encode(file_bytes: bytes, mime_type: Optional[str] = None) -> str:
    """
    Build a self-contained data URI (data:<mime>;base64,<payload>).

    Works for any bytes; the mime type is sniffed when not given.
    """
    mime = (mime_type or "").strip().lower() or sniff_mime_type(file_bytes)
    payload = base64.b64encode(file_bytes).decode("ascii")
    return f"data:{mime};base64,{payload}"


def encode_file(source: Any, mime_type: Optional[str] = None) -> str:
    """
    Read an uploaded file (file-like object, path or raw bytes) and encode it.

    Raises EncodeError if the file cannot be read.
    """
    try:
        file_bytes = _read_source(source)
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Could not read uploaded file: {!r}", e)
        raise EncodeError(f"Could not read the selected file: {e}") from e

    if file_bytes is None:
        raise EncodeError("The selected file returned no data.")

    if not mime_type:
        mime_type = getattr(source, "type", None)
    return encode(file_bytes, mime_type)


def decode(image_data: str) -> Tuple[bytes, str]:
    """
    Split a base64 data URI back into (bytes, mime_type).
    """
    match = _DATA_URI_RE.match(image_data or "")
    if not match:
        raise EncodeError("Image payload is not a base64 data URI.")
    try:
        raw = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodeError(f"Image payload is not valid base64: {e}") from e
    return raw, match.group("mime") or FALLBACK_MIME_TYPE
