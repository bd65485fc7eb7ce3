"""Helpers for turning Python values into SmugMug request arguments."""

import base64
import hashlib
import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, Path, BinaryIO]


def is_empty(text: Optional[str]) -> bool:
    """Check whether a string is None, empty, or only whitespace."""
    return text is None or not str(text).strip()


def to_param(value: Any) -> Optional[str]:
    """Convert a scalar to its wire representation.

    Booleans become "1"/"0", numbers use their decimal form, and None stays
    None so the argument is omitted from the request.

    Args:
        value: Value to convert

    Returns:
        String value or None
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def read_stream(source: ImageSource) -> bytes:
    """Load image data fully into memory.

    Args:
        source: Raw bytes, a path to a file, or a readable binary stream

    Returns:
        The complete byte content

    Raises:
        OSError: If the file or stream cannot be read
        TypeError: If the source is not a supported type
    """
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    elif isinstance(source, (str, Path)):
        data = Path(source).expanduser().read_bytes()
    elif hasattr(source, "read"):
        data = source.read()
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("Image stream must be opened in binary mode")
        data = bytes(data)
    else:
        raise TypeError(f"Unsupported image source: {type(source).__name__}")

    logger.debug(f"Loaded image data, {len(data)} bytes")
    return data


def md5_hex(data: bytes) -> str:
    """Return the hexadecimal MD5 digest used by SmugMug for upload checks."""
    return hashlib.md5(data).hexdigest()


def base64_encode(data: bytes) -> str:
    """Base64-encode image data for the text upload method."""
    encoded = base64.b64encode(data).decode("ascii")
    logger.debug(f"Base64-encoded image data, {len(encoded)} characters")
    return encoded
