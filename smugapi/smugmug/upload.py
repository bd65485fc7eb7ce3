"""Image upload support.

The preferred upload is a binary HTTP PUT to the upload server: the image
bytes are the request body and the metadata travels in ``X-Smug-*``
headers. The text methods ``smugmug.images.upload`` (Base64 data in a form
field) and ``smugmug.images.uploadFromURL`` are kept for compatibility;
the Base64 variant holds two to three copies of the image in memory.
"""

import logging
from typing import List, Optional, Sequence
from urllib.parse import quote

from smugapi.smugmug.exceptions import SmugMugInvalidRequestError
from smugapi.smugmug.transport import HttpTransport
from smugapi.utils.params import base64_encode, is_empty, md5_hex, to_param

logger = logging.getLogger(__name__)

UPLOAD_HEADERS = (
    "Content-Length",
    "Content-MD5",
    "X-Smug-SessionID",
    "X-Smug-Version",
    "X-Smug-ResponseType",
    "X-Smug-AlbumID",
    "X-Smug-ImageID",
    "X-Smug-FileName",
    "X-Smug-Caption",
    "X-Smug-Keywords",
    "X-Smug-Latitude",
    "X-Smug-Longitude",
    "X-Smug-Altitude",
)

CONTENT_LENGTH = UPLOAD_HEADERS.index("Content-Length")
CONTENT_MD5 = UPLOAD_HEADERS.index("Content-MD5")
SESSION_ID = UPLOAD_HEADERS.index("X-Smug-SessionID")
VERSION = UPLOAD_HEADERS.index("X-Smug-Version")
RESPONSE_TYPE = UPLOAD_HEADERS.index("X-Smug-ResponseType")
ALBUM_ID = UPLOAD_HEADERS.index("X-Smug-AlbumID")
IMAGE_ID = UPLOAD_HEADERS.index("X-Smug-ImageID")
FILE_NAME = UPLOAD_HEADERS.index("X-Smug-FileName")
CAPTION = UPLOAD_HEADERS.index("X-Smug-Caption")
KEYWORDS = UPLOAD_HEADERS.index("X-Smug-Keywords")
LATITUDE = UPLOAD_HEADERS.index("X-Smug-Latitude")
LONGITUDE = UPLOAD_HEADERS.index("X-Smug-Longitude")
ALTITUDE = UPLOAD_HEADERS.index("X-Smug-Altitude")

RESPONSE_TYPE_JSON = "JSON"


def prepare_upload_headers(
    data: bytes,
    session_id: str,
    file_name: str,
    version: str,
    album_id: int = None,
    image_id: int = None,
    caption: str = None,
    keywords: str = None,
    latitude: float = None,
    longitude: float = None,
    altitude: float = None
) -> List[Optional[str]]:
    """Build the header values for a binary upload.

    Length and checksum are computed from ``data``, which is why the image
    must be fully loaded before uploading.

    Args:
        data: Image bytes
        session_id: Session ID from a login call
        file_name: File name to store the image under
        version: API version to announce
        album_id: Album to upload into (new image)
        image_id: Image to replace (existing image)
        caption: Image caption
        keywords: Image keywords
        latitude: GPS latitude
        longitude: GPS longitude
        altitude: GPS altitude

    Returns:
        Values in UPLOAD_HEADERS order
    """
    if data is None:
        raise SmugMugInvalidRequestError("Image data cannot be None")

    values: List[Optional[str]] = [None] * len(UPLOAD_HEADERS)
    values[CONTENT_LENGTH] = str(len(data))
    values[CONTENT_MD5] = md5_hex(data)
    values[SESSION_ID] = session_id
    values[VERSION] = version
    values[RESPONSE_TYPE] = RESPONSE_TYPE_JSON
    values[ALBUM_ID] = to_param(album_id)
    values[IMAGE_ID] = to_param(image_id)
    values[FILE_NAME] = file_name
    values[CAPTION] = caption
    values[KEYWORDS] = keywords
    values[LATITUDE] = to_param(latitude)
    values[LONGITUDE] = to_param(longitude)
    values[ALTITUDE] = to_param(altitude)
    return values


def validate_upload_headers(
    url: str,
    header_values: Optional[Sequence[Optional[str]]]
) -> str:
    """Check the preconditions of a binary upload.

    Args:
        url: Upload server URL
        header_values: Values in UPLOAD_HEADERS order

    Returns:
        URL-encoded file name

    Raises:
        SmugMugInvalidRequestError: If any precondition fails
    """
    if is_empty(url):
        raise SmugMugInvalidRequestError(f"url [{url}] cannot be empty")

    if header_values is None or len(header_values) != len(UPLOAD_HEADERS):
        raise SmugMugInvalidRequestError(
            f"Expected exactly {len(UPLOAD_HEADERS)} header values, one for "
            "each entry of UPLOAD_HEADERS"
        )

    if not is_empty(header_values[ALBUM_ID]) and not is_empty(header_values[IMAGE_ID]):
        raise SmugMugInvalidRequestError(
            "Only one of X-Smug-AlbumID (upload into an album) or "
            "X-Smug-ImageID (replace an image) can be given, not both"
        )

    file_name = header_values[FILE_NAME]
    if is_empty(file_name):
        raise SmugMugInvalidRequestError(
            "X-Smug-FileName cannot be empty, it must be the file name of the "
            "image being uploaded (e.g. SmugMug.jpg)"
        )

    try:
        return quote(file_name, safe="")
    except (UnicodeEncodeError, TypeError) as e:
        raise SmugMugInvalidRequestError(
            f"Unable to URL-encode file name [{file_name!r}]: {e}"
        ) from e


def put_image(
    transport: HttpTransport,
    url: str,
    header_values: Sequence[Optional[str]],
    data: bytes,
    version: str
) -> str:
    """Upload an image with a binary HTTP PUT.

    The version and response-type headers are always set to the values this
    library speaks; a different caller value is overwritten with a warning.

    Args:
        transport: Transport used to send the request
        url: Upload server URL; the encoded file name is appended
        header_values: Values in UPLOAD_HEADERS order
        data: Image bytes
        version: API version this client speaks

    Returns:
        Raw reply body

    Raises:
        SmugMugInvalidRequestError: If a precondition fails
        SmugMugNetworkError: If the upload fails
    """
    encoded_name = validate_upload_headers(url, header_values)
    values = list(header_values)

    if values[VERSION] != version:
        logger.warning(
            f"X-Smug-Version was [{values[VERSION]}], overriding it "
            f"with [{version}]"
        )
        values[VERSION] = version

    if values[RESPONSE_TYPE] != RESPONSE_TYPE_JSON:
        logger.warning(
            f"X-Smug-ResponseType was [{values[RESPONSE_TYPE]}], overriding "
            f"it with [{RESPONSE_TYPE_JSON}]"
        )
        values[RESPONSE_TYPE] = RESPONSE_TYPE_JSON

    return transport.put(url + encoded_name, UPLOAD_HEADERS, values, data)


def prepare_base64_upload(data: bytes) -> dict:
    """Build the data arguments of the text upload method.

    Args:
        data: Image bytes

    Returns:
        Dictionary with the Data, ByteCount and MD5Sum arguments
    """
    if data is None:
        raise SmugMugInvalidRequestError("Image data cannot be None")

    return {
        "Data": base64_encode(data),
        "ByteCount": len(data),
        "MD5Sum": md5_hex(data),
    }
