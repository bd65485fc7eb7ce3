"""SmugMug 1.2.x JSON API binding."""

from smugapi.smugmug.client import SmugMugClient
from smugapi.smugmug.methods import (
    API_VERSIONS,
    DEFAULT_VERSION,
    ApiVersion,
    Method,
    MethodDescriptor,
    get_version,
)
from smugapi.smugmug.models import (
    Album,
    AlbumTemplate,
    AlbumTransferStats,
    Category,
    Image,
    ImageEXIF,
    ImageTransferStats,
    Login,
)
from smugapi.smugmug.responses import ErrorDetail, Payload, Response
from smugapi.smugmug.exceptions import (
    SmugMugError,
    SmugMugAPIError,
    SmugMugInvalidRequestError,
    SmugMugNetworkError,
    SmugMugResponseError,
)

__all__ = [
    "SmugMugClient",
    "API_VERSIONS",
    "DEFAULT_VERSION",
    "ApiVersion",
    "Method",
    "MethodDescriptor",
    "get_version",
    "Album",
    "AlbumTemplate",
    "AlbumTransferStats",
    "Category",
    "Image",
    "ImageEXIF",
    "ImageTransferStats",
    "Login",
    "ErrorDetail",
    "Payload",
    "Response",
    "SmugMugError",
    "SmugMugAPIError",
    "SmugMugInvalidRequestError",
    "SmugMugNetworkError",
    "SmugMugResponseError",
]
