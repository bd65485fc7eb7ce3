"""Declarative table of the SmugMug 1.2.x JSON API methods.

A method is a name, an ordered list of argument names, and a description of
the payload its reply carries. Callers supply values positionally (matching
the argument order) or by name; ``Method.order_values`` turns named values
into the positional list the transport sends.

API versions are built by layering data over the 1.2.0 table: a later
version can extend an argument list or add methods, never subclass them.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from smugapi.smugmug.exceptions import SmugMugInvalidRequestError
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
from smugapi.smugmug.responses import Payload
from smugapi.utils.params import is_empty, to_param

logger = logging.getLogger(__name__)

ENDPOINT_API = "api"
ENDPOINT_UPLOAD = "upload"

# Vendor argument names shared by many methods
API_KEY = "APIKey"
SESSION_ID = "SessionID"


@dataclass(frozen=True)
class MethodDescriptor:
    """Name and ordered argument names of one remote operation.

    Attributes:
        name: Remote method name, e.g. "smugmug.albums.get"
        arguments: Argument names in the order values are supplied
    """
    name: str
    arguments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if is_empty(self.name):
            raise ValueError("Method name cannot be empty")
        object.__setattr__(self, "arguments", tuple(self.arguments))


@dataclass(frozen=True)
class Method:
    """One entry of the method table.

    Attributes:
        descriptor: Method name and argument names
        payload: Payload carried by a successful reply, if any
        endpoint: Which service URL the method is posted to
    """
    descriptor: MethodDescriptor
    payload: Optional[Payload] = None
    endpoint: str = ENDPOINT_API

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def arguments(self) -> Tuple[str, ...]:
        return self.descriptor.arguments

    def order_values(self, params: Mapping[str, Any]) -> List[Optional[str]]:
        """Arrange named values in declared argument order.

        Values are converted to their wire form (booleans as "0"/"1").
        Trailing arguments with no value are dropped, so the returned list
        may be shorter than the argument list.

        Args:
            params: Values keyed by vendor argument name

        Returns:
            Positional argument values

        Raises:
            SmugMugInvalidRequestError: If a name is not an argument of this method
        """
        unknown = [name for name in params if name not in self.arguments]
        if unknown:
            raise SmugMugInvalidRequestError(
                f"Unknown argument(s) for {self.name}: {', '.join(sorted(unknown))}"
            )

        values = [to_param(params.get(name)) for name in self.arguments]
        while values and values[-1] is None:
            values.pop()
        return values

    def with_arguments(self, *extra: str) -> "Method":
        """Return a copy of this method with arguments appended."""
        descriptor = MethodDescriptor(self.name, self.arguments + tuple(extra))
        return replace(self, descriptor=descriptor)


def _method(
    name: str,
    arguments: Iterable[str],
    payload: Payload = None,
    endpoint: str = ENDPOINT_API
) -> Method:
    return Method(MethodDescriptor(name, tuple(arguments)), payload, endpoint)


def _one(key: str, model, required: bool = True) -> Payload:
    return Payload(key, model.from_api_response, required=required)


def _many(key: str, model) -> Payload:
    return Payload(key, model.from_api_response, many=True)


_SESSION = (API_KEY, SESSION_ID)

# Look & feel, security, social, printing and sharpening settings shared by
# albums.create, albums.changeSettings and albumtemplates.create
_ALBUM_STYLE_ARGUMENTS = (
    "EXIF", "Clean", "Header", "Filenames", "TemplateID", "SortMethod",
    "SortDirection",
)
_ALBUM_SECURITY_ARGUMENTS = (
    "Password", "PasswordHint", "Protected", "Public", "HideOwner",
    "External", "SmugSearchable", "WorldSearchable", "Larges", "XLarges",
    "X2Larges", "X3Larges", "Originals", "Watermarking", "WatermarkID",
)
_ALBUM_SOCIAL_ARGUMENTS = (
    "Share", "CanRank", "Comments", "FamilyEdit", "FriendEdit",
    "CommunityID",
)
_ALBUM_PRINTING_ARGUMENTS = (
    "Printable", "ProofDays", "Backprinting", "DefaultColor",
    "UnsharpAmount", "UnsharpRadius", "UnsharpThreshold", "UnsharpSigma",
)

ALBUM_CREATE_ARGUMENTS = (
    _SESSION
    + ("Title", "Description", "Keywords", "CategoryID", "SubCategoryID",
       "Geography", "AlbumTemplateID")
    + _ALBUM_STYLE_ARGUMENTS
    + ("Position", "SquareThumbs")
    + _ALBUM_SECURITY_ARGUMENTS
    + _ALBUM_SOCIAL_ARGUMENTS
    + _ALBUM_PRINTING_ARGUMENTS
)

ALBUM_CHANGE_SETTINGS_ARGUMENTS = (
    _SESSION
    + ("AlbumID", "Title", "Description", "Keywords", "CategoryID",
       "SubCategoryID", "Geography", "AlbumTemplateID")
    + _ALBUM_STYLE_ARGUMENTS
    + ("Position", "HighlightID", "SquareThumbs")
    + _ALBUM_SECURITY_ARGUMENTS
    + _ALBUM_SOCIAL_ARGUMENTS
    + _ALBUM_PRINTING_ARGUMENTS
)

ALBUM_TEMPLATE_CREATE_ARGUMENTS = (
    _SESSION
    + ("AlbumTemplateName", "Geography")
    + _ALBUM_STYLE_ARGUMENTS
    + _ALBUM_SECURITY_ARGUMENTS
    + _ALBUM_SOCIAL_ARGUMENTS
    + _ALBUM_PRINTING_ARGUMENTS
)

_UPLOAD_METADATA = ("Caption", "Keywords", "Latitude", "Longitude", "Altitude")

_V1_2_0_METHODS = (
    _method("smugmug.login.anonymously", (API_KEY,), _one("Login", Login)),
    _method("smugmug.login.withPassword",
            (API_KEY, "EmailAddress", "Password"), _one("Login", Login)),
    _method("smugmug.login.withHash",
            (API_KEY, "UserID", "PasswordHash"), _one("Login", Login)),
    _method("smugmug.logout", _SESSION),

    _method("smugmug.albums.get",
            _SESSION + ("NickName", "Heavy", "SitePassword"),
            _many("Albums", Album)),
    _method("smugmug.albums.getInfo",
            _SESSION + ("AlbumID", "AlbumKey", "Password", "SitePassword"),
            _one("Album", Album)),
    _method("smugmug.albums.getStats",
            _SESSION + ("AlbumID", "Month", "Year", "Heavy"),
            _one("Album", AlbumTransferStats)),
    _method("smugmug.albums.create", ALBUM_CREATE_ARGUMENTS,
            _one("Album", Album)),
    _method("smugmug.albums.changeSettings", ALBUM_CHANGE_SETTINGS_ARGUMENTS),
    _method("smugmug.albums.delete", _SESSION + ("AlbumID",)),
    _method("smugmug.albums.reSort",
            _SESSION + ("AlbumID", "By", "Direction")),

    _method("smugmug.albumtemplates.get", _SESSION,
            _many("AlbumTemplates", AlbumTemplate)),

    _method("smugmug.categories.get",
            _SESSION + ("NickName", "SitePassword"),
            _many("Categories", Category)),
    _method("smugmug.categories.create", _SESSION + ("Name",),
            _one("Category", Category)),
    _method("smugmug.categories.delete", _SESSION + ("CategoryID",)),
    _method("smugmug.categories.rename", _SESSION + ("CategoryID", "Name")),

    _method("smugmug.subcategories.get",
            _SESSION + ("CategoryID", "NickName", "SitePassword"),
            _many("SubCategories", Category)),
    _method("smugmug.subcategories.getAll",
            _SESSION + ("NickName", "SitePassword"),
            _many("SubCategories", Category)),
    _method("smugmug.subcategories.create",
            _SESSION + ("Name", "CategoryID"),
            _one("SubCategory", Category)),
    _method("smugmug.subcategories.delete", _SESSION + ("SubCategoryID",)),
    _method("smugmug.subcategories.rename",
            _SESSION + ("SubCategoryID", "Name")),

    _method("smugmug.images.get",
            _SESSION + ("AlbumID", "AlbumKey", "Heavy", "Password",
                        "SitePassword"),
            _many("Images", Image)),
    _method("smugmug.images.getInfo",
            _SESSION + ("ImageID", "ImageKey", "Password", "SitePassword"),
            _one("Image", Image)),
    _method("smugmug.images.getEXIF",
            _SESSION + ("ImageID", "ImageKey", "Password", "SitePassword"),
            _one("Image", ImageEXIF)),
    _method("smugmug.images.getURLs",
            _SESSION + ("ImageID", "ImageKey", "TemplateID", "Password",
                        "SitePassword"),
            _one("Image", Image)),
    _method("smugmug.images.getStats", _SESSION + ("ImageID", "Month"),
            _one("Image", ImageTransferStats)),
    _method("smugmug.images.changeSettings",
            _SESSION + ("ImageID", "AlbumID", "Caption", "Keywords",
                        "Hidden")),
    _method("smugmug.images.changePosition",
            _SESSION + ("ImageID", "Position")),
    _method("smugmug.images.delete", _SESSION + ("ImageID",)),
    _method("smugmug.images.upload",
            _SESSION + ("AlbumID", "FileName", "Data", "ByteCount",
                        "MD5Sum") + _UPLOAD_METADATA,
            _one("Image", Image, required=False),
            endpoint=ENDPOINT_UPLOAD),
    _method("smugmug.images.uploadFromURL",
            _SESSION + ("AlbumID", "URL", "ByteCount", "MD5Sum")
            + _UPLOAD_METADATA,
            _one("Image", Image, required=False),
            endpoint=ENDPOINT_UPLOAD),

    _method("smugmug.users.getTransferStats",
            _SESSION + ("Month", "Year", "Heavy"),
            _many("Albums", AlbumTransferStats)),
    _method("smugmug.users.getTree",
            _SESSION + ("NickName", "Heavy", "SitePassword"),
            _many("Categories", Category)),
)


@dataclass(frozen=True)
class ApiVersion:
    """The method table of one API version.

    Attributes:
        version: Version string sent to the server, e.g. "1.2.1"
        methods: Methods keyed by remote method name
    """
    version: str
    methods: Dict[str, Method] = field(default_factory=dict)

    def get(self, name: str) -> Method:
        """Look up a method by its remote name.

        Raises:
            SmugMugInvalidRequestError: If the version has no such method
        """
        try:
            return self.methods[name]
        except KeyError:
            raise SmugMugInvalidRequestError(
                f"Method {name} is not available in API version {self.version}"
            ) from None

    def extend(
        self,
        version: str,
        extra_arguments: Mapping[str, Tuple[str, ...]] = None,
        new_methods: Iterable[Method] = ()
    ) -> "ApiVersion":
        """Build a later version from this one.

        Args:
            version: New version string
            extra_arguments: Arguments appended to existing methods
            new_methods: Methods that only exist in the new version

        Returns:
            New ApiVersion
        """
        methods = dict(self.methods)
        for name, extra in (extra_arguments or {}).items():
            methods[name] = methods[name].with_arguments(*extra)
        for method in new_methods:
            methods[method.name] = method
        return ApiVersion(version, methods)

    def __contains__(self, name: str) -> bool:
        return name in self.methods


V1_2_0 = ApiVersion("1.2.0", {m.name: m for m in _V1_2_0_METHODS})

V1_2_1 = V1_2_0.extend(
    "1.2.1",
    extra_arguments={
        "smugmug.albums.get": ("ShareGroup",),
        "smugmug.users.getTree": ("ShareGroup",),
        "smugmug.images.changeSettings": ("Latitude", "Longitude", "Altitude"),
    },
    new_methods=(
        _method("smugmug.albums.applyWatermark",
                _SESSION + ("AlbumID", "WatermarkID")),
        _method("smugmug.albumtemplates.create",
                ALBUM_TEMPLATE_CREATE_ARGUMENTS,
                _one("AlbumTemplate", AlbumTemplate)),
        _method("smugmug.albumtemplates.delete",
                _SESSION + ("AlbumTemplateID",)),
    ),
)

API_VERSIONS: Dict[str, ApiVersion] = {
    V1_2_0.version: V1_2_0,
    V1_2_1.version: V1_2_1,
}

DEFAULT_VERSION = V1_2_1.version


def get_version(version: str) -> ApiVersion:
    """Return the method table for a supported API version.

    Raises:
        SmugMugInvalidRequestError: If the version is not supported
    """
    try:
        return API_VERSIONS[version]
    except KeyError:
        supported = ", ".join(sorted(API_VERSIONS))
        raise SmugMugInvalidRequestError(
            f"Unsupported API version {version!r} (supported: {supported})"
        ) from None
