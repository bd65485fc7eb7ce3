"""Data models for SmugMug API resources.

Each model is an immutable dataclass whose fields are all optional: a field
the server did not send is simply ``None``. Fields carry the vendor key they
map to, so the same declaration drives parsing (``from_api_response``) and
rendering back to the vendor JSON shape (``to_api_dict``).
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

from smugapi.utils.jsonutil import (
    get_bool,
    get_float,
    get_int,
    get_list,
    get_object,
    get_string,
)
from smugapi.utils.params import is_empty

# Album sort methods accepted by albums.changeSettings and albums.reSort
SORT_METHOD_POSITION = "Position"
SORT_METHOD_CAPTION = "Caption"
SORT_METHOD_FILE_NAME = "FileName"
SORT_METHOD_DATE = "Date"
SORT_METHOD_DATE_TIME = "DateTime"
SORT_METHOD_DATE_TIME_ORIGINAL = "DateTimeOriginal"

# Gallery style templates
TEMPLATE_ID_VIEWER_CHOICE = 0
TEMPLATE_ID_SMUGMUG = 3
TEMPLATE_ID_TRADITIONAL = 4
TEMPLATE_ID_ALL_THUMBS = 7
TEMPLATE_ID_SLIDESHOW = 8
TEMPLATE_ID_JOURNAL = 9
TEMPLATE_ID_SMUGMUG_SMALL = 10
TEMPLATE_ID_FILMSTRIP = 11

_SCALAR_READERS = {
    "str": get_string,
    "int": get_int,
    "float": get_float,
    "bool": get_bool,
}


@dataclass(frozen=True)
class ApiField:
    """Mapping between a model attribute and its vendor JSON location.

    Attributes:
        key: Vendor key; dotted keys ("Template.id") reach into nested objects
        kind: One of str, int, float, bool, model, models
        model: Name of the model class for the model/models kinds
    """
    key: str
    kind: str = "str"
    model: Optional[str] = None

    def parse(self, data: Dict[str, Any]) -> Any:
        """Extract this field from a parsed JSON object."""
        *parents, name = self.key.split(".")
        container = data
        for parent in parents:
            container = get_object(container, parent)

        if self.kind in _SCALAR_READERS:
            return _SCALAR_READERS[self.kind](container, name)

        model_cls = _MODELS[self.model]
        if self.kind == "model":
            nested = get_object(container, name)
            return model_cls.from_api_response(nested) if nested is not None else None

        return tuple(
            model_cls.from_api_response(item)
            for item in get_list(container, name)
            if isinstance(item, dict)
        )

    def render(self, target: Dict[str, Any], value: Any) -> None:
        """Write this field's value into a vendor-shaped dictionary."""
        if value is None or (self.kind == "models" and not value):
            return

        if self.kind == "model":
            value = value.to_api_dict()
        elif self.kind == "models":
            value = [item.to_api_dict() for item in value]

        *parents, name = self.key.split(".")
        for parent in parents:
            target = target.setdefault(parent, {})
        target[name] = value


def api_field(key: str, kind: str = "str", model: str = None) -> Any:
    """Declare a dataclass field backed by a vendor JSON key."""
    return field(
        default=() if kind == "models" else None,
        metadata={"api": ApiField(key, kind, model)},
    )


class ApiModel:
    """Shared parsing and rendering for the SmugMug models."""

    @classmethod
    def from_api_response(cls, data: Optional[Dict[str, Any]]):
        """Create a model instance from a SmugMug JSON object.

        Missing or null fields become None; missing nested lists become
        empty tuples.

        Args:
            data: Parsed JSON object (None yields an empty instance)

        Returns:
            Model instance
        """
        data = data if isinstance(data, dict) else {}
        values = {
            f.name: f.metadata["api"].parse(data)
            for f in fields(cls)
            if "api" in f.metadata
        }
        return cls(**values)

    def to_api_dict(self) -> Dict[str, Any]:
        """Render the model in the SmugMug JSON shape, omitting unset fields."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            if "api" in f.metadata:
                f.metadata["api"].render(result, getattr(self, f.name))
        return result


@dataclass(frozen=True)
class Image(ApiModel):
    """Represents a SmugMug image.

    Attributes:
        id: Numeric image ID
        key: Image key (paired with id in most calls)
        album: Album the image belongs to, when the server embeds it
    """
    id: Optional[int] = api_field("id", "int")
    key: Optional[str] = api_field("Key")
    file_name: Optional[str] = api_field("FileName")
    caption: Optional[str] = api_field("Caption")
    keywords: Optional[str] = api_field("Keywords")
    position: Optional[int] = api_field("Position", "int")
    date: Optional[str] = api_field("Date")
    format: Optional[str] = api_field("Format")
    serial: Optional[int] = api_field("Serial", "int")
    watermark: Optional[bool] = api_field("Watermark", "bool")
    latitude: Optional[float] = api_field("Latitude", "float")
    longitude: Optional[float] = api_field("Longitude", "float")
    altitude: Optional[float] = api_field("Altitude", "float")
    hidden: Optional[bool] = api_field("Hidden", "bool")
    size: Optional[int] = api_field("Size", "int")
    width: Optional[int] = api_field("Width", "int")
    height: Optional[int] = api_field("Height", "int")
    md5_sum: Optional[str] = api_field("MD5Sum")
    last_updated: Optional[str] = api_field("LastUpdated")
    album_url: Optional[str] = api_field("AlbumURL")
    tiny_url: Optional[str] = api_field("TinyURL")
    thumb_url: Optional[str] = api_field("ThumbURL")
    small_url: Optional[str] = api_field("SmallURL")
    medium_url: Optional[str] = api_field("MediumURL")
    large_url: Optional[str] = api_field("LargeURL")
    x_large_url: Optional[str] = api_field("XLargeURL")
    x2_large_url: Optional[str] = api_field("X2LargeURL")
    x3_large_url: Optional[str] = api_field("X3LargeURL")
    original_url: Optional[str] = api_field("OriginalURL")
    video320_url: Optional[str] = api_field("Video320URL")
    video640_url: Optional[str] = api_field("Video640URL")
    video960_url: Optional[str] = api_field("Video960URL")
    video1280_url: Optional[str] = api_field("Video1280URL")
    album: Optional["Album"] = api_field("Album", "model", "Album")

    @property
    def has_gps(self) -> bool:
        """Check if image has GPS coordinates."""
        return self.latitude is not None and self.longitude is not None

    def __str__(self) -> str:
        """Return string representation of image."""
        return f"Image({self.id}, {self.file_name or 'unnamed'})"


@dataclass(frozen=True)
class Category(ApiModel):
    """Represents a SmugMug category or subcategory.

    A category owns its albums and subcategories. ``parent_id`` only points
    back at the enclosing category and is not part of that tree.
    """
    id: Optional[int] = api_field("id", "int")
    name: Optional[str] = api_field("Title")
    parent_id: Optional[int] = api_field("Category.id", "int")
    albums: Tuple["Album", ...] = api_field("Albums", "models", "Album")
    sub_categories: Tuple["Category", ...] = api_field(
        "SubCategories", "models", "Category"
    )

    @classmethod
    def from_api_response(cls, data: Optional[Dict[str, Any]]) -> "Category":
        """Create Category instance from SmugMug API response.

        The display name is sent as "Title" by some API versions and as
        "Name" by others. An empty Title always defers to Name, even when
        Name is absent.
        """
        category = super().from_api_response(data)
        if is_empty(category.name):
            category = replace(category, name=get_string(data, "Name"))
        return category

    def __str__(self) -> str:
        """Return string representation of category."""
        return (
            f"Category({self.name}, {len(self.albums)} albums, "
            f"{len(self.sub_categories)} subcategories)"
        )


@dataclass(frozen=True)
class Album(ApiModel):
    """Represents a SmugMug album (gallery).

    Attributes:
        id: Numeric album ID
        key: Album key (paired with id in most calls)
        title: Display title
        category: Category the album is filed under
        sub_category: Subcategory the album is filed under
        highlight: Image used as the album highlight
        template_id: Gallery style template
        sort_direction: False for ascending, True for descending
    """
    id: Optional[int] = api_field("id", "int")
    key: Optional[str] = api_field("Key")
    title: Optional[str] = api_field("Title")

    description: Optional[str] = api_field("Description")
    keywords: Optional[str] = api_field("Keywords")
    category: Optional[Category] = api_field("Category", "model", "Category")
    sub_category: Optional[Category] = api_field("SubCategory", "model", "Category")
    geography: Optional[bool] = api_field("Geography", "bool")
    album_template_id: Optional[int] = api_field("AlbumTemplateID", "int")

    exif: Optional[bool] = api_field("EXIF", "bool")
    clean: Optional[bool] = api_field("Clean", "bool")
    header: Optional[bool] = api_field("Header", "bool")
    filenames: Optional[bool] = api_field("Filenames", "bool")
    template_id: Optional[int] = api_field("Template.id", "int")
    sort_method: Optional[str] = api_field("SortMethod")
    sort_direction: Optional[bool] = api_field("SortDirection", "bool")
    position: Optional[int] = api_field("Position", "int")
    image_count: Optional[int] = api_field("ImageCount", "int")
    highlight: Optional[Image] = api_field("Highlight", "model", "Image")
    square_thumbs: Optional[bool] = api_field("SquareThumbs", "bool")

    password: Optional[str] = api_field("Password")
    password_hint: Optional[str] = api_field("PasswordHint")
    passworded: Optional[bool] = api_field("Passworded", "bool")
    protected: Optional[bool] = api_field("Protected", "bool")
    public: Optional[bool] = api_field("Public", "bool")
    hide_owner: Optional[bool] = api_field("HideOwner", "bool")
    external: Optional[bool] = api_field("External", "bool")
    smug_searchable: Optional[bool] = api_field("SmugSearchable", "bool")
    world_searchable: Optional[bool] = api_field("WorldSearchable", "bool")
    larges: Optional[bool] = api_field("Larges", "bool")
    x_larges: Optional[bool] = api_field("XLarges", "bool")
    x2_larges: Optional[bool] = api_field("X2Larges", "bool")
    x3_larges: Optional[bool] = api_field("X3Larges", "bool")
    originals: Optional[bool] = api_field("Originals", "bool")
    watermarking: Optional[bool] = api_field("Watermarking", "bool")
    watermark_id: Optional[int] = api_field("Watermark.id", "int")

    share: Optional[bool] = api_field("Share", "bool")
    can_rank: Optional[bool] = api_field("CanRank", "bool")
    comments: Optional[bool] = api_field("Comments", "bool")
    family_edit: Optional[bool] = api_field("FamilyEdit", "bool")
    friend_edit: Optional[bool] = api_field("FriendEdit", "bool")
    community_id: Optional[int] = api_field("Community.id", "int")

    printable: Optional[bool] = api_field("Printable", "bool")
    proof_days: Optional[int] = api_field("ProofDays", "int")
    backprinting: Optional[str] = api_field("Backprinting")
    default_color: Optional[bool] = api_field("DefaultColor", "bool")

    unsharp_amount: Optional[float] = api_field("UnsharpAmount", "float")
    unsharp_radius: Optional[float] = api_field("UnsharpRadius", "float")
    unsharp_threshold: Optional[float] = api_field("UnsharpThreshold", "float")
    unsharp_sigma: Optional[float] = api_field("UnsharpSigma", "float")

    last_updated: Optional[str] = api_field("LastUpdated")

    def __str__(self) -> str:
        """Return string representation of album."""
        count = self.image_count if self.image_count is not None else "?"
        return f"Album({self.title}, {count} images)"


@dataclass(frozen=True)
class AlbumTemplate(ApiModel):
    """Represents a saved set of album settings."""
    id: Optional[int] = api_field("id", "int")
    name: Optional[str] = api_field("AlbumTemplateName")

    geography: Optional[bool] = api_field("Geography", "bool")

    exif: Optional[bool] = api_field("EXIF", "bool")
    clean: Optional[bool] = api_field("Clean", "bool")
    header: Optional[bool] = api_field("Header", "bool")
    filenames: Optional[bool] = api_field("Filenames", "bool")
    template_id: Optional[int] = api_field("Template.id", "int")
    sort_method: Optional[str] = api_field("SortMethod")
    sort_direction: Optional[bool] = api_field("SortDirection", "bool")
    square_thumbs: Optional[bool] = api_field("SquareThumbs", "bool")

    password: Optional[str] = api_field("Password")
    password_hint: Optional[str] = api_field("PasswordHint")
    protected: Optional[bool] = api_field("Protected", "bool")
    public: Optional[bool] = api_field("Public", "bool")
    hide_owner: Optional[bool] = api_field("HideOwner", "bool")
    external: Optional[bool] = api_field("External", "bool")
    smug_searchable: Optional[bool] = api_field("SmugSearchable", "bool")
    world_searchable: Optional[bool] = api_field("WorldSearchable", "bool")
    larges: Optional[bool] = api_field("Larges", "bool")
    x_larges: Optional[bool] = api_field("XLarges", "bool")
    x2_larges: Optional[bool] = api_field("X2Larges", "bool")
    x3_larges: Optional[bool] = api_field("X3Larges", "bool")
    originals: Optional[bool] = api_field("Originals", "bool")
    watermarking: Optional[bool] = api_field("Watermarking", "bool")
    watermark_id: Optional[int] = api_field("Watermark.id", "int")

    share: Optional[bool] = api_field("Share", "bool")
    can_rank: Optional[bool] = api_field("CanRank", "bool")
    comments: Optional[bool] = api_field("Comments", "bool")
    family_edit: Optional[bool] = api_field("FamilyEdit", "bool")
    friend_edit: Optional[bool] = api_field("FriendEdit", "bool")
    community_id: Optional[int] = api_field("Community.id", "int")

    printable: Optional[bool] = api_field("Printable", "bool")
    proof_days: Optional[int] = api_field("ProofDays", "int")
    backprinting: Optional[str] = api_field("Backprinting")
    default_color: Optional[bool] = api_field("DefaultColor", "bool")

    unsharp_amount: Optional[float] = api_field("UnsharpAmount", "float")
    unsharp_radius: Optional[float] = api_field("UnsharpRadius", "float")
    unsharp_threshold: Optional[float] = api_field("UnsharpThreshold", "float")
    unsharp_sigma: Optional[float] = api_field("UnsharpSigma", "float")


@dataclass(frozen=True)
class ImageTransferStats(ApiModel):
    """Transfer counts for a single image, per size."""
    id: Optional[int] = api_field("id", "int")
    bytes: Optional[int] = api_field("Bytes", "int")
    tiny: Optional[int] = api_field("Tiny", "int")
    thumb: Optional[int] = api_field("Thumb", "int")
    small: Optional[int] = api_field("Small", "int")
    medium: Optional[int] = api_field("Medium", "int")
    large: Optional[int] = api_field("Large", "int")
    x_large: Optional[int] = api_field("XLarge", "int")
    x2_large: Optional[int] = api_field("X2Large", "int")
    x3_large: Optional[int] = api_field("X3Large", "int")
    original: Optional[float] = api_field("Original", "float")
    video320: Optional[float] = api_field("Video320", "float")
    video640: Optional[float] = api_field("Video640", "float")
    video960: Optional[float] = api_field("Video960", "float")
    video1280: Optional[float] = api_field("Video1280", "float")


@dataclass(frozen=True)
class AlbumTransferStats(ApiModel):
    """Transfer counts for an album, with per-image detail when requested."""
    id: Optional[int] = api_field("id", "int")
    bytes: Optional[int] = api_field("Bytes", "int")
    tiny: Optional[int] = api_field("Tiny", "int")
    thumb: Optional[int] = api_field("Thumb", "int")
    small: Optional[int] = api_field("Small", "int")
    medium: Optional[int] = api_field("Medium", "int")
    large: Optional[int] = api_field("Large", "int")
    x_large: Optional[int] = api_field("XLarge", "int")
    x2_large: Optional[int] = api_field("X2Large", "int")
    x3_large: Optional[int] = api_field("X3Large", "int")
    original: Optional[float] = api_field("Original", "float")
    video320: Optional[float] = api_field("Video320", "float")
    video640: Optional[float] = api_field("Video640", "float")
    video960: Optional[float] = api_field("Video960", "float")
    video1280: Optional[float] = api_field("Video1280", "float")
    images: Tuple[ImageTransferStats, ...] = api_field(
        "Images", "models", "ImageTransferStats"
    )


@dataclass(frozen=True)
class Login(ApiModel):
    """Session details returned by the login methods.

    Attributes:
        session_id: Session to pass as SessionID on later calls
        password_hash: Hash usable with login.withHash
    """
    session_id: Optional[str] = api_field("Session.id")
    user_id: Optional[int] = api_field("User.id", "int")
    nick_name: Optional[str] = api_field("User.NickName")
    display_name: Optional[str] = api_field("User.DisplayName")
    password_hash: Optional[str] = api_field("PasswordHash")
    account_type: Optional[str] = api_field("AccountType")
    file_size_limit: Optional[int] = api_field("FileSizeLimit", "int")


@dataclass(frozen=True)
class ImageEXIF(ApiModel):
    """EXIF metadata recorded for an image."""
    id: Optional[int] = api_field("id", "int")
    date_time: Optional[str] = api_field("DateTime")
    date_time_original: Optional[str] = api_field("DateTimeOriginal")
    date_time_digitized: Optional[str] = api_field("DateTimeDigitized")
    make: Optional[str] = api_field("Make")
    model: Optional[str] = api_field("Model")
    exposure_time: Optional[str] = api_field("ExposureTime")
    aperture: Optional[str] = api_field("Aperture")
    iso: Optional[int] = api_field("ISO", "int")
    focal_length: Optional[str] = api_field("FocalLength")
    focal_length_in_35mm_film: Optional[int] = api_field("FocalLengthIn35mmFilm", "int")
    ccd_width: Optional[str] = api_field("CCDWidth")
    compressed_bits_per_pixel: Optional[str] = api_field("CompressedBitsPerPixel")
    flash: Optional[int] = api_field("Flash", "int")
    metering: Optional[int] = api_field("Metering", "int")
    exposure_program: Optional[int] = api_field("ExposureProgram", "int")
    exposure_bias_value: Optional[str] = api_field("ExposureBiasValue")
    exposure_mode: Optional[int] = api_field("ExposureMode", "int")
    light_source: Optional[int] = api_field("LightSource", "int")
    white_balance: Optional[int] = api_field("WhiteBalance", "int")
    digital_zoom_ratio: Optional[str] = api_field("DigitalZoomRatio")
    contrast: Optional[int] = api_field("Contrast", "int")
    saturation: Optional[int] = api_field("Saturation", "int")
    sharpness: Optional[int] = api_field("Sharpness", "int")
    subject_distance: Optional[str] = api_field("SubjectDistance")
    subject_distance_range: Optional[int] = api_field("SubjectDistanceRange", "int")
    sensing_method: Optional[int] = api_field("SensingMethod", "int")
    color_space: Optional[str] = api_field("ColorSpace")
    brightness: Optional[str] = api_field("Brightness")


_MODELS = {
    "Album": Album,
    "AlbumTemplate": AlbumTemplate,
    "AlbumTransferStats": AlbumTransferStats,
    "Category": Category,
    "Image": Image,
    "ImageEXIF": ImageEXIF,
    "ImageTransferStats": ImageTransferStats,
    "Login": Login,
}
