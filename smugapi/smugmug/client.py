"""SmugMug API client for the 1.2.x JSON API."""

import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from smugapi.smugmug.exceptions import SmugMugInvalidRequestError
from smugapi.smugmug.methods import (
    API_KEY,
    DEFAULT_VERSION,
    ENDPOINT_UPLOAD,
    SESSION_ID,
    ApiVersion,
    Method,
    get_version,
)
from smugapi.smugmug.responses import Response
from smugapi.smugmug.transport import HttpTransport, Timeout
from smugapi.smugmug.upload import (
    prepare_base64_upload,
    prepare_upload_headers,
    put_image,
)
from smugapi.utils.params import ImageSource, is_empty, read_stream

logger = logging.getLogger(__name__)


class SmugMugClient:
    """Client for interacting with the SmugMug JSON API.

    Every remote method is available through ``call`` using its vendor name
    and vendor argument names; the common ones also have typed convenience
    methods. The client fills in ``APIKey`` and, once logged in,
    ``SessionID`` for every call that takes them.

    Attributes:
        api_key: SmugMug API key
        session_id: Session ID of the last successful login (or None)
        api: Method table of the selected API version
        api_url: Service URL for ordinary methods
        upload_url: Service URL for the text upload methods
        binary_upload_url: Upload server URL for binary PUT uploads
        transport: HTTP transport shared by every call

    Examples:
        >>> client = SmugMugClient("my-api-key")
        >>> client.login_with_password("me@example.com", "secret")
        >>> response = client.get_albums()
        >>> for album in response.result:
        ...     print(album.title)
    """

    SECURE_API_URL = "https://api.smugmug.com/services/api/json/{version}/"
    UNSECURE_API_URL = "http://api.smugmug.com/services/api/json/{version}/"
    TEXT_UPLOAD_URL = "https://upload.smugmug.com/services/api/json/{version}/"
    BINARY_UPLOAD_URL = "https://upload.smugmug.com/"

    def __init__(
        self,
        api_key: str,
        version: str = DEFAULT_VERSION,
        secure: bool = True,
        session_id: Optional[str] = None,
        api_url: Optional[str] = None,
        upload_url: Optional[str] = None,
        binary_upload_url: Optional[str] = None,
        timeout: Timeout = (10, 60),
        pool_connections: int = 10,
        pool_maxsize: int = 10,
        transport: Optional[HttpTransport] = None
    ) -> None:
        """Initialize SmugMug client.

        Args:
            api_key: SmugMug API key
            version: API version ("1.2.0" or "1.2.1")
            secure: Use HTTPS for the API endpoint
            session_id: Existing session ID to reuse
            api_url: Override for the API endpoint
            upload_url: Override for the text upload endpoint
            binary_upload_url: Override for the binary upload server
            timeout: Request timeout in seconds, or (connect, read) tuple
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum connections kept per pool
            transport: Pre-built transport (replaces the timeout/pool options)

        Raises:
            SmugMugInvalidRequestError: If the API key is missing or the
                version is not supported
        """
        if is_empty(api_key):
            raise SmugMugInvalidRequestError("An API key is required")

        self.api_key = api_key
        self.session_id = session_id
        self.api: ApiVersion = get_version(version)

        base_url = self.SECURE_API_URL if secure else self.UNSECURE_API_URL
        self.api_url = api_url or base_url.format(version=version)
        self.upload_url = upload_url or self.TEXT_UPLOAD_URL.format(version=version)
        self.binary_upload_url = binary_upload_url or self.BINARY_UPLOAD_URL

        self.transport = transport or HttpTransport(
            timeout=timeout,
            pool_connections=pool_connections,
            pool_maxsize=pool_maxsize
        )

        logger.info(f"SmugMug client initialized (API {version}, {self.api_url})")

    @classmethod
    def from_config(cls, config) -> "SmugMugClient":
        """Create a client from a ConfigManager.

        Args:
            config: Loaded ConfigManager

        Returns:
            SmugMugClient instance
        """
        return cls(
            api_key=config.get("smugmug.api_key"),
            version=config.get("smugmug.version", DEFAULT_VERSION),
            secure=config.get("smugmug.secure", True),
            api_url=config.get("smugmug.api_url") or None,
            upload_url=config.get("smugmug.upload_url") or None,
            binary_upload_url=config.get("smugmug.binary_upload_url") or None,
            timeout=(
                config.get("http.connect_timeout", 10),
                config.get("http.read_timeout", 60),
            ),
            pool_connections=config.get("http.pool_connections", 10),
            pool_maxsize=config.get("http.pool_maxsize", 10),
        )

    @property
    def version(self) -> str:
        """API version this client speaks."""
        return self.api.version

    def method(self, name: str) -> Method:
        """Look up a method of the selected API version."""
        return self.api.get(name)

    def url_for(self, method: Method) -> str:
        """Return the service URL a method is posted to."""
        return self.upload_url if method.endpoint == ENDPOINT_UPLOAD else self.api_url

    def invoke(
        self,
        name: str,
        values: Sequence[Optional[str]],
        url: str = None
    ) -> str:
        """Execute a method with positional values and return the raw reply.

        Args:
            name: Remote method name
            values: Values in the method's declared argument order
            url: Service URL overriding the method's endpoint

        Returns:
            Raw reply text
        """
        method = self.method(name)
        return self.transport.post(
            url or self.url_for(method),
            method.name,
            method.arguments,
            values
        )

    def execute(
        self,
        name: str,
        values: Sequence[Optional[str]],
        url: str = None
    ) -> Response:
        """Execute a method with positional values and parse the reply."""
        method = self.method(name)
        return Response.parse(self.invoke(name, values, url), method.payload)

    def call(self, name: str, **params: Any) -> Response:
        """Execute a method with named values.

        ``APIKey`` and ``SessionID`` are filled in from the client when the
        method takes them and the caller did not pass them.

        Args:
            name: Remote method name (e.g. "smugmug.albums.get")
            **params: Values keyed by vendor argument name

        Returns:
            Parsed Response

        Raises:
            SmugMugInvalidRequestError: If the method or an argument is unknown
            SmugMugNetworkError: If the request fails
            SmugMugResponseError: If the reply cannot be parsed
        """
        method = self.method(name)
        if API_KEY in method.arguments:
            params.setdefault(API_KEY, self.api_key)
        if SESSION_ID in method.arguments:
            params.setdefault(SESSION_ID, self.session_id)

        values = method.order_values(params)
        logger.debug(f"Calling {name} with {len(values)} argument value(s)")
        return self.execute(name, values)

    # Login

    def _remember_session(self, response: Response) -> Response:
        if not response.is_error and response.result is not None:
            self.session_id = response.result.session_id
            logger.info("Logged in to SmugMug")
        return response

    def login_anonymously(self) -> Response:
        """Open an anonymous session."""
        return self._remember_session(self.call("smugmug.login.anonymously"))

    def login_with_password(self, email_address: str, password: str) -> Response:
        """Open a session with an e-mail address (or nickname) and password.

        Returns:
            Response whose result is a Login
        """
        return self._remember_session(
            self.call(
                "smugmug.login.withPassword",
                EmailAddress=email_address,
                Password=password
            )
        )

    def login_with_hash(self, user_id: int, password_hash: str) -> Response:
        """Open a session with the password hash from an earlier login."""
        return self._remember_session(
            self.call(
                "smugmug.login.withHash",
                UserID=user_id,
                PasswordHash=password_hash
            )
        )

    def logout(self) -> Response:
        """Close the current session."""
        response = self.call("smugmug.logout")
        if not response.is_error:
            self.session_id = None
        return response

    # Albums

    def get_albums(
        self,
        nick_name: str = None,
        heavy: bool = None,
        site_password: str = None,
        **params: Any
    ) -> Response:
        """List albums; the result is a list of Album."""
        return self.call(
            "smugmug.albums.get",
            NickName=nick_name,
            Heavy=heavy,
            SitePassword=site_password,
            **params
        )

    def get_album_info(
        self,
        album_id: int,
        album_key: str,
        password: str = None,
        site_password: str = None
    ) -> Response:
        """Get full details of one album; the result is an Album."""
        return self.call(
            "smugmug.albums.getInfo",
            AlbumID=album_id,
            AlbumKey=album_key,
            Password=password,
            SitePassword=site_password
        )

    def get_album_stats(
        self,
        album_id: int,
        month: int,
        year: int,
        heavy: bool = None
    ) -> Response:
        """Get transfer statistics of an album; the result is an AlbumTransferStats."""
        return self.call(
            "smugmug.albums.getStats",
            AlbumID=album_id,
            Month=month,
            Year=year,
            Heavy=heavy
        )

    def create_album(self, title: str, category_id: int = None, **settings: Any) -> Response:
        """Create an album.

        Args:
            title: Album title
            category_id: Category to file the album under
            **settings: Any other albums.create argument by vendor name,
                e.g. ``Public=False`` or ``SortMethod="DateTime"``

        Returns:
            Response whose result is an Album carrying the new id and key
        """
        return self.call(
            "smugmug.albums.create",
            Title=title,
            CategoryID=category_id,
            **settings
        )

    def change_album_settings(self, album_id: int, **settings: Any) -> Response:
        """Change album settings given by vendor argument name."""
        return self.call("smugmug.albums.changeSettings", AlbumID=album_id, **settings)

    def delete_album(self, album_id: int) -> Response:
        return self.call("smugmug.albums.delete", AlbumID=album_id)

    def resort_album(self, album_id: int, by: str, descending: bool = False) -> Response:
        """Re-sort the images of an album.

        Args:
            album_id: Album to sort
            by: Sort field (see the SORT_METHOD_* constants)
            descending: Sort direction
        """
        return self.call(
            "smugmug.albums.reSort",
            AlbumID=album_id,
            By=by,
            Direction="DESC" if descending else "ASC"
        )

    def apply_watermark(self, album_id: int, watermark_id: int) -> Response:
        """Apply a watermark to every image of an album (1.2.1 only)."""
        return self.call(
            "smugmug.albums.applyWatermark",
            AlbumID=album_id,
            WatermarkID=watermark_id
        )

    # Album templates

    def get_album_templates(self) -> Response:
        return self.call("smugmug.albumtemplates.get")

    def create_album_template(self, name: str, **settings: Any) -> Response:
        """Create an album template (1.2.1 only); the result is an AlbumTemplate."""
        return self.call(
            "smugmug.albumtemplates.create",
            AlbumTemplateName=name,
            **settings
        )

    def delete_album_template(self, album_template_id: int) -> Response:
        return self.call(
            "smugmug.albumtemplates.delete",
            AlbumTemplateID=album_template_id
        )

    # Categories

    def get_categories(self, nick_name: str = None, site_password: str = None) -> Response:
        """List categories; the result is a list of Category."""
        return self.call(
            "smugmug.categories.get",
            NickName=nick_name,
            SitePassword=site_password
        )

    def create_category(self, name: str) -> Response:
        return self.call("smugmug.categories.create", Name=name)

    def delete_category(self, category_id: int) -> Response:
        return self.call("smugmug.categories.delete", CategoryID=category_id)

    def rename_category(self, category_id: int, name: str) -> Response:
        return self.call("smugmug.categories.rename", CategoryID=category_id, Name=name)

    def get_subcategories(
        self,
        category_id: int,
        nick_name: str = None,
        site_password: str = None
    ) -> Response:
        """List the subcategories of a category."""
        return self.call(
            "smugmug.subcategories.get",
            CategoryID=category_id,
            NickName=nick_name,
            SitePassword=site_password
        )

    def get_all_subcategories(self, nick_name: str = None, site_password: str = None) -> Response:
        return self.call(
            "smugmug.subcategories.getAll",
            NickName=nick_name,
            SitePassword=site_password
        )

    def create_subcategory(self, name: str, category_id: int) -> Response:
        return self.call(
            "smugmug.subcategories.create",
            Name=name,
            CategoryID=category_id
        )

    def delete_subcategory(self, subcategory_id: int) -> Response:
        return self.call("smugmug.subcategories.delete", SubCategoryID=subcategory_id)

    def rename_subcategory(self, subcategory_id: int, name: str) -> Response:
        return self.call(
            "smugmug.subcategories.rename",
            SubCategoryID=subcategory_id,
            Name=name
        )

    # Images

    def get_images(
        self,
        album_id: int,
        album_key: str,
        heavy: bool = None,
        password: str = None,
        site_password: str = None
    ) -> Response:
        """List the images of an album; the result is a list of Image."""
        return self.call(
            "smugmug.images.get",
            AlbumID=album_id,
            AlbumKey=album_key,
            Heavy=heavy,
            Password=password,
            SitePassword=site_password
        )

    def get_image_info(
        self,
        image_id: int,
        image_key: str,
        password: str = None,
        site_password: str = None
    ) -> Response:
        return self.call(
            "smugmug.images.getInfo",
            ImageID=image_id,
            ImageKey=image_key,
            Password=password,
            SitePassword=site_password
        )

    def get_image_exif(
        self,
        image_id: int,
        image_key: str,
        password: str = None,
        site_password: str = None
    ) -> Response:
        """Get EXIF data of an image; the result is an ImageEXIF."""
        return self.call(
            "smugmug.images.getEXIF",
            ImageID=image_id,
            ImageKey=image_key,
            Password=password,
            SitePassword=site_password
        )

    def get_image_urls(
        self,
        image_id: int,
        image_key: str,
        template_id: int = None,
        password: str = None,
        site_password: str = None
    ) -> Response:
        """Get the size URLs of an image; the result is an Image."""
        return self.call(
            "smugmug.images.getURLs",
            ImageID=image_id,
            ImageKey=image_key,
            TemplateID=template_id,
            Password=password,
            SitePassword=site_password
        )

    def get_image_stats(self, image_id: int, month: int) -> Response:
        return self.call("smugmug.images.getStats", ImageID=image_id, Month=month)

    def change_image_settings(self, image_id: int, **settings: Any) -> Response:
        """Change image settings (AlbumID, Caption, Keywords, Hidden, ...)."""
        return self.call("smugmug.images.changeSettings", ImageID=image_id, **settings)

    def change_image_position(self, image_id: int, position: int) -> Response:
        return self.call(
            "smugmug.images.changePosition",
            ImageID=image_id,
            Position=position
        )

    def delete_image(self, image_id: int) -> Response:
        return self.call("smugmug.images.delete", ImageID=image_id)

    # Uploads

    def upload_image(
        self,
        source: ImageSource,
        file_name: str = None,
        album_id: int = None,
        image_id: int = None,
        caption: str = None,
        keywords: str = None,
        latitude: float = None,
        longitude: float = None,
        altitude: float = None
    ) -> Response:
        """Upload an image with a binary HTTP PUT.

        Give ``album_id`` to add a new image to an album, or ``image_id``
        to replace an existing image; not both. The source is read fully
        into memory first since both the checksum and the body need it.

        Args:
            source: Image bytes, a file path, or a binary stream
            file_name: Name to store the image under (defaults to the path name)
            album_id: Album to upload into
            image_id: Image to replace
            caption: Image caption
            keywords: Image keywords
            latitude: GPS latitude
            longitude: GPS longitude
            altitude: GPS altitude

        Returns:
            Response whose result is an Image with the new id and key

        Raises:
            SmugMugInvalidRequestError: If not logged in or the upload
                arguments are inconsistent
            SmugMugNetworkError: If the upload fails
        """
        if is_empty(self.session_id):
            raise SmugMugInvalidRequestError("Log in before uploading images")

        if file_name is None and isinstance(source, (str, Path)):
            file_name = Path(source).name

        data = read_stream(source)
        headers = prepare_upload_headers(
            data,
            session_id=self.session_id,
            file_name=file_name,
            version=self.version,
            album_id=album_id,
            image_id=image_id,
            caption=caption,
            keywords=keywords,
            latitude=latitude,
            longitude=longitude,
            altitude=altitude
        )

        logger.info(f"Uploading {file_name} ({len(data)} bytes)")
        response_text = put_image(
            self.transport,
            self.binary_upload_url,
            headers,
            data,
            self.version
        )
        return Response.parse(
            response_text,
            self.method("smugmug.images.upload").payload
        )

    def upload_image_base64(
        self,
        source: ImageSource,
        album_id: int,
        file_name: str = None,
        caption: str = None,
        keywords: str = None,
        latitude: float = None,
        longitude: float = None,
        altitude: float = None
    ) -> Response:
        """Upload an image Base64-encoded in a form POST.

        Prefer ``upload_image``; this method keeps several copies of the
        image in memory at once.
        """
        if file_name is None and isinstance(source, (str, Path)):
            file_name = Path(source).name

        data = read_stream(source)
        return self.call(
            "smugmug.images.upload",
            AlbumID=album_id,
            FileName=file_name,
            Caption=caption,
            Keywords=keywords,
            Latitude=latitude,
            Longitude=longitude,
            Altitude=altitude,
            **prepare_base64_upload(data)
        )

    def upload_image_from_url(
        self,
        image_url: str,
        album_id: int,
        byte_count: int = None,
        md5_sum: str = None,
        caption: str = None,
        keywords: str = None,
        latitude: float = None,
        longitude: float = None,
        altitude: float = None
    ) -> Response:
        """Have SmugMug fetch an image from a URL into an album."""
        return self.call(
            "smugmug.images.uploadFromURL",
            AlbumID=album_id,
            URL=image_url,
            ByteCount=byte_count,
            MD5Sum=md5_sum,
            Caption=caption,
            Keywords=keywords,
            Latitude=latitude,
            Longitude=longitude,
            Altitude=altitude
        )

    # Users

    def get_transfer_stats(self, month: int, year: int, heavy: bool = None) -> Response:
        """Get transfer statistics of every album; the result is a list of AlbumTransferStats."""
        return self.call(
            "smugmug.users.getTransferStats",
            Month=month,
            Year=year,
            Heavy=heavy
        )

    def get_tree(
        self,
        nick_name: str = None,
        heavy: bool = None,
        site_password: str = None,
        **params: Any
    ) -> Response:
        """Get the category/subcategory/album tree; the result is a list of Category."""
        return self.call(
            "smugmug.users.getTree",
            NickName=nick_name,
            Heavy=heavy,
            SitePassword=site_password,
            **params
        )

    def close(self) -> None:
        """Release the connection pool."""
        self.transport.close()

    def __enter__(self) -> "SmugMugClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        """Return string representation of client."""
        state = "logged in" if self.session_id else "no session"
        return f"<SmugMugClient API {self.version} ({state})>"
