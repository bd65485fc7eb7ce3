"""smugapi - Python client for the SmugMug 1.2.x JSON API.

Typed access to albums, categories, images, uploads and account statistics
over SmugMug's session-based JSON-over-HTTP API (versions 1.2.0 and 1.2.1).
"""

from smugapi._version import __version__, __version_info__
from smugapi.config import ConfigManager
from smugapi.smugmug import SmugMugClient

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigManager",
    "SmugMugClient",
]
