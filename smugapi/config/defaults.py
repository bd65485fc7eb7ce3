"""Default configuration values for smugapi."""

from pathlib import Path

DEFAULT_CONFIG = {
    # SmugMug account and endpoints
    "smugmug": {
        "api_key": "",
        "email": "",
        "password": "",
        "nick_name": "",
        "version": "1.2.1",
        "secure": True,
        # Empty means the standard SmugMug endpoint for the version
        "api_url": "",
        "upload_url": "",
        "binary_upload_url": "",
    },

    # HTTP connection pool and timeouts (seconds)
    "http": {
        "connect_timeout": 10,
        "read_timeout": 60,
        "pool_connections": 10,
        "pool_maxsize": 10,
    },

    "logging": {
        "level": "INFO",
        "file": str(Path.home() / ".smugapi" / "smugapi.log"),
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}

# Required configuration fields (must be provided by user)
REQUIRED_FIELDS = [
    "smugmug.api_key",
]
