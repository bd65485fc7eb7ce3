"""Shared fixtures for the smugapi tests."""

import json
from unittest import mock

import pytest

from smugapi.smugmug.client import SmugMugClient
from smugapi.smugmug.transport import HttpTransport


@pytest.fixture
def albums_reply():
    """smugmug.albums.get reply holding one album."""
    return {
        "stat": "ok",
        "method": "smugmug.albums.get",
        "Albums": [
            {
                "id": 1234,
                "Key": "xCXXu",
                "Title": "My Birthday 2008!",
                "Category": {"id": 3, "Name": "Other"},
                "SubCategory": {"id": 5678, "Name": "Birthdays"},
            },
        ],
    }


@pytest.fixture
def fail_reply():
    return {
        "stat": "fail",
        "method": "smugmug.albums.get",
        "code": 3,
        "message": "invalid session",
    }


@pytest.fixture
def login_reply():
    return {
        "stat": "ok",
        "method": "smugmug.login.withPassword",
        "Login": {
            "Session": {"id": "abc123session"},
            "User": {"id": 42, "NickName": "someone", "DisplayName": "Some One"},
            "PasswordHash": "hash!",
            "AccountType": "Pro",
            "FileSizeLimit": 12582912,
        },
    }


@pytest.fixture
def transport():
    """A transport whose post/put return canned replies."""
    fake = mock.create_autospec(HttpTransport, instance=True)
    fake.post.return_value = json.dumps({"stat": "ok", "method": "smugmug.logout"})
    fake.put.return_value = json.dumps({"stat": "ok", "method": "smugmug.images.upload"})
    return fake


@pytest.fixture
def client(transport):
    return SmugMugClient("test-api-key", transport=transport)


@pytest.fixture
def http_response():
    """Factory for stand-ins of requests.Response."""

    def make(status_code=200, content=b'{"stat": "ok"}', encoding="utf-8"):
        response = mock.Mock()
        response.status_code = status_code
        response.content = content
        response.encoding = encoding
        return response

    return make
