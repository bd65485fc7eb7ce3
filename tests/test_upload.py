import base64
import hashlib
import logging
from unittest import mock

import pytest

from smugapi.smugmug import upload
from smugapi.smugmug.exceptions import SmugMugInvalidRequestError
from smugapi.smugmug.transport import HttpTransport
from smugapi.smugmug.upload import (
    UPLOAD_HEADERS,
    prepare_base64_upload,
    prepare_upload_headers,
    put_image,
    validate_upload_headers,
)

UPLOAD_URL = "https://upload.smugmug.com/"
DATA = b"\xff\xd8\xff\xe0fake jpeg bytes"


@pytest.fixture
def transport():
    fake = mock.create_autospec(HttpTransport, instance=True)
    fake.put.return_value = '{"stat": "ok"}'
    return fake


def headers(**overrides):
    values = prepare_upload_headers(DATA, "session", "photo.jpg", "1.2.1", album_id=12)
    for name, value in overrides.items():
        values[UPLOAD_HEADERS.index(name)] = value
    return values


def test_upload_headers_layout():
    assert len(UPLOAD_HEADERS) == 13
    assert UPLOAD_HEADERS[:2] == ("Content-Length", "Content-MD5")


def test_prepare_upload_headers():

    values = prepare_upload_headers(
        DATA, "session", "photo.jpg", "1.2.1",
        album_id=12, caption="Hi", latitude=1.5
    )
    as_dict = dict(zip(UPLOAD_HEADERS, values))

    assert as_dict["Content-Length"] == str(len(DATA))
    assert as_dict["Content-MD5"] == hashlib.md5(DATA).hexdigest()
    assert as_dict["X-Smug-SessionID"] == "session"
    assert as_dict["X-Smug-Version"] == "1.2.1"
    assert as_dict["X-Smug-ResponseType"] == "JSON"
    assert as_dict["X-Smug-AlbumID"] == "12"
    assert as_dict["X-Smug-ImageID"] is None
    assert as_dict["X-Smug-FileName"] == "photo.jpg"
    assert as_dict["X-Smug-Caption"] == "Hi"
    assert as_dict["X-Smug-Keywords"] is None
    assert as_dict["X-Smug-Latitude"] == "1.5"


def test_album_and_image_are_mutually_exclusive(transport):

    values = headers(**{"X-Smug-ImageID": "99"})

    with pytest.raises(SmugMugInvalidRequestError):
        put_image(transport, UPLOAD_URL, values, DATA, "1.2.1")

    transport.put.assert_not_called()


def test_replacing_an_image(transport):

    values = headers(**{"X-Smug-AlbumID": None, "X-Smug-ImageID": "99"})
    put_image(transport, UPLOAD_URL, values, DATA, "1.2.1")

    sent = transport.put.call_args.args[2]
    assert sent[upload.IMAGE_ID] == "99"
    assert sent[upload.ALBUM_ID] is None


def test_header_count_must_match(transport):

    with pytest.raises(SmugMugInvalidRequestError):
        put_image(transport, UPLOAD_URL, headers()[:-1], DATA, "1.2.1")
    with pytest.raises(SmugMugInvalidRequestError):
        put_image(transport, UPLOAD_URL, None, DATA, "1.2.1")

    transport.put.assert_not_called()


def test_file_name_is_required(transport):

    for name in (None, "", "   "):
        with pytest.raises(SmugMugInvalidRequestError):
            put_image(transport, UPLOAD_URL, headers(**{"X-Smug-FileName": name}), DATA, "1.2.1")

    transport.put.assert_not_called()


def test_url_is_required(transport):
    with pytest.raises(SmugMugInvalidRequestError):
        put_image(transport, "", headers(), DATA, "1.2.1")


def test_file_name_is_url_encoded(transport):

    values = headers(**{"X-Smug-FileName": "my photo/é.jpg"})
    put_image(transport, UPLOAD_URL, values, DATA, "1.2.1")

    url = transport.put.call_args.args[0]
    assert url == UPLOAD_URL + "my%20photo%2F%C3%A9.jpg"
    assert validate_upload_headers(UPLOAD_URL, values) == "my%20photo%2F%C3%A9.jpg"


def test_put_sends_body_and_header_names(transport):

    text = put_image(transport, UPLOAD_URL, headers(), DATA, "1.2.1")

    url, names, values, body = transport.put.call_args.args
    assert text == '{"stat": "ok"}'
    assert url == UPLOAD_URL + "photo.jpg"
    assert names == UPLOAD_HEADERS
    assert body == DATA


def test_version_and_response_type_are_forced(transport, caplog):

    values = headers(**{"X-Smug-Version": "1.2.0", "X-Smug-ResponseType": "PHP"})

    with caplog.at_level(logging.WARNING, logger="smugapi.smugmug.upload"):
        put_image(transport, UPLOAD_URL, values, DATA, "1.2.1")

    sent = transport.put.call_args.args[2]
    assert sent[upload.VERSION] == "1.2.1"
    assert sent[upload.RESPONSE_TYPE] == "JSON"
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2

    # The caller's list is left alone.
    assert values[upload.VERSION] == "1.2.0"


def test_matching_forced_headers_do_not_warn(transport, caplog):

    with caplog.at_level(logging.WARNING, logger="smugapi.smugmug.upload"):
        put_image(transport, UPLOAD_URL, headers(), DATA, "1.2.1")

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_prepare_base64_upload():

    arguments = prepare_base64_upload(DATA)

    assert base64.b64decode(arguments["Data"]) == DATA
    assert arguments["ByteCount"] == len(DATA)
    assert arguments["MD5Sum"] == hashlib.md5(DATA).hexdigest()

    with pytest.raises(SmugMugInvalidRequestError):
        prepare_base64_upload(None)
