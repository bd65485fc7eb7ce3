import base64
import hashlib
import io

import pytest

from smugapi.utils.params import (
    base64_encode,
    is_empty,
    md5_hex,
    read_stream,
    to_param,
)


def test_is_empty():
    assert is_empty(None)
    assert is_empty("")
    assert is_empty("   \t")
    assert not is_empty("x")
    assert not is_empty(" x ")


def test_to_param():
    assert to_param(None) is None
    assert to_param(True) == "1"
    assert to_param(False) == "0"
    assert to_param(12) == "12"
    assert to_param(1.5) == "1.5"
    assert to_param("Title") == "Title"


def test_read_stream_sources(tmp_path):

    data = b"\xff\xd8\xff\xe0 not really a jpeg"
    path = tmp_path / "photo.jpg"
    path.write_bytes(data)

    assert read_stream(data) == data
    assert read_stream(bytearray(data)) == data
    assert read_stream(path) == data
    assert read_stream(str(path)) == data
    assert read_stream(io.BytesIO(data)) == data


def test_read_stream_rejects_text_streams():
    with pytest.raises(TypeError):
        read_stream(io.StringIO("text"))


def test_read_stream_rejects_unknown_sources():
    with pytest.raises(TypeError):
        read_stream(42)


def test_digests():

    data = b"SmugMug"

    assert md5_hex(data) == hashlib.md5(data).hexdigest()
    assert base64.b64decode(base64_encode(data)) == data
