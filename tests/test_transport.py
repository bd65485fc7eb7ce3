import logging
from unittest import mock

import pytest
import requests

from smugapi.smugmug.exceptions import (
    SmugMugInvalidRequestError,
    SmugMugNetworkError,
)
from smugapi.smugmug.transport import (
    USER_AGENT,
    HttpTransport,
    describe_value,
    pair_arguments,
)

URL = "https://api.smugmug.com/services/api/json/1.2.1/"


@pytest.fixture
def session(http_response):
    fake = mock.Mock(spec=requests.Session)
    fake.post.return_value = http_response()
    fake.put.return_value = http_response()
    return fake


@pytest.fixture
def http(session):
    return HttpTransport(timeout=(3, 7), session=session)


def sent_form(session):
    return session.post.call_args.kwargs["data"]


def test_pair_arguments_skips_incomplete_pairs():
    assert pair_arguments(["A", "B"], ["x", ""]) == [("A", "x")]
    assert pair_arguments(["A", "", None, "D"], ["a", "b", "c", None]) == [("A", "a")]
    assert pair_arguments(["A", "B"], [" ", "y"]) == [("B", "y")]


def test_pair_arguments_ignores_trailing_names():
    assert pair_arguments(["A", "B", "C"], ["a"]) == [("A", "a")]
    assert pair_arguments(["A", "B"], []) == []


def test_pair_arguments_rejects_bad_lists():
    with pytest.raises(SmugMugInvalidRequestError):
        pair_arguments(["A"], ["a", "b"])
    with pytest.raises(SmugMugInvalidRequestError):
        pair_arguments(None, [])
    with pytest.raises(SmugMugInvalidRequestError):
        pair_arguments([], None)


def test_post_sends_method_first(http, session):

    text = http.post(URL, "smugmug.albums.get", ["APIKey", "SessionID", "NickName"], ["key", None, "nick"])

    assert text == '{"stat": "ok"}'
    assert sent_form(session) == [
        ("method", "smugmug.albums.get"),
        ("APIKey", "key"),
        ("NickName", "nick"),
    ]

    kwargs = session.post.call_args.kwargs
    assert session.post.call_args.args == (URL,)
    assert kwargs["headers"] == {"User-Agent": USER_AGENT}
    assert kwargs["timeout"] == (3, 7)


def test_post_validates_before_sending(http, session):

    with pytest.raises(SmugMugInvalidRequestError):
        http.post("", "smugmug.logout", [], [])
    with pytest.raises(SmugMugInvalidRequestError):
        http.post(URL, " ", [], [])
    with pytest.raises(SmugMugInvalidRequestError):
        http.post(URL, "smugmug.logout", ["APIKey"], ["a", "b"])

    session.post.assert_not_called()


def test_non_200_status_is_a_network_failure(http, session, http_response):

    response = http_response(status_code=503)
    session.post.return_value = response

    with pytest.raises(SmugMugNetworkError) as info:
        http.post(URL, "smugmug.logout", [], [])

    assert info.value.status_code == 503
    assert "503" in str(info.value)
    response.close.assert_called_once_with()


def test_transport_exceptions_are_wrapped(http, session):

    cause = requests.exceptions.ConnectionError("refused")
    session.post.side_effect = cause

    with pytest.raises(SmugMugNetworkError) as info:
        http.post(URL, "smugmug.logout", [], [])

    assert info.value.__cause__ is cause


def test_timeouts_are_wrapped(http, session):

    session.post.side_effect = requests.exceptions.ReadTimeout("slow")

    with pytest.raises(SmugMugNetworkError) as info:
        http.post(URL, "smugmug.logout", [], [])

    assert isinstance(info.value.__cause__, requests.exceptions.Timeout)


def test_response_released_once_when_reading_fails(http, session, http_response):

    response = http_response()
    type(response).content = mock.PropertyMock(
        side_effect=requests.exceptions.ChunkedEncodingError("connection dropped")
    )
    session.post.return_value = response

    with pytest.raises(SmugMugNetworkError):
        http.post(URL, "smugmug.logout", [], [])

    response.close.assert_called_once_with()


def test_response_released_once_on_success(http, session, http_response):

    response = http_response()
    session.post.return_value = response

    http.post(URL, "smugmug.logout", [], [])

    response.close.assert_called_once_with()


def test_release_failure_is_raised(http, session, http_response):

    response = http_response()
    response.close.side_effect = RuntimeError("pool is broken")
    session.post.return_value = response

    with pytest.raises(SmugMugNetworkError) as info:
        http.post(URL, "smugmug.logout", [], [])

    assert isinstance(info.value.__cause__, RuntimeError)


def test_body_uses_declared_encoding(http, session, http_response):

    session.post.return_value = http_response(content="café".encode("latin-1"), encoding="ISO-8859-1")
    assert http.post(URL, "smugmug.logout", [], []) == "café"

    session.post.return_value = http_response(content="café".encode("utf-8"), encoding=None)
    assert http.post(URL, "smugmug.logout", [], []) == "café"


def test_unreadable_body_is_a_network_failure(http, session, http_response):

    response = http_response(content=b"\xff\xfe\xfa", encoding="utf-8")
    session.post.return_value = response

    with pytest.raises(SmugMugNetworkError):
        http.post(URL, "smugmug.logout", [], [])
    response.close.assert_called_once_with()

    session.post.return_value = http_response(encoding="no-such-charset")
    with pytest.raises(SmugMugNetworkError):
        http.post(URL, "smugmug.logout", [], [])


def test_put_sends_headers_and_body(http, session):

    http.put(
        "https://upload.smugmug.com/photo.jpg",
        ["Content-Length", "X-Smug-AlbumID", "X-Smug-ImageID"],
        ["4", "12", None],
        b"data"
    )

    kwargs = session.put.call_args.kwargs
    assert session.put.call_args.args == ("https://upload.smugmug.com/photo.jpg",)
    assert kwargs["data"] == b"data"
    assert kwargs["headers"] == {
        "User-Agent": USER_AGENT,
        "Content-Length": "4",
        "X-Smug-AlbumID": "12",
    }


def test_put_validates_before_sending(http, session):

    with pytest.raises(SmugMugInvalidRequestError):
        http.put("", [], [], b"")
    with pytest.raises(SmugMugInvalidRequestError):
        http.put("https://upload.smugmug.com/x", [], [], None)

    session.put.assert_not_called()


def test_default_session_is_pooled():

    transport = HttpTransport(pool_connections=2, pool_maxsize=4)
    adapter = transport.session.get_adapter("https://api.smugmug.com/")

    assert isinstance(adapter, requests.adapters.HTTPAdapter)
    assert adapter._pool_maxsize == 4
    transport.close()


def test_describe_value_masks_credentials():
    assert describe_value("Password", "S3cretPassw0rd") == "***"
    assert describe_value("X-Smug-SessionID", "abc123session") == "***"
    assert describe_value("Data", "anBlZyBieXRlcw==") == "<16 characters>"
    assert describe_value("NickName", "nick") == "nick"


def test_credentials_are_not_logged(http, caplog):

    caplog.set_level(logging.DEBUG, logger="smugapi.smugmug.transport")

    http.post(
        URL,
        "smugmug.login.withPassword",
        ["APIKey", "EmailAddress", "Password"],
        ["key", "me@example.com", "S3cretPassw0rd"]
    )
    http.post(URL, "smugmug.login.withHash", ["UserID", "PasswordHash"], ["42", "hash!"])
    http.post(URL, "smugmug.images.upload", ["SessionID", "Data"], ["abc123session", "anBlZyBieXRlcw=="])
    http.put(URL, ["X-Smug-SessionID"], ["abc123session"], b"data")

    assert "me@example.com" in caplog.text
    assert "<16 characters>" in caplog.text
    for secret in ("S3cretPassw0rd", "hash!", "abc123session", "anBlZyBieXRlcw=="):
        assert secret not in caplog.text
