"""HTTP transport for the SmugMug JSON API.

Two wire mechanisms are supported: a form-encoded POST carrying the method
name and its arguments, and a PUT carrying raw image bytes with the upload
metadata in ``X-Smug-*`` headers. Both return the raw reply text; parsing is
left to ``smugapi.smugmug.responses``.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

import requests
from requests.adapters import HTTPAdapter

from smugapi._version import __version__
from smugapi.smugmug.exceptions import (
    SmugMugInvalidRequestError,
    SmugMugNetworkError,
)
from smugapi.utils.params import is_empty

logger = logging.getLogger(__name__)

USER_AGENT = f"smugapi/{__version__}"

Timeout = Union[float, Tuple[float, float]]

# Values never written to the log
SENSITIVE_ARGUMENTS = frozenset({
    "Password",
    "PasswordHash",
    "SitePassword",
    "SessionID",
    "X-Smug-SessionID",
})

# Values logged by size only
BULK_ARGUMENTS = frozenset({"Data"})


def describe_value(name: str, value: str) -> str:
    """Return the form of an argument value that is safe to log."""
    if name in SENSITIVE_ARGUMENTS:
        return "***"
    if name in BULK_ARGUMENTS:
        return f"<{len(value)} characters>"
    return value


def pair_arguments(
    names: Optional[Sequence[Optional[str]]],
    values: Optional[Sequence[Optional[str]]]
) -> List[Tuple[str, str]]:
    """Pair argument names with values by position.

    Names without a matching value are ignored. A pair is kept only when both
    the name and the value are non-empty.

    Args:
        names: Declared argument (or header) names
        values: Values in the same order, possibly shorter than names

    Returns:
        List of (name, value) pairs to send

    Raises:
        SmugMugInvalidRequestError: If either list is None or there are more
            values than names
    """
    if names is None or values is None:
        raise SmugMugInvalidRequestError(
            f"Neither argument names [{names}] nor values [{values}] can be None"
        )

    if len(names) < len(values):
        raise SmugMugInvalidRequestError(
            f"Got {len(values)} values for {len(names)} arguments; there "
            "cannot be more values than argument names"
        )

    pairs = []
    for name, value in zip(names, values):
        if is_empty(name) or is_empty(value):
            continue
        logger.debug(
            f"\tAdding argument name=[{name}] value=[{describe_value(name, value)}]"
        )
        pairs.append((name, value))
    return pairs


class HttpTransport:
    """Synchronous HTTP transport backed by a pooled requests session.

    The session and its connection pool are shared by every call made through
    this transport and may be used from several threads. Each call's
    response is closed before the call returns or raises.

    Attributes:
        session: Underlying requests session
        timeout: Timeout passed to requests, seconds or (connect, read)
        user_agent: Value of the User-Agent header
    """

    def __init__(
        self,
        timeout: Timeout = (10, 60),
        pool_connections: int = 10,
        pool_maxsize: int = 10,
        user_agent: str = USER_AGENT,
        session: Optional[requests.Session] = None
    ) -> None:
        """Initialize transport.

        Args:
            timeout: Request timeout in seconds, or (connect, read) tuple
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum connections kept per pool
            user_agent: User-Agent header value
            session: Pre-built session (mostly for tests)
        """
        self.timeout = timeout
        self.user_agent = user_agent

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=pool_connections,
                pool_maxsize=pool_maxsize
            )
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session

        logger.debug(
            f"HTTP transport initialized (timeout={timeout}, "
            f"pool_maxsize={pool_maxsize})"
        )

    def post(
        self,
        url: str,
        method_name: str,
        argument_names: Sequence[Optional[str]],
        argument_values: Sequence[Optional[str]]
    ) -> str:
        """Execute a method as a form-encoded HTTP POST.

        Args:
            url: Service URL
            method_name: Remote method name, sent as the "method" field
            argument_names: Declared argument names
            argument_values: Values in the same order

        Returns:
            Raw reply body

        Raises:
            SmugMugInvalidRequestError: If the URL, method name or argument
                lists are invalid
            SmugMugNetworkError: If the request fails or the status is not 200
        """
        logger.debug(f"Executing method {method_name} using service URL {url}")

        if is_empty(url):
            raise SmugMugInvalidRequestError(f"url [{url}] cannot be empty")
        if is_empty(method_name):
            raise SmugMugInvalidRequestError("method_name cannot be empty")

        logger.debug(f"\tAdding argument name=[method] value=[{method_name}]")
        form = [("method", method_name)]
        form.extend(pair_arguments(argument_names, argument_values))

        headers = {"User-Agent": self.user_agent}
        return self._execute(
            "POST",
            lambda: self.session.post(
                url,
                data=form,
                headers=headers,
                timeout=self.timeout,
                stream=True
            )
        )

    def put(
        self,
        url: str,
        header_names: Sequence[Optional[str]],
        header_values: Sequence[Optional[str]],
        body: bytes
    ) -> str:
        """Execute an HTTP PUT with raw bytes as the body.

        Args:
            url: Full target URL (upload server plus encoded file name)
            header_names: Header names
            header_values: Header values in the same order
            body: Request body

        Returns:
            Raw reply body

        Raises:
            SmugMugInvalidRequestError: If the URL or header lists are invalid
            SmugMugNetworkError: If the request fails or the status is not 200
        """
        logger.debug(f"Executing HTTP PUT using URL {url}")

        if is_empty(url):
            raise SmugMugInvalidRequestError(f"url [{url}] cannot be empty")
        if body is None:
            raise SmugMugInvalidRequestError("body cannot be None")

        headers = {"User-Agent": self.user_agent}
        for name, value in pair_arguments(header_names, header_values):
            headers[name] = value

        return self._execute(
            "PUT",
            lambda: self.session.put(
                url,
                data=body,
                headers=headers,
                timeout=self.timeout,
                stream=True
            )
        )

    def _execute(
        self,
        verb: str,
        send: Callable[[], requests.Response]
    ) -> str:
        """Send a request, validate the status and read the body.

        The response is always closed, whatever happens while sending or
        reading. A failure to close is itself raised as a network error.
        """
        response = None
        try:
            logger.debug(f"\tExecuting HTTP {verb}...")
            response = send()
            logger.debug(f"\tReceived HTTP status code {response.status_code}")

            if response.status_code != 200:
                message = (
                    f"An HTTP status code of [{response.status_code}] was "
                    "returned from the server, but 200 (OK) was expected. "
                    "Something may be wrong with the SmugMug server or the "
                    "network path to it."
                )
                logger.error(message)
                raise SmugMugNetworkError(message, status_code=response.status_code)

            encoding = response.encoding or "utf-8"
            text = response.content.decode(encoding)
            logger.debug(f"\tRead response, was {len(text)} characters long")
            return text

        except SmugMugNetworkError:
            raise
        except requests.exceptions.Timeout as e:
            logger.error(f"HTTP {verb} timed out after {self.timeout} seconds")
            raise SmugMugNetworkError(
                f"Request timed out after {self.timeout} seconds: {e}"
            ) from e
        except (requests.exceptions.RequestException, OSError) as e:
            logger.error(f"An error occurred while executing the HTTP {verb}: {e}")
            raise SmugMugNetworkError(
                "A network error occurred while communicating with the "
                f"SmugMug server: {e}"
            ) from e
        except (UnicodeDecodeError, LookupError) as e:
            logger.error(f"Could not decode the HTTP {verb} response body: {e}")
            raise SmugMugNetworkError(
                f"Unable to read the response body: {e}"
            ) from e
        finally:
            if response is not None:
                logger.debug("\tReleasing network resources...")
                try:
                    response.close()
                except Exception as e:
                    message = (
                        "Unable to release the connection used for the "
                        "request. This should not happen."
                    )
                    logger.error(f"{message} ({e})")
                    raise SmugMugNetworkError(message) from e

    def close(self) -> None:
        """Close the session and its connection pool."""
        self.session.close()
