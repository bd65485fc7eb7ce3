"""Parsing of SmugMug JSON replies.

Every reply shares the same envelope: a required ``stat`` ("ok" or "fail"),
the echoed ``method`` and, on failure, an error ``code`` and ``message``.
Method-specific data sits next to the envelope under a document-specific key
("Albums", "Image", "Login", ...) and is described by a ``Payload``.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from smugapi.smugmug.exceptions import SmugMugAPIError, SmugMugResponseError
from smugapi.utils.jsonutil import get_int, get_string
from smugapi.utils.params import is_empty

logger = logging.getLogger(__name__)

STAT_OK = "ok"
STAT_FAIL = "fail"


@dataclass(frozen=True)
class ErrorDetail:
    """Error reported by the server in a ``stat=fail`` reply.

    Attributes:
        code: SmugMug error code (>= 0)
        message: SmugMug error message
    """
    code: int
    message: str

    def __post_init__(self) -> None:
        if self.code is None or self.code < 0:
            raise ValueError("code must be >= 0 and be a SmugMug error code")
        if is_empty(self.message):
            raise ValueError("message cannot be empty")

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass(frozen=True)
class Payload:
    """Where a method's result lives in the reply and how to build it.

    Attributes:
        key: Top-level key holding the payload
        parser: Callable turning one JSON object into a result
        many: Whether the key holds an array of objects
        required: Whether a successful reply must contain the key
    """
    key: str
    parser: Callable[[Dict[str, Any]], Any]
    many: bool = False
    required: bool = True

    def extract(self, document: Dict[str, Any], response_text: str = None) -> Any:
        """Pull the payload out of a parsed reply.

        Args:
            document: Parsed reply object
            response_text: Raw reply, kept on errors for diagnostics

        Returns:
            Parsed result, a list of results, or None for an absent optional key

        Raises:
            SmugMugResponseError: If a required key is missing or has the wrong type
        """
        value = document.get(self.key)
        if value is None:
            if self.required:
                raise SmugMugResponseError(
                    f"Reply is missing the required '{self.key}' element",
                    response_text=response_text
                )
            return None

        if self.many:
            if not isinstance(value, list):
                raise SmugMugResponseError(
                    f"Expected '{self.key}' to be a JSON array",
                    response_text=response_text
                )
            return [self.parser(item) for item in value if isinstance(item, dict)]

        if not isinstance(value, dict):
            raise SmugMugResponseError(
                f"Expected '{self.key}' to be a JSON object",
                response_text=response_text
            )
        return self.parser(value)


@dataclass(frozen=True)
class Response:
    """Parsed reply of one SmugMug call.

    An empty reply produces a Response whose fields are all None. A reply
    with ``stat=fail`` is not an exception: check ``is_error`` or call
    ``raise_for_error``.

    Attributes:
        stat: "ok", "fail", or None for an empty reply
        method: Method name echoed by the server
        error: Error details when the call failed
        result: Method-specific payload (entity, list of entities, or None)
    """
    stat: Optional[str] = None
    method: Optional[str] = None
    error: Optional[ErrorDetail] = None
    result: Any = None

    @property
    def is_error(self) -> bool:
        """Check whether the server reported an error."""
        return self.error is not None

    @classmethod
    def parse(cls, response_text: Optional[str], payload: Payload = None) -> "Response":
        """Parse raw reply text.

        Args:
            response_text: Reply body as returned by the transport
            payload: Description of the method-specific data, if any

        Returns:
            Response instance

        Raises:
            SmugMugResponseError: If the text is not a JSON object, lacks the
                ``stat`` field, or lacks a required payload
        """
        if is_empty(response_text):
            logger.debug("Received empty response")
            return cls()

        # Login replies carry the session ID and password hash
        logger.debug(f"Received JSON response, {len(response_text)} characters")

        document = parse_document(response_text)

        stat = get_string(document, "stat")
        if stat is None:
            raise SmugMugResponseError(
                "Reply is missing the required 'stat' field",
                response_text=response_text
            )

        method = get_string(document, "method")
        code = get_int(document, "code")
        message = get_string(document, "message")

        # A code without a message (or the reverse) is not treated as an error
        error = None
        if code is not None and message is not None:
            try:
                error = ErrorDetail(code, message)
            except ValueError as e:
                raise SmugMugResponseError(
                    f"Invalid error details in reply: {e}",
                    response_text=response_text
                ) from e
            logger.debug(f"Response was an error: {error}")

        result = None
        if error is None and payload is not None:
            try:
                result = payload.extract(document, response_text)
            except SmugMugResponseError:
                logger.error(f"Could not extract '{payload.key}' from reply")
                raise

        return cls(stat=stat, method=method, error=error, result=result)

    def raise_for_error(self) -> "Response":
        """Raise SmugMugAPIError if the server reported an error.

        Returns:
            This response, for chaining

        Raises:
            SmugMugAPIError: If ``is_error`` is True
        """
        if self.error is not None:
            raise SmugMugAPIError(
                self.error.code,
                self.error.message,
                method=self.method
            )
        return self

    def __str__(self) -> str:
        """Return string representation of response."""
        if self.is_error:
            return f"Response({self.method}, error {self.error})"
        return f"Response({self.method}, stat={self.stat})"


def parse_document(response_text: str) -> Dict[str, Any]:
    """Parse reply text into a JSON object.

    Raises:
        SmugMugResponseError: If the text is not valid JSON or not an object
    """
    try:
        document = json.loads(response_text)
    except ValueError as e:
        logger.error(f"An error occurred parsing the JSON response: {e}")
        raise SmugMugResponseError(
            f"Reply is not valid JSON: {e}",
            response_text=response_text
        ) from e

    if not isinstance(document, dict):
        raise SmugMugResponseError(
            "Reply is not a JSON object",
            response_text=response_text
        )
    return document
