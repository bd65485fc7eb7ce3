"""Custom exceptions for SmugMug API operations."""


class SmugMugError(Exception):
    """Base exception for SmugMug-related errors."""
    pass


class SmugMugInvalidRequestError(SmugMugError):
    """Raised when a request is malformed before anything is sent.

    Covers missing endpoints, mismatched argument lists, unknown argument
    names and conflicting upload headers.
    """
    pass


class SmugMugNetworkError(SmugMugError):
    """Exception raised for transport-level failures.

    Attributes:
        message: Error message
        status_code: HTTP status code (if the server answered)
    """

    def __init__(self, message: str, status_code: int = None):
        """Initialize network error.

        Args:
            message: Error message
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.status_code:
            return f"SmugMug Network Error (HTTP {self.status_code}): {self.message}"
        return f"SmugMug Network Error: {self.message}"


class SmugMugResponseError(SmugMugError):
    """Exception raised when a reply cannot be parsed.

    Attributes:
        message: Error message
        response_text: Raw reply body (if available)
    """

    def __init__(self, message: str, response_text: str = None):
        super().__init__(message)
        self.message = message
        self.response_text = response_text


class SmugMugAPIError(SmugMugError):
    """Exception for a ``stat=fail`` reply, raised on request only.

    Parsing a failed reply never raises; callers who prefer exceptions use
    ``Response.raise_for_error()``.

    Attributes:
        code: SmugMug error code
        message: SmugMug error message
        method: Method name echoed by the server
    """

    def __init__(self, code: int, message: str, method: str = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.method = method

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.method:
            return f"SmugMug API Error {self.code} ({self.method}): {self.message}"
        return f"SmugMug API Error {self.code}: {self.message}"
