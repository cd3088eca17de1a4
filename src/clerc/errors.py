"""Error definitions for clerc.

Every error is fatal: nothing is retried, and the first failure aborts the
command. ``clerc.cli.main`` is the single place these are caught.
"""


class ClercError(Exception):
    """Base class for all clerc failures.

    Attributes:
        message: Human-readable description, printed as the diagnostic.
        exit_status: Process exit status used by the top-level handler.
    """

    exit_status = 1

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Error description.
        """
        super().__init__(message)
        self.message = message


# -- Transport and response errors -------------------------------------------


class RequestError(ClercError):
    """The HTTP request could not be completed (DNS, connection refused, ...)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class StatusError(ClercError):
    """The response status differs from the one expected for the operation."""

    def __init__(self, expected: int, status_code: int, reason: str = "") -> None:
        status_line = f"{status_code} {reason}".strip()
        super().__init__(f"Unexpected status: {status_line}")
        self.expected = expected
        self.status_code = status_code
        self.reason = reason


class DecodeError(ClercError):
    """A response body is not valid JSON of the expected shape."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"Unable to decode response from {url}: {detail}")
        self.url = url
        self.detail = detail


# -- Local errors ------------------------------------------------------------


class ConfigParseError(ClercError):
    """The config file exists but is not a valid JSON configuration."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid config file {path}: {detail}")
        self.path = path
        self.detail = detail


class ArgumentError(ClercError):
    """Command-line input does not match the command grammar."""

    exit_status = 2
