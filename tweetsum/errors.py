"""
Exception classes for tweetsum.

Only failures that abort the pipeline before a summary can be requested are
raised. Generation failures are reported as ``SummaryResult`` values and
parsing never fails.
"""

from .models.summary import ErrorKind

INVALID_URL_MESSAGE = "Please enter a valid X/Tweet URL."


class TweetsumError(Exception):
    """Base exception for all tweetsum errors."""

    kind: ErrorKind | None = None


class InvalidUrlError(TweetsumError):
    """Raised when input does not look like an x.com status URL."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str):
        super().__init__(INVALID_URL_MESSAGE)
        self.url = url


class FetchError(TweetsumError):
    """Raised when the markdown rendering of a post cannot be loaded."""

    kind = ErrorKind.FETCH_FAILURE

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
