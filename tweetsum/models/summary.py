"""Pydantic models for summary results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Classified, user-recoverable failure kinds."""

    INVALID_URL = "invalid_url"
    FETCH_FAILURE = "fetch_failure"
    MISSING_CREDENTIAL = "missing_credential"
    AUTH_REJECTED = "auth_rejected"
    UPSTREAM_ERROR = "upstream_error"
    EMPTY_RESPONSE = "empty_response"


class SummaryResult(BaseModel):
    """Outcome of a single summary request."""

    text: str = ""
    error: ErrorKind | None = None
    message: str = ""
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display_text(self) -> str:
        """Text to show: the summary on success, the user-facing message otherwise."""
        return self.text if self.ok else self.message

    @classmethod
    def failure(cls, error: ErrorKind, message: str, status_code: int | None = None) -> SummaryResult:
        return cls(error=error, message=message, status_code=status_code)
