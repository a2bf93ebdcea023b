"""Exceptions raised by the WebDriver binding."""

from __future__ import annotations

from typing import Optional


class WebDriverError(RuntimeError):
    """Base class for errors raised by this package."""


class InvalidArgumentError(WebDriverError, ValueError):
    """Raised locally, before any request is sent, for unusable arguments."""


class ScreenshotDecodeError(WebDriverError):
    """Raised when the server returns a screenshot that is not valid base64."""


class RequestError(WebDriverError):
    """Raised when the remote server answers with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedResponseError(WebDriverError):
    """Raised when a response body cannot be decoded."""


class SessionNotCreatedError(WebDriverError):
    """Raised when the server does not hand out a session ID."""
