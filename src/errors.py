"""
Error taxonomy for the Job Application Tracker.

Every failure the store, the HTTP client or the API can report is one of
these. The HTTP layer maps them onto status codes and back.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracker failures."""

    status_code: int = 500
    user_message: str = "Something went wrong. Please try again later."

    def __init__(self, message: str = "", *, status_code: Optional[int] = None):
        super().__init__(message or self.user_message)
        if status_code is not None:
            self.status_code = status_code


class ValidationFailure(TrackerError):
    """Bad or missing identifier, status or payload."""

    status_code = 400
    user_message = "Invalid application ID"


class Unauthorized(TrackerError):
    """No valid session for the request."""

    status_code = 401
    user_message = "Unauthorized"


class NotFound(TrackerError):
    """Record absent or not owned by the caller."""

    status_code = 404
    user_message = "Application not found"


class TransientRemoteFailure(TrackerError):
    """Network, timeout or server-side error."""

    status_code = 500
    user_message = "Server error. Please try again later."


def error_for_status(status: int, message: str = "") -> TrackerError:
    """Build the tracker error matching an HTTP status code."""
    if status == 400:
        return ValidationFailure(message)
    if status == 401:
        return Unauthorized(message)
    if status == 404:
        return NotFound(message)
    return TransientRemoteFailure(message, status_code=status)
