"""Error types raised by the portal's backend clients and form checks."""
from __future__ import annotations


class PortalError(Exception):
    """Base for every failure the page controller turns into a notice."""


class TransportError(PortalError):
    """The HTTP call failed to complete or came back with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceError(PortalError):
    """The backend answered, but with an explicit error payload."""


class ValidationError(PortalError):
    """A form rule was violated; nothing was sent."""


class SubmissionRejected(PortalError):
    """The ingestion endpoint refused the application."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Failed to submit application: {status_code} {body}")
        self.status_code = status_code
        self.body = body
