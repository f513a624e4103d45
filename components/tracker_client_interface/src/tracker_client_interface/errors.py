"""Error taxonomy shared by every tracker client implementation."""

from __future__ import annotations

from typing import Any

__all__ = [
    "TrackerError",
    "TransportError",
    "ClientError",
    "NotFoundError",
    "ServerError",
    "error_for_status",
]


class TrackerError(Exception):
    """Base exception for anything that goes wrong talking to the tracker.

    Args:
        message:       Human readable description (remote message when there is one)
        status:        HTTP status code, or None when no response was received
        path:          The request path or URL the error belongs to
        response_body: Parsed (or raw text) body of the failing response
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        path: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.path = path
        self.response_body = response_body

    def __str__(self) -> str:
        prefix = f"{self.status} " if self.status is not None else ""
        suffix = f" ({self.path})" if self.path else ""
        return f"{prefix}{self.message}{suffix}"


class TransportError(TrackerError):
    """Raised when the request never got a response (DNS, refused connection, timeout)."""


class ClientError(TrackerError):
    """Raised for 4xx responses: malformed request or failed authorization."""


class NotFoundError(ClientError):
    """Raised when the requested resource does not exist (HTTP 404)."""


class ServerError(TrackerError):
    """Raised for 5xx responses."""


def error_for_status(status: int, message: str, *, path: str | None = None, response_body: Any = None) -> TrackerError:
    """Pick the exception class matching an HTTP error status."""
    if status == 404:
        cls: type[TrackerError] = NotFoundError
    elif 400 <= status < 500:
        cls = ClientError
    elif status >= 500:
        cls = ServerError
    else:
        #3xx that requests did not follow, or anything else unexpected
        cls = TrackerError
    return cls(message, status=status, path=path, response_body=response_body)
