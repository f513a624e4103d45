"""Request descriptor - the (method, path, body) triple for one HTTP call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["RequestDescriptor", "HTTP_METHODS"]

HTTP_METHODS = frozenset({"GET", "POST", "PATCH", "PUT", "DELETE"})


@dataclass(frozen=True)
class RequestDescriptor:
    """One outgoing request. Built per call, consumed by the executor, never stored.

    ``body`` is sent as JSON; ``params`` as the query string.
    """

    method: str
    path: str
    body: Any = None
    params: dict[str, Any] | None = field(default=None)

    def __post_init__(self) -> None:
        method = self.method.upper() if isinstance(self.method, str) else self.method
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        #frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, "method", method)
        if not isinstance(self.path, str) or not self.path:
            raise ValueError("Request path must be a non-empty string")
