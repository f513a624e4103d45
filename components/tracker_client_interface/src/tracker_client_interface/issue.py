"""Issue payload contracts - what callers send when creating or editing issues."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, Union

__all__ = ["NewIssue", "IssueUpdate", "Payload", "as_payload"]


@dataclass
#dataclass instead of a dict so that partial updates are explicit
class IssueUpdate:
    """
    All fields default to None. During an update, only fields explicitly set to a non-None value are sent.
    """

    title: str | None = None
    body: str | None = None
    state: str | None = None
    assignees: list[str] | None = None
    labels: list[str] | None = None
    milestone: int | None = None

    def set_fields(self) -> dict[str, Any]:
        """Return a dict containing only the fields explicitly set to non-None values (the only ones to be sent)."""
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self) if getattr(self, f.name) is not None}


class NewIssue(IssueUpdate):
    """Payload for creating an issue. Everything except the title is optional."""

    def __init__(self, title: str, **kwargs: Any) -> None:
        super().__init__(title=title, **kwargs)


Payload = Union[IssueUpdate, Mapping[str, Any]]


def as_payload(data: Payload | None) -> dict[str, Any] | None:
    """Turn an IssueUpdate/NewIssue or a plain mapping into the JSON body dict."""
    if data is None:
        return None
    if isinstance(data, IssueUpdate):
        return data.set_fields()
    if isinstance(data, Mapping):
        return dict(data)
    raise TypeError(f"Issue data must be a mapping or IssueUpdate, got {type(data).__name__}")
