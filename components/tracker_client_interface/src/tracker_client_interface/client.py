"""Core client contract definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any

from tracker_client_interface.completion import Callback
from tracker_client_interface.issue import Payload
from tracker_client_interface.pages import PageIterator

__all__ = ["IssueTrackerClient"]


class IssueTrackerClient(ABC):
    """Issues and issue comments of a single repository.

    Every operation returns a ``Future`` right away and never raises for
    network or HTTP failures; those reject the future with a
    ``TrackerError`` subclass. The optional ``cb(error, result)`` receives the
    same outcome exactly once.
    """

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------
    @abstractmethod
    def create_issue(self, issue_data: Payload, cb: Callback | None = None) -> Future:
        """Create an issue.

        Args:
            issue_data: A NewIssue or a mapping sent verbatim as the request body
            cb:         Will receive the created issue

        Returns:
            Future resolving to the created issue representation
        """
        raise NotImplementedError

    @abstractmethod
    def list_issues(self, options: dict[str, Any] | None = None, cb: Callback | None = None) -> Future:
        """List the issues of the repository, following every page.

        Args:
            options: Filters sent as query parameters (state, labels, per_page...)
            cb:      Will receive the list of issues

        Returns:
            Future resolving to one list with the items of every page, in page order
        """
        raise NotImplementedError

    @abstractmethod
    def iter_issues(self, options: dict[str, Any] | None = None) -> PageIterator:
        """Lazily iterate the issues, fetching pages on demand."""
        raise NotImplementedError

    @abstractmethod
    def get_issue(self, issue: int, cb: Callback | None = None) -> Future:
        """Get a single issue.

        Raises (through the future):
            NotFoundError: If no issue with that number exists
        """
        raise NotImplementedError

    @abstractmethod
    def edit_issue(self, issue: int, issue_data: Payload, cb: Callback | None = None) -> Future:
        """Apply a partial update to an issue.

        Only the fields present in ``issue_data`` are sent, leaving the others unchanged.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Comments (one path segment deeper)
    # ------------------------------------------------------------------
    @abstractmethod
    def list_issue_comments(self, issue: int, cb: Callback | None = None) -> Future:
        """List comments on an issue."""
        raise NotImplementedError

    @abstractmethod
    def get_issue_comment(self, comment_id: int, cb: Callback | None = None) -> Future:
        """Get a single comment."""
        raise NotImplementedError

    @abstractmethod
    def create_issue_comment(self, issue: int, comment: str, cb: Callback | None = None) -> Future:
        """Comment on an issue."""
        raise NotImplementedError

    @abstractmethod
    def edit_issue_comment(self, comment_id: int, comment: str, cb: Callback | None = None) -> Future:
        """Replace the body of a comment."""
        raise NotImplementedError

    @abstractmethod
    def delete_issue_comment(self, comment_id: int, cb: Callback | None = None) -> Future:
        """Delete a comment.

        Returns:
            Future resolving to True once the remote side confirms the deletion

        Raises (through the future):
            NotFoundError: If the comment does not exist, including when it was already deleted
        """
        raise NotImplementedError
