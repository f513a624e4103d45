"""Issue tracker client contract."""

from tracker_client_interface.client import IssueTrackerClient
from tracker_client_interface.completion import Callback, attach_callback, rejected, resolved
from tracker_client_interface.errors import (
    ClientError,
    NotFoundError,
    ServerError,
    TrackerError,
    TransportError,
)
from tracker_client_interface.issue import IssueUpdate, NewIssue
from tracker_client_interface.pages import Page, PageIterator
from tracker_client_interface.paths import RepositoryPath
from tracker_client_interface.request import RequestDescriptor
from tracker_client_interface.retry import NO_RETRY, RetryPolicy

__all__ = [
    "Callback",
    "ClientError",
    "IssueTrackerClient",
    "IssueUpdate",
    "NO_RETRY",
    "NewIssue",
    "NotFoundError",
    "Page",
    "PageIterator",
    "RepositoryPath",
    "RequestDescriptor",
    "RetryPolicy",
    "ServerError",
    "TrackerError",
    "TransportError",
    "attach_callback",
    "rejected",
    "resolved",
]
