"""GitHub implementation of the issue tracker client contract."""

from github_client_impl.config import (
    DEFAULT_API_BASE,
    BasicCredential,
    ClientConfig,
    TokenCredential,
)
from github_client_impl.github_impl import GitHubIssues, get_client
from github_client_impl.requestable import Requestable

__all__ = [
    "DEFAULT_API_BASE",
    "BasicCredential",
    "ClientConfig",
    "GitHubIssues",
    "Requestable",
    "TokenCredential",
    "get_client",
]
