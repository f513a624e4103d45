"""
Authentication
--------------
The client supports two credential modes:

1. When get_client(repository, interactive=True)
    User is prompted for anything missing from the environment.
2. When get_client(repository, interactive=False) - Default
        GITHUB_API_URL   https://api.github.com (optional)
        GITHUB_TOKEN     <personal access token>
    or
        GITHUB_USERNAME / GITHUB_PASSWORD

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import os
from collections.abc import Mapping
from concurrent.futures import Future
from getpass import getpass
from typing import Any

from github_client_impl.config import (
    DEFAULT_API_BASE,
    BasicCredential,
    ClientConfig,
    Credential,
    TokenCredential,
)
from github_client_impl.requestable import Requestable
from tracker_client_interface.client import IssueTrackerClient
from tracker_client_interface.completion import Callback, rejected
from tracker_client_interface.issue import Payload, as_payload
from tracker_client_interface.pages import PageIterator
from tracker_client_interface.paths import RepositoryPath

__all__ = ["GitHubIssues", "get_client"]


class GitHubIssues(Requestable, IssueTrackerClient):
    """Issues of one GitHub repository.

    Args:
        repository: ``"owner/repo"`` or a RepositoryPath
        auth:       Credential used for every request (None for anonymous access)
        api_base:   Root API URL, e.g. a GitHub Enterprise ``https://ghe.example.com/api/v3``
        config:     Timeouts, pool size and retry policy
    """

    def __init__(
        self,
        repository: str | RepositoryPath,
        auth: Credential | Mapping[str, str] | None = None,
        api_base: str | None = None,
        *,
        config: ClientConfig | None = None,
    ) -> None:
        #parse before the executor opens a session and a pool
        if isinstance(repository, RepositoryPath):
            self._repository = repository
        else:
            self._repository = RepositoryPath.parse(repository)
        super().__init__(auth, api_base, config=config)

    @property
    def repository(self) -> RepositoryPath:
        return self._repository

    def __repr__(self) -> str:
        return f"<GitHubIssues repository={self._repository.full_name!r} api_base={self.api_base!r}>"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _call(
        self,
        method: str,
        segments: tuple[int | str, ...],
        data: Payload | None = None,
        cb: Callback | None = None,
    ) -> Future:
        #a bad id or payload becomes a rejected future rather than an exception at the call site
        try:
            path = self._repository.path(*segments)
            body = as_payload(data)
        except (TypeError, ValueError) as exc:
            return rejected(exc, cb)
        return self._request(method, path, body, cb)

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def create_issue(self, issue_data: Payload, cb: Callback | None = None) -> Future:
        """POST /repos/{owner}/{repo}/issues"""
        return self._call("POST", ("issues",), issue_data, cb)

    def list_issues(self, options: dict[str, Any] | None = None, cb: Callback | None = None) -> Future:
        """GET /repos/{owner}/{repo}/issues, every page."""
        return self._request_all_pages(self._repository.path("issues"), options, cb)

    def iter_issues(self, options: dict[str, Any] | None = None) -> PageIterator:
        return self._iter_pages(self._repository.path("issues"), options)

    def get_issue(self, issue: int, cb: Callback | None = None) -> Future:
        """GET /repos/{owner}/{repo}/issues/{issue}"""
        return self._call("GET", ("issues", issue), None, cb)

    def edit_issue(self, issue: int, issue_data: Payload, cb: Callback | None = None) -> Future:
        """PATCH /repos/{owner}/{repo}/issues/{issue}

        Only fields present in ``issue_data`` are sent. With an IssueUpdate,
        fields left as None are omitted.
        """
        return self._call("PATCH", ("issues", issue), issue_data, cb)

    def list_issue_comments(self, issue: int, cb: Callback | None = None) -> Future:
        """GET /repos/{owner}/{repo}/issues/{issue}/comments"""
        return self._call("GET", ("issues", issue, "comments"), None, cb)

    def get_issue_comment(self, comment_id: int, cb: Callback | None = None) -> Future:
        """GET /repos/{owner}/{repo}/issues/comments/{id}"""
        return self._call("GET", ("issues", "comments", comment_id), None, cb)

    def create_issue_comment(self, issue: int, comment: str, cb: Callback | None = None) -> Future:
        """POST /repos/{owner}/{repo}/issues/{issue}/comments"""
        return self._call("POST", ("issues", issue, "comments"), {"body": comment}, cb)

    def edit_issue_comment(self, comment_id: int, comment: str, cb: Callback | None = None) -> Future:
        """PATCH /repos/{owner}/{repo}/issues/comments/{id}"""
        return self._call("PATCH", ("issues", "comments", comment_id), {"body": comment}, cb)

    def delete_issue_comment(self, comment_id: int, cb: Callback | None = None) -> Future:
        """DELETE /repos/{owner}/{repo}/issues/comments/{id}; resolves to True."""
        return self._call("DELETE", ("issues", "comments", comment_id), None, cb)


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(
    repository: str,
    *,
    interactive: bool = False,
    config: ClientConfig | None = None,
) -> GitHubIssues:
    """Return a configured GitHubIssues client for ``repository``.

    Reads credentials from environment variables. If "interactive = True" and
    no credential is set, the user will be prompted.

    Environment variables:
        GITHUB_API_URL:   Base URL of the API (defaults to https://api.github.com).
        GITHUB_TOKEN:     Personal access token.
        GITHUB_USERNAME:  Account name, used with GITHUB_PASSWORD when no token is set.
        GITHUB_PASSWORD:  Account password.
    """
    api_base = os.environ.get("GITHUB_API_URL", "") or (config.api_base if config else DEFAULT_API_BASE)
    token = os.environ.get("GITHUB_TOKEN", "")
    username = os.environ.get("GITHUB_USERNAME", "")
    password = os.environ.get("GITHUB_PASSWORD", "")

    credential: Credential | None = None
    if token:
        credential = TokenCredential(token)
    elif username and password:
        credential = BasicCredential(username, password)
    elif interactive:
        token = getpass("GitHub token (leave empty to use username/password): ").strip()
        if token:
            credential = TokenCredential(token)
        else:
            username = username or input("GitHub username: ").strip()
            password = getpass("GitHub password: ")
            credential = BasicCredential(username, password)
    else:
        raise EnvironmentError(
            "Missing required environment variables: GITHUB_TOKEN "
            "(or GITHUB_USERNAME and GITHUB_PASSWORD). "
            "Set them or call get_client(interactive=True).",
        )

    return GitHubIssues(repository, credential, api_base, config=config)
