"""Shared fixtures: clients whose HTTP session is a MagicMock."""

import json
from unittest.mock import MagicMock

import pytest

from github_client_impl.github_impl import GitHubIssues


def _make_response(status_code=200, body=None, links=None, reason="OK"):
    """Build a MagicMock standing in for a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.links = links or {}
    if body is None:
        response.content = b""
        response.text = ""
        response.json.side_effect = ValueError("No JSON")
    else:
        text = json.dumps(body)
        response.content = text.encode()
        response.text = text
        response.json.return_value = body
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def issues(session):
    """Returns a GitHubIssues for acme/widgets with the HTTP session mocked out."""
    client = GitHubIssues("acme/widgets", {"token": "dummy_token"})
    # Swap the real session so no request ever leaves the process
    client._session.close()
    client._session = session
    yield client
    client.close()
