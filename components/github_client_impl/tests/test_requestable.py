"""Unit tests for the Requestable executor and the get_client factory."""

import os
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from github_client_impl.config import BasicCredential, ClientConfig, TokenCredential
from github_client_impl.github_impl import GitHubIssues, get_client
from github_client_impl.requestable import Requestable
from tracker_client_interface.errors import (
    ClientError,
    NotFoundError,
    ServerError,
    TrackerError,
)
from tracker_client_interface.retry import RetryPolicy


@pytest.fixture
def executor(session):
    """Returns a bare Requestable with a mocked session."""
    client = Requestable({"token": "dummy_token"})
    client._session.close()
    client._session = session
    yield client
    client.close()


#--------------------------- tests for _raise_for_status --------------------------

def test_raise_for_status_ok_response_does_not_raise(make_response):
    Requestable._raise_for_status(make_response(200, {"ok": True}))


def test_raise_for_status_404_raises_not_found(make_response):
    with pytest.raises(NotFoundError) as exc_info:
        Requestable._raise_for_status(make_response(404, {"message": "Not Found"}), "/repos/a/b/issues/1")
    assert str(exc_info.value) == "404 Not Found (/repos/a/b/issues/1)"


def test_raise_for_status_401_is_client_error_with_remote_message(make_response):
    response = make_response(401, {"message": "Bad credentials"})

    with pytest.raises(ClientError) as exc_info:
        Requestable._raise_for_status(response)

    # 401 is a client error but not a not-found
    assert not isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.message == "Bad credentials"
    assert exc_info.value.response_body == {"message": "Bad credentials"}


def test_raise_for_status_500_raises_server_error(make_response):
    response = make_response(500, None, reason="Internal Server Error")

    with pytest.raises(ServerError) as exc_info:
        Requestable._raise_for_status(response)
    assert exc_info.value.message == "Internal Server Error"


def test_raise_for_status_unfollowed_redirect_is_an_error(make_response):
    # Only 2xx counts as success; a 304 must not resolve to True
    response = make_response(304, None, reason="Not Modified")

    with pytest.raises(TrackerError) as exc_info:
        Requestable._raise_for_status(response, "/repos/a/b/issues")
    assert type(exc_info.value) is TrackerError
    assert exc_info.value.status == 304


def test_unfollowed_redirect_rejects_the_request(executor, session, make_response):
    session.request.return_value = make_response(304, None, reason="Not Modified")

    error = executor._request("GET", "/x").exception(timeout=5)

    assert type(error) is TrackerError
    assert error.status == 304


#--------------------------- request shaping --------------------------

def test_get_sends_data_as_query_and_dates_as_iso(executor, session, make_response):
    session.request.return_value = make_response(200, [])
    since = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    executor._request("GET", "/repos/a/b/issues", {"since": since, "assignee": None, "pulls": False}).result(timeout=5)

    params = session.request.call_args.kwargs["params"]
    assert params == {"since": "2024-01-02T03:04:05+00:00", "pulls": "false"}


def test_post_sends_data_as_json_body(executor, session, make_response):
    session.request.return_value = make_response(201, {"id": 1})
    due = datetime(2024, 5, 1)

    executor._request("POST", "/x", {"title": "t", "nested": {"due": due}}).result(timeout=5)

    assert session.request.call_args.kwargs["json"] == {"title": "t", "nested": {"due": "2024-05-01T00:00:00"}}
    assert session.request.call_args.kwargs["params"] is None


def test_relative_paths_are_prefixed_and_absolute_urls_kept(executor):
    assert executor._url("/repos/a/b") == "https://api.github.com/repos/a/b"
    assert executor._url("https://other.example/x?page=2") == "https://other.example/x?page=2"


def test_timeout_from_config_is_passed_to_session(session, make_response):
    client = Requestable(config=ClientConfig(timeout=2.5))
    client._session = session
    session.request.return_value = make_response(200, {})
    try:
        client._request("GET", "/x").result(timeout=5)
        assert session.request.call_args.kwargs["timeout"] == 2.5
    finally:
        client.close()


def test_basic_credential_uses_http_basic_auth():
    client = Requestable({"username": "octocat", "password": "secret"})
    try:
        assert client._session.auth.username == "octocat"
        assert "Authorization" not in client._session.headers
    finally:
        client.close()


def test_unknown_auth_mapping_is_rejected():
    with pytest.raises(ValueError):
        Requestable({"user": "nobody"})


#--------------------------- pagination --------------------------

def test_all_pages_reads_search_style_items(executor, session, make_response):
    session.request.side_effect = [
        make_response(200, {"total_count": 2, "items": [{"n": 1}]}, links={"next": {"url": "https://api.github.com/p2"}}),
        make_response(200, {"total_count": 2, "items": [{"n": 2}]}),
    ]

    result = executor._request_all_pages("/search/issues", {"q": "bug"}).result(timeout=5)

    assert result == [{"n": 1}, {"n": 2}]


def test_explicit_page_option_fetches_only_that_page(executor, session, make_response):
    session.request.return_value = make_response(200, [{"n": 5}], links={"next": {"url": "https://api.github.com/p3"}})

    result = executor._request_all_pages("/repos/a/b/issues", {"page": 2}).result(timeout=5)

    assert result == [{"n": 5}]
    assert session.request.call_count == 1


def test_unreadable_page_rejects_with_tracker_error(executor, session, make_response):
    session.request.return_value = make_response(200, {"unexpected": True})

    error = executor._request_all_pages("/x").exception(timeout=5)

    assert type(error) is TrackerError


def test_error_on_second_page_rejects_whole_listing(executor, session, make_response):
    session.request.side_effect = [
        make_response(200, [{"n": 1}], links={"next": {"url": "https://api.github.com/p2"}}),
        make_response(502, {"message": "Bad Gateway"}),
    ]
    calls = []

    future = executor._request_all_pages("/x", None, lambda e, r: calls.append((e, r)))

    assert isinstance(future.exception(timeout=5), ServerError)
    executor.close()
    # Never a partial result
    assert len(calls) == 1
    assert calls[0][1] is None


#--------------------------- retry policy --------------------------

def test_default_policy_does_not_retry(executor, session, make_response):
    session.request.return_value = make_response(503, {"message": "busy"})

    assert isinstance(executor._request("GET", "/x").exception(timeout=5), ServerError)
    assert session.request.call_count == 1


def test_configured_policy_retries_transient_failures(session, make_response, monkeypatch):
    sleeps = []
    monkeypatch.setattr("github_client_impl.requestable.time.sleep", sleeps.append)
    client = Requestable(config=ClientConfig(retry=RetryPolicy(max_retries=2, delay=0.5, backoff=2.0)))
    client._session = session
    session.request.side_effect = [
        requests.ConnectionError("reset"),
        make_response(503, {"message": "busy"}),
        make_response(200, {"ok": True}),
    ]
    try:
        assert client._request("GET", "/x").result(timeout=5) == {"ok": True}
    finally:
        client.close()

    assert session.request.call_count == 3
    assert sleeps == [0.5, 1.0]


def test_configured_policy_never_retries_client_errors(session, make_response, monkeypatch):
    monkeypatch.setattr("github_client_impl.requestable.time.sleep", MagicMock())
    client = Requestable(config=ClientConfig(retry=RetryPolicy(max_retries=3)))
    client._session = session
    session.request.return_value = make_response(422, {"message": "Validation Failed"})
    try:
        assert isinstance(client._request("POST", "/x", {}).exception(timeout=5), ClientError)
    finally:
        client.close()
    assert session.request.call_count == 1


#--------------------------- lifecycle --------------------------

def test_request_after_close_rejects_as_closed_client(executor):
    executor.close()

    future = executor._request("GET", "/x")

    error = future.exception(timeout=5)
    # Nothing went over the network, so this is not a transport failure
    assert type(error) is TrackerError
    assert error.message == "client is closed"


def test_context_manager_closes_session(session):
    with Requestable() as client:
        client._session = session
    session.close.assert_called_once()


#--------------------------- tests for get_client function --------------------------

@pytest.fixture
def clean_env(monkeypatch):
    for var in ["GITHUB_API_URL", "GITHUB_TOKEN", "GITHUB_USERNAME", "GITHUB_PASSWORD"]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_get_client_raises_when_env_vars_missing(clean_env):
    with pytest.raises(EnvironmentError):
        get_client("acme/widgets", interactive=False)


def test_get_client_uses_token_from_env(clean_env):
    clean_env.setenv("GITHUB_TOKEN", "dummy_token")
    clean_env.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")

    client = get_client("acme/widgets")
    try:
        assert isinstance(client, GitHubIssues)
        assert client._credential == TokenCredential("dummy_token")
        assert client.api_base == "https://ghe.example.com/api/v3"
    finally:
        client.close()


def test_get_client_falls_back_to_username_password(clean_env):
    clean_env.setenv("GITHUB_USERNAME", "octocat")
    clean_env.setenv("GITHUB_PASSWORD", "secret")

    client = get_client("acme/widgets")
    try:
        assert client._credential == BasicCredential("octocat", "secret")
    finally:
        client.close()


def test_get_client_prompts_when_interactive(clean_env):
    clean_env.setattr("github_client_impl.github_impl.getpass", lambda prompt: "prompted_token")

    client = get_client("acme/widgets", interactive=True)
    try:
        assert client._credential == TokenCredential("prompted_token")
        assert "GITHUB_TOKEN" not in os.environ
    finally:
        client.close()


def test_credentials_are_masked_in_repr():
    assert "secret" not in repr(BasicCredential("octocat", "secret"))
    assert "abc" not in repr(TokenCredential("abc"))
