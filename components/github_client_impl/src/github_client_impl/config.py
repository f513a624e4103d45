"""Client configuration and credentials."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

from tracker_client_interface.retry import RetryPolicy

__all__ = [
    "DEFAULT_API_BASE",
    "BasicCredential",
    "ClientConfig",
    "Credential",
    "TokenCredential",
    "credential_from",
]

DEFAULT_API_BASE = "https://api.github.com"


@dataclass(frozen=True)
class TokenCredential:
    """Personal access / OAuth token, sent as ``Authorization: token <token>``."""

    token: str

    def __repr__(self) -> str:
        return "TokenCredential(token='***')"


@dataclass(frozen=True)
class BasicCredential:
    """Username and password, sent with HTTP basic auth."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"BasicCredential(username={self.username!r}, password='***')"


Credential = Union[TokenCredential, BasicCredential]


def credential_from(auth: Credential | Mapping[str, str] | None) -> Credential | None:
    """Normalise the ``auth`` argument.

    Accepts a credential object, ``None`` (anonymous), or a mapping holding
    either ``token`` or ``username`` and ``password``.
    """
    if auth is None or isinstance(auth, (TokenCredential, BasicCredential)):
        return auth
    if isinstance(auth, Mapping):
        if auth.get("token"):
            return TokenCredential(auth["token"])
        if auth.get("username") and auth.get("password") is not None:
            return BasicCredential(auth["username"], auth["password"])
        raise ValueError("auth mapping needs either 'token' or 'username' and 'password'")
    raise TypeError(f"Unsupported auth type: {type(auth).__name__}")


@dataclass(frozen=True)
class ClientConfig:
    """
    Args:
        api_base:    Root URL of the API; pagination links are followed verbatim
        timeout:     Seconds per HTTP request, None waits forever
        max_workers: Size of the thread pool running requests
        retry:       Retry policy for transient failures (default: never retry)
        user_agent:  Value of the User-Agent header
    """

    api_base: str = DEFAULT_API_BASE
    timeout: float | None = None
    max_workers: int = 4
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    user_agent: str = "github-issues-client"

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))
