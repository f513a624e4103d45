"""Typed request path builder.

Paths are assembled from validated components instead of string templates,
so an owner, repository name or id can never smuggle in an extra path segment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

__all__ = ["RepositoryPath", "build_path"]

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_name(kind: str, value: str) -> str:
    if not isinstance(value, str) or not _NAME_RE.match(value) or value in (".", ".."):
        raise ValueError(f"Invalid {kind}: {value!r}")
    return value


def _segment(value: int | str) -> str:
    #bool is a subclass of int, but True is never a valid id
    if isinstance(value, bool):
        raise ValueError(f"Invalid path segment: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Invalid path segment: {value!r}")
        return str(value)
    if isinstance(value, str) and value:
        return quote(value, safe="")
    raise ValueError(f"Invalid path segment: {value!r}")


def build_path(*segments: int | str) -> str:
    """Join segments into an absolute request path, quoting each one."""
    return "/" + "/".join(_segment(s) for s in segments)


@dataclass(frozen=True)
class RepositoryPath:
    """The owner/name pair every issue request path is templated from."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        _check_name("owner", self.owner)
        _check_name("repository name", self.name)

    @classmethod
    def parse(cls, full_name: str) -> RepositoryPath:
        """Build from a ``"owner/repo"`` string."""
        if not isinstance(full_name, str) or full_name.count("/") != 1:
            raise ValueError(f"Repository must look like 'owner/repo', got {full_name!r}")
        owner, name = full_name.split("/")
        return cls(owner, name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def path(self, *segments: int | str) -> str:
        """Return ``/repos/{owner}/{name}/{segments...}``."""
        return build_path("repos", self.owner, self.name, *segments)

    def __str__(self) -> str:
        return self.full_name
