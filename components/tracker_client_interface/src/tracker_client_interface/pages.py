"""Lazy, restartable result sequence assembled from paginated responses."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from tracker_client_interface.errors import TrackerError

__all__ = ["Page", "PageIterator", "extract_items"]


@dataclass(frozen=True)
class Page:
    """One physical response: its items and the continuation link, if any."""

    items: list[Any]
    next_url: str | None = None


def extract_items(body: Any, *, path: str | None = None) -> list[Any]:
    """Return the list of items carried by one page body.

    Collection endpoints answer with a JSON array; search style endpoints wrap
    it as ``{"items": [...]}``.
    """
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("items"), list):
        return body["items"]
    raise TrackerError(f"Cannot read a result page from response of type {type(body).__name__}", path=path)


class PageIterator:
    """Iterable over every item of a listing, fetched one page at a time.

    Each call to ``iter()`` starts again from the first page. Items are yielded
    in page order with no deduplication. Iteration ends on the first page that
    has no ``next`` link, or after the first page when the caller asked for an
    explicit integer ``page``.

    Args:
        fetch_page: Callable ``(url_or_path, params) -> Page`` performing one request
        start:      Path (or absolute URL) of the first page
        params:     Query parameters for the first page only; continuation links
                    already carry their own query string
    """

    def __init__(
        self,
        fetch_page: Callable[[str, dict[str, Any] | None], Page],
        start: str,
        params: dict[str, Any] | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._start = start
        self._params = dict(params) if params else None

    @property
    def single_page(self) -> bool:
        page = (self._params or {}).get("page")
        return isinstance(page, int) and not isinstance(page, bool)

    def pages(self) -> Iterator[Page]:
        """Yield each page in turn."""
        url: str | None = self._start
        params = self._params
        while url is not None:
            page = self._fetch_page(url, params)
            yield page
            if self.single_page:
                return
            url = page.next_url
            params = None

    def __iter__(self) -> Iterator[Any]:
        for page in self.pages():
            yield from page.items

    def to_list(self) -> list[Any]:
        return list(self)
