"""
Request executor
----------------
``Requestable`` owns everything below the request builders: the credential,
the HTTP session, the thread pool that keeps calls off the caller's thread,
pagination through ``Link`` headers, the retry policy point and the mapping of
HTTP failures to the ``TrackerError`` hierarchy.

Dependencies:
    requests
"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from datetime import date, datetime
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from github_client_impl.config import BasicCredential, ClientConfig, Credential, TokenCredential, credential_from
from tracker_client_interface.completion import Callback, attach_callback, rejected
from tracker_client_interface.errors import TrackerError, TransportError, error_for_status
from tracker_client_interface.pages import Page, PageIterator, extract_items
from tracker_client_interface.request import RequestDescriptor

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_ACCEPT = "application/vnd.github.v3+json"


def _jsonable(value: Any) -> Any:
    """Recursively turn dates into ISO 8601 strings so the value can be JSON encoded."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _query(options: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Build query parameters: None dropped, dates as ISO, lists comma joined, bools lowercased."""
    if not options:
        return None
    if not isinstance(options, Mapping):
        raise TypeError(f"Query options must be a mapping, got {type(options).__name__}")
    params: dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            params[key] = ",".join(str(_jsonable(v)) for v in value)
        else:
            params[key] = _jsonable(value)
    return params or None


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------

class Requestable:
    """
    Args:
        auth:     Credential object, ``{"token": ...}`` / ``{"username": ..., "password": ...}`` mapping, or None
        api_base: Root API URL; overrides ``config.api_base`` when given
        config:   Timeouts, pool size and retry policy
    """

    def __init__(
        self,
        auth: Credential | Mapping[str, str] | None = None,
        api_base: str | None = None,
        *,
        config: ClientConfig | None = None,
    ) -> None:
        config = config or ClientConfig()
        if api_base:
            config = replace(config, api_base=api_base)
        self._config = config
        self._credential = credential_from(auth)

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": _ACCEPT,
                "Content-Type": "application/json;charset=UTF-8",
                "User-Agent": config.user_agent,
            },
        )
        if isinstance(self._credential, TokenCredential):
            self._session.headers["Authorization"] = f"token {self._credential.token}"
        elif isinstance(self._credential, BasicCredential):
            self._session.auth = HTTPBasicAuth(self._credential.username, self._credential.password)

        self._executor = ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="tracker-request")

    @property
    def api_base(self) -> str:
        return self._config.api_base

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Wait for in-flight requests, then release the pool and the connections."""
        self._executor.shutdown(wait=True)
        self._session.close()

    def __enter__(self) -> Requestable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        #pagination links come back absolute
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._config.api_base}{path}"

    @staticmethod
    def _describe(method: str, path: str, data: Any = None) -> RequestDescriptor:
        """GET sends ``data`` as the query string, every other verb as the JSON body."""
        if method.upper() == "GET":
            return RequestDescriptor(method, path, params=_query(data))
        return RequestDescriptor(method, path, body=_jsonable(data))

    def _send_once(self, request: RequestDescriptor) -> requests.Response:
        url = self._url(request.path)
        logger.debug("%s %s params=%s", request.method, url, request.params)
        try:
            response = self._session.request(
                request.method,
                url,
                params=request.params,
                json=request.body,
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}", path=request.path) from exc
        self._raise_for_status(response, request.path)
        return response

    def _send(self, request: RequestDescriptor) -> requests.Response:
        """Send one request, repeating it only as far as the retry policy allows."""
        policy = self._config.retry
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._send_once(request)
            except TrackerError as exc:
                if not policy.should_retry(exc, attempt):
                    raise
                wait = policy.wait_time(attempt)
                logger.warning(
                    "%s %s failed (%s), retrying in %.1fs (attempt %d/%d)",
                    request.method, request.path, exc, wait, attempt + 1, policy.max_retries + 1,
                )
                time.sleep(wait)

    @staticmethod
    def _raise_for_status(response: requests.Response, path: str | None = None) -> None:
        #only 2xx is success; a 3xx requests did not follow is surfaced as an error
        if 200 <= response.status_code < 300:
            return
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        if isinstance(detail, dict) and detail.get("message"):
            message = detail["message"]
        else:
            message = response.text or response.reason or "HTTP error"
        raise error_for_status(response.status_code, message, path=path or response.url, response_body=detail)

    @staticmethod
    def _parse(response: requests.Response, method: str) -> Any:
        """Return the parsed body; DELETE and empty (204) responses resolve to True."""
        if method == "DELETE" or not response.content:
            return True
        try:
            return response.json()
        except ValueError:
            return response.text

    def _perform(self, request: RequestDescriptor) -> Any:
        response = self._send(request)
        return self._parse(response, request.method)

    def _fetch_page(self, url: str, params: dict[str, Any] | None) -> Page:
        request = RequestDescriptor("GET", url, params=params)
        response = self._send(request)
        body = self._parse(response, request.method)
        #requests parses the Link header into response.links
        next_url = (response.links or {}).get("next", {}).get("url")
        items = extract_items(body, path=url)
        logger.debug("Fetched %d item(s) from %s, next=%s", len(items), url, next_url)
        return Page(items, next_url)

    def _submit(self, fn: Any, *args: Any, cb: Callback | None = None) -> Future:
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError:
            #pool already shut down
            return rejected(TrackerError("client is closed"), cb)
        return attach_callback(future, cb)

    # ------------------------------------------------------------------
    # Entry points used by the request builders
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, data: Any = None, cb: Callback | None = None) -> Future:
        """Issue one request; the future resolves to the parsed response body."""
        try:
            request = self._describe(method, path, data)
        except (TypeError, ValueError) as exc:
            return rejected(exc, cb)
        return self._submit(self._perform, request, cb=cb)

    def _iter_pages(self, path: str, options: Mapping[str, Any] | None = None) -> PageIterator:
        """Lazy sequence over every item of a paginated listing."""
        return PageIterator(self._fetch_page, path, _query(options))

    def _request_all_pages(self, path: str, options: Mapping[str, Any] | None = None, cb: Callback | None = None) -> Future:
        """Fetch every page of a listing; the future resolves to one concatenated list."""
        try:
            pages = self._iter_pages(path, options)
        except (TypeError, ValueError) as exc:
            return rejected(exc, cb)
        return self._submit(pages.to_list, cb=cb)
