"""Trello REST client -- one blocking call per request, JSON in, data out.

Usage::

    with TrelloClient(key="...", token="...", name_keys=True) as t:
        lists = t.get(f"boards/{board_id}/lists")
        card = t.post("cards", {"name": "Ship it", "idList": list_id})

Any API path documented at https://developer.atlassian.com/cloud/trello/rest/
can be called; the client only builds the URL, injects credentials, decodes
the JSON and optionally re-indexes named arrays.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from enum import Enum
from typing import Any

import httpx

from trello_api.config import TrelloSettings, load_settings
from trello_api.errors import InvalidRequest, MalformedResponse, RemoteCallFailed
from trello_api.log import enable_debug_logging, redact_url
from trello_api.normalize import normalize_response

logger = logging.getLogger(__name__)

USER_AGENT = "trello-api-python/0.1.0"


class Verb(str, Enum):
    """HTTP verbs the remote API accepts."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: Any) -> "Verb":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value:
            raise InvalidRequest("verb", value, reason="need a verb like GET PUT POST DELETE")
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise InvalidRequest(
                "verb", value, reason="need a verb like GET PUT POST DELETE"
            ) from None


class TrelloClient:
    """Thin synchronous wrapper around the Trello REST API.

    Every argument is optional; unset ones are read from ``TRELLO_*``
    environment variables (see ``TrelloSettings``), then from defaults.
    A pre-built *settings* object bypasses resolution entirely, and
    *transport* replaces the network layer of the HTTP client.

    The underlying ``httpx.Client`` is created here and owned by this
    object.  Call ``close()`` or use the client as a context manager to
    release it.  Not safe for concurrent use from several threads.
    """

    def __init__(
        self,
        key: str | None = None,
        token: str | None = None,
        *,
        base: str | None = None,
        api_version: str | None = None,
        base_href: str | None = None,
        sleep_time: float | None = None,
        name_keys: bool | None = None,
        index_key: str | None = None,
        timeout: float | None = None,
        debug: bool | None = None,
        settings: TrelloSettings | None = None,
        env_file: str | None = ".env",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if settings is None:
            settings = load_settings(
                env_file=env_file,
                key=key,
                token=token,
                base=base,
                api_version=api_version,
                base_href=base_href,
                sleep_time=sleep_time,
                name_keys=name_keys,
                index_key=index_key,
                timeout=timeout,
                debug=debug,
            )
        self.settings = settings
        if settings.debug:
            enable_debug_logging()
        self._http = httpx.Client(
            timeout=settings.timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            transport=transport,
        )

    # ── Lifecycle ──────────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the owned HTTP client."""
        self._http.close()

    def __enter__(self) -> "TrelloClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Verb entry points ──────────────────────────────────────────────────

    def get(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        """Call any GET method, e.g. ``boards/{id}/lists`` or ``lists/{id}/cards``."""
        return self.request(Verb.GET, path, query)

    def post(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        """Call any POST method, e.g. ``cards`` or ``lists/{id}/archiveAllCards``."""
        return self.request(Verb.POST, path, query)

    def put(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        """Call any PUT method, e.g. ``cards/{id}``."""
        return self.request(Verb.PUT, path, query)

    def delete(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        """Call any DELETE method, e.g. ``cards/{id}``."""
        return self.request(Verb.DELETE, path, query)

    # ── Executor ───────────────────────────────────────────────────────────

    def build_url(self, path: str, query: Mapping[str, Any] | None = None) -> httpx.URL:
        """Return ``{api_root}/{path}`` with the query and credentials attached.

        Caller-supplied ``key``/``token`` values are kept.  *query* itself is
        not modified.
        """
        if not isinstance(path, str) or not path.strip("/ "):
            raise InvalidRequest("path", path, reason="need a path")
        if query is not None and not isinstance(query, Mapping):
            raise InvalidRequest("query", query, reason="query must be a mapping")

        params = dict(query or {})
        for name, value in (("key", self.settings.key), ("token", self.settings.token)):
            if params.get(name) is None:
                params[name] = value

        url = httpx.URL(f"{self.settings.api_root}/{path.strip().lstrip('/')}")
        url = url.copy_merge_params(params)
        self._debug("url is: %s", redact_url(url))
        return url

    def request(self, verb: Verb | str, path: str, query: Mapping[str, Any] | None = None) -> Any:
        """Make one call and return the normalized result.

        Raises
        ------
        InvalidRequest
            Bad verb, path or query.
        RemoteCallFailed
            Transport error or non-2xx response.
        MalformedResponse
            Body is not JSON.
        """
        verb = Verb.parse(verb)
        url = self.build_url(path, query)

        try:
            response = self._http.request(verb.value, url)
        except httpx.HTTPError as exc:
            self._pause()
            raise RemoteCallFailed(str(url), None, f"{type(exc).__name__}: {exc}") from exc
        self._pause()

        self._debug("%s %s -> %d", verb.value, redact_url(url), response.status_code)
        if not response.is_success:
            reason = response.reason_phrase or response.text[:200]
            raise RemoteCallFailed(str(url), response.status_code, reason)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponse(str(url), str(exc)) from exc
        if data is None:
            raise MalformedResponse(str(url), "no JSON returned")

        return normalize_response(
            data,
            name_keys=self.settings.name_keys,
            index_key=self.settings.index_key,
            debug=self.settings.debug,
        )

    # ── Helpers ────────────────────────────────────────────────────────────

    def _pause(self) -> None:
        # Be kind to the rate limiter.
        time.sleep(self.settings.sleep_time)

    def _debug(self, message: str, *args: object) -> None:
        if self.settings.debug:
            logger.debug(message, *args)
