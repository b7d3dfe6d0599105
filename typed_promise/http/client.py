"""Thin HTTP transport wrapper and shared client pool.

Purpose:
    Issue requests against a single base URL and hand back the raw
    ``httpx.Response``. Turning a response into a promise is the job of
    :mod:`typed_promise.http.process`; this module knows nothing about
    promises.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Pooling:
    ``httpx.AsyncClient`` instances are cached by ``(loop, base_url, purpose)``
    and created with the timeout from :func:`get_client_settings`. An
    ``AsyncClient``'s connections belong to the event loop that opened them,
    so each running loop gets its own clients and entries whose loop has
    closed are dropped. Call :func:`aclose_all_clients` on shutdown (or in
    test teardown) from the loop that used the clients.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..base.logging import LogContext, get_logger, log_event
from ..config import ClientSettings, get_client_settings

_PoolKey = Tuple[int, str, str]
_PoolEntry = Tuple[Optional[asyncio.AbstractEventLoop], httpx.AsyncClient]

_CLIENTS: Dict[_PoolKey, _PoolEntry] = {}
_LOCK = threading.RLock()
_LOGGER = get_logger("typed_promise.http")


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _prune_closed_loops() -> None:
    """Drop entries bound to a closed loop; their connections died with it."""
    for key, (loop, _client) in list(_CLIENTS.items()):
        if loop is not None and loop.is_closed():
            del _CLIENTS[key]
            log_event(_LOGGER, "http.pool.evict", LogContext(url=key[1]), level=logging.DEBUG, purpose=key[2])


def get_httpx_client(base_url: str, purpose: str = "default") -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for ``base_url`` and ``purpose``.

    Clients are scoped to the running event loop (or to "no loop" when called
    from synchronous code). The first request for a key creates the client;
    later requests on the same loop reuse it. Creation is guarded by a
    re-entrant lock.
    """
    loop = _running_loop()
    key = (id(loop), base_url, purpose)
    entry = _CLIENTS.get(key)
    if entry is not None and entry[0] is loop and not entry[1].is_closed:
        return entry[1]

    with _LOCK:
        _prune_closed_loops()
        entry = _CLIENTS.get(key)
        # id() of a collected loop can be reused, so compare identity too
        if entry is not None and entry[0] is loop and not entry[1].is_closed:
            return entry[1]
        timeout = get_client_settings().timeout_seconds
        client = httpx.AsyncClient(timeout=timeout)
        _CLIENTS[key] = (loop, client)
        return client


async def aclose_all_clients() -> None:
    """Close and clear pooled clients usable from the current loop.

    Clients created on this loop or outside any loop are closed. Clients of
    closed loops are dropped without closing. Clients of other live loops are
    left for those loops to close.
    """
    current = asyncio.get_running_loop()
    with _LOCK:
        _prune_closed_loops()
        owned = [
            (key, client)
            for key, (loop, client) in _CLIENTS.items()
            if loop is None or loop is current
        ]
        for key, _client in owned:
            del _CLIENTS[key]
    for _key, client in owned:
        await client.aclose()


class HttpClient:
    """Simple client for requests against one base URL.

    Each verb is a coroutine resolving to the raw ``httpx.Response``, so the
    un-awaited call can be passed straight to ``process_promise``:

        >>> promise = process_promise(HttpClient("https://api.example.com").get("/items"))

    Extra keyword arguments (``headers``, ``timeout``, ...) are forwarded to
    ``httpx``. JSON bodies are sent with ``Content-Type: application/json``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[ClientSettings] = None,
        purpose: str = "default",
    ) -> None:
        self._settings = settings or get_client_settings({"base_url": base_url})
        self.base_url = self._settings.base_url if base_url is None else base_url
        self._client = client
        self._purpose = purpose

    @property
    def client(self) -> httpx.AsyncClient:
        """The injected client, else the pooled one for the running loop."""
        if self._client is not None:
            return self._client
        return get_httpx_client(self.base_url, self._purpose)

    def url_for(self, path: str) -> str:
        return self.base_url + path

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> httpx.Response:
        return await self._send("GET", path, params=params, **kwargs)

    async def post(self, path: str, body: Any, **kwargs: Any) -> httpx.Response:
        return await self._send("POST", path, json=body, **kwargs)

    async def put(
        self,
        path: str,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        return await self._send("PUT", path, json={} if body is None else body, params=query, **kwargs)

    async def delete(self, path: str, query: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> httpx.Response:
        return await self._send("DELETE", path, params=query, **kwargs)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        url = self.url_for(path)
        log_event(_LOGGER, "http.request", LogContext(method=method, url=url), level=logging.DEBUG)
        # empty mappings add no query string
        return await self.client.request(method, url, params=dict(params) if params else None, **kwargs)


__all__ = ["HttpClient", "get_httpx_client", "aclose_all_clients"]
