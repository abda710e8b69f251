"""Shared async HTTP client.

One ``httpx.AsyncClient`` is reused across requests so the connection pool
survives between items. Pooled connections belong to the event loop that
opened them, so the client is rebuilt when a host drives the connector from
a new loop (for example one ``asyncio.run`` per batch). Timeouts are passed
per request.
"""

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

_client: Optional[httpx.AsyncClient] = None
_client_loop: Optional[asyncio.AbstractEventLoop] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the client for the running event loop, creating it on first use.

    Must be called from a coroutine.
    """
    global _client, _client_loop
    loop = asyncio.get_running_loop()
    if _client is not None and _client_loop is not loop:
        # The old loop is gone or busy elsewhere; its connections cannot be reused.
        logger.debug("Event loop changed, discarding shared HTTP client")
        _client = None
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            follow_redirects=True,
        )
        _client_loop = loop
        logger.debug("Created shared HTTP client")
    return _client


async def close_http_client() -> None:
    """Close the shared client if it belongs to the running loop."""
    global _client, _client_loop
    if _client is not None and not _client.is_closed:
        if _client_loop is asyncio.get_running_loop():
            await _client.aclose()
            logger.debug("Closed shared HTTP client")
    _client = None
    _client_loop = None
