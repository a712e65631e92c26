"""HTTP transport for the Data API.

A transport performs one POST and returns the raw response text.  Network
errors, timeouts and non-success statuses are raised as
:class:`~core_dataapi.exceptions.DataApiTransportError`.

A shared transport is created lazily the first time a client issues a request
without one of its own.  The async transport is shared per event loop, since
pooled connections belong to the loop that opened them.  Handles never own a
connection.
"""

import asyncio
import time
import weakref

import httpx

import core_logging as log

from .constants import CONNECT_TIMEOUT_SECONDS, SLOW_WARN_MS, TIMEOUT_SECONDS
from .exceptions import DataApiTransportError

_TRANSPORT: "DataApiTransport | None" = None
_ASYNC_TRANSPORTS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, AsyncDataApiTransport]" = weakref.WeakKeyDictionary()


def _default_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        connect=CONNECT_TIMEOUT_SECONDS,
        read=TIMEOUT_SECONDS,
        write=TIMEOUT_SECONDS,
        pool=TIMEOUT_SECONDS,
    )


def _check_status(resp: httpx.Response, url: str) -> str:
    if not resp.is_success:
        raise DataApiTransportError(f"Data API returned HTTP {resp.status_code}: {url}", url=url, status_code=resp.status_code)
    return resp.text


def _log_elapsed(url: str, start: float) -> None:
    elapsed_ms = int((time.time() - start) * 1000)
    if elapsed_ms >= SLOW_WARN_MS:
        log.warn("dataapi.transport.slow", details={"url": url, "elapsed_ms": elapsed_ms})


class DataApiTransport:
    """Blocking transport backed by :class:`httpx.Client`."""

    def __init__(self, client: httpx.Client | None = None):
        self.client = client or httpx.Client(timeout=_default_timeout())

    def post(self, url: str, body: str, headers: dict[str, str]) -> str:
        start = time.time()
        try:
            resp = self.client.post(url, content=body.encode("utf-8"), headers=headers)
        except httpx.TimeoutException as e:
            raise DataApiTransportError(f"Data API request timeout: {url}", url=url) from e
        except httpx.HTTPError as e:
            raise DataApiTransportError(f"Data API network error: {url}", url=url) from e
        finally:
            _log_elapsed(url, start)
        return _check_status(resp, url)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "DataApiTransport":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class AsyncDataApiTransport:
    """Awaitable transport backed by :class:`httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self.client = client or httpx.AsyncClient(timeout=_default_timeout())

    async def post(self, url: str, body: str, headers: dict[str, str]) -> str:
        start = time.time()
        try:
            resp = await self.client.post(url, content=body.encode("utf-8"), headers=headers)
        except httpx.TimeoutException as e:
            raise DataApiTransportError(f"Data API request timeout: {url}", url=url) from e
        except httpx.HTTPError as e:
            raise DataApiTransportError(f"Data API network error: {url}", url=url) from e
        finally:
            _log_elapsed(url, start)
        return _check_status(resp, url)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncDataApiTransport":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


def get_transport() -> DataApiTransport:
    global _TRANSPORT
    if _TRANSPORT is None:
        _TRANSPORT = DataApiTransport()
    return _TRANSPORT


def get_async_transport() -> AsyncDataApiTransport:
    """Return the shared async transport of the running event loop.

    Raises:
        RuntimeError: Called outside a running event loop.
    """
    loop = asyncio.get_running_loop()
    transport = _ASYNC_TRANSPORTS.get(loop)
    if transport is None:
        transport = AsyncDataApiTransport()
        _ASYNC_TRANSPORTS[loop] = transport
    return transport
