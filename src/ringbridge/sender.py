"""
Senders.

A :class:`Sender` is the ``httpx`` transport a single request goes out
through. It owns a connection pool whose network backend is the connector
chain built by :func:`create_sender` for that request.
"""

from __future__ import annotations

import logging
import ssl
import typing

import httpcore
import httpx

from .connectors import HTTPProxyConnector, SOCKSProxyConnector, TimeoutConnector
from .options import RequestOptions, warn_ignored_option
from .util.resolver import Resolver
from .util.ssl_ import create_ssl_context
from .util.url import parse_url

log = logging.getLogger(__name__)


class ResponseStream(httpx.AsyncByteStream):
    """Hands the pool's response body to ``httpx`` chunk by chunk."""

    def __init__(self, stream: typing.AsyncIterable[bytes]) -> None:
        self._stream = stream

    async def __aiter__(self) -> typing.AsyncIterator[bytes]:
        async for part in self._stream:
            yield part

    async def aclose(self) -> None:
        if hasattr(self._stream, "aclose"):
            await self._stream.aclose()


class Sender(httpx.AsyncBaseTransport):
    """
    Transport that dispatches requests over ``connector``.

    Errors raised by the pool or by the connector chain are not translated.
    """

    def __init__(
        self,
        connector: httpcore.AsyncNetworkBackend,
        ssl_context: ssl.SSLContext | None = None,
        http2: bool = False,
    ) -> None:
        self._connector = connector
        self._pool = httpcore.AsyncConnectionPool(
            ssl_context=ssl_context,
            http1=True,
            http2=http2,
            network_backend=connector,
        )

    @classmethod
    def from_connector(
        cls, connector: httpcore.AsyncNetworkBackend, **kwargs: typing.Any
    ) -> "Sender":
        return cls(connector, **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connector={self._connector!r})"

    @property
    def connector(self) -> httpcore.AsyncNetworkBackend:
        """The finished connector chain."""
        return self._connector

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        core_request = httpcore.Request(
            method=request.method,
            url=httpcore.URL(
                scheme=request.url.raw_scheme,
                host=request.url.raw_host,
                port=request.url.port,
                target=request.url.raw_path,
            ),
            headers=request.headers.raw,
            content=request.stream,
            extensions=request.extensions,
        )
        core_response = await self._pool.handle_async_request(core_request)
        assert isinstance(core_response.stream, typing.AsyncIterable)

        return httpx.Response(
            status_code=core_response.status,
            headers=core_response.headers,
            stream=ResponseStream(core_response.stream),
            extensions=core_response.extensions,
        )

    async def aclose(self) -> None:
        await self._pool.aclose()


def _create_proxy_connector(
    proxy_url: str,
    connector: httpcore.AsyncNetworkBackend,
    resolver: Resolver,
) -> httpcore.AsyncNetworkBackend:
    scheme = parse_url(proxy_url).scheme

    if scheme == "http":
        return HTTPProxyConnector(proxy_url, connector)
    if scheme == "socks":
        return SOCKSProxyConnector(proxy_url, connector, resolver)
    if scheme in ("socks4", "socks4a"):
        return SOCKSProxyConnector(proxy_url, connector, resolver, version=4)
    if scheme == "socks5":
        return SOCKSProxyConnector(proxy_url, connector, resolver, version=5)

    warn_ignored_option("Ignoring proxy %s with unsupported scheme %r", proxy_url, scheme)
    return connector


def create_sender(
    options: RequestOptions,
    resolver: Resolver,
    connector: httpcore.AsyncNetworkBackend,
) -> Sender:
    """
    Build the sender for one request.

    Starting from ``connector`` a proxy connector is applied when
    ``options.proxy`` is set, then a :class:`TimeoutConnector` when
    ``options.connect_timeout`` is set, so the timeout always wraps the proxy:

    ==================== =============================== ================
    proxy URL scheme     connector                       SOCKS version
    ==================== =============================== ================
    ``http``             :class:`HTTPProxyConnector`
    ``socks``            :class:`SOCKSProxyConnector`    default
    ``socks4(a)``        :class:`SOCKSProxyConnector`    4
    ``socks5``           :class:`SOCKSProxyConnector`    5
    anything else        none, with an IgnoredOptionWarning
    ==================== =============================== ================
    """
    if options.proxy is not None:
        connector = _create_proxy_connector(options.proxy, connector, resolver)

    if options.connect_timeout is not None:
        connector = TimeoutConnector(connector, options.connect_timeout)

    log.debug("Created sender with connector %r", connector)

    ssl_context = None
    if options.verify is not True:
        ssl_context = create_ssl_context(options.verify)

    return Sender.from_connector(connector, ssl_context=ssl_context)
