from __future__ import annotations

import typing

import httpcore
import httpx

from .options import RequestOptions
from .sender import Sender


class HttpClient:
    """
    The HTTP client requests are handed to.

    It keeps the base connector every sender is built on and hands out an
    ``httpx.AsyncClient`` per request, bound to that request's sender and
    redirect policy.

    :param connector:
        Base connector. Defaults to :class:`httpcore.TrioBackend`.

    :param headers:
        Headers added to every request that does not set them itself.

    Example::

        client = HttpClient()
        sender = create_sender(options, resolver, client.connector)
        async with client.browser(sender, options) as browser:
            response = await browser.send(request)
    """

    def __init__(
        self,
        connector: httpcore.AsyncNetworkBackend | None = None,
        headers: typing.Mapping[str, str] | None = None,
    ) -> None:
        if connector is None:
            connector = httpcore.TrioBackend()
        self._connector = connector
        self.headers = httpx.Headers(headers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connector={self._connector!r})"

    @property
    def connector(self) -> httpcore.AsyncNetworkBackend:
        """The base connector senders are built from."""
        return self._connector

    def browser(self, sender: Sender, options: RequestOptions) -> httpx.AsyncClient:
        """A fresh client that sends through ``sender`` with ``options`` applied."""
        return httpx.AsyncClient(
            transport=sender,
            follow_redirects=options.follow_redirects,
            max_redirects=options.max_redirects,
            # Deadlines are enforced by the connector chain and the request
            # factory, not per read.
            timeout=None,
            trust_env=False,
        )

    def prepare(self, request: httpx.Request) -> httpx.Request:
        """
        Return ``request`` with the default headers it does not carry itself.

        The caller's request is left untouched; a copy is made when headers
        have to be added.
        """
        missing = [
            (name, value)
            for name, value in self.headers.multi_items()
            if name not in request.headers
        ]
        if not missing:
            return request

        return httpx.Request(
            request.method,
            request.url,
            headers=request.headers.multi_items() + missing,
            stream=request.stream,
            extensions=request.extensions,
        )
