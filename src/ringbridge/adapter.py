from __future__ import annotations

import typing

import httpx
import trio

from .client import HttpClient
from .deferred import Deferred
from .factory import RequestFactory
from .options import RequestOptions
from .util.resolver import Resolver, TrioResolver


class HttpClientAdapter:
    """
    A request handler: call it with a request and an options mapping and it
    returns a :class:`~ringbridge.deferred.Deferred` response.

    Transfers run as tasks in ``nursery``, so they end with it at the latest.

    Example::

        async with trio.open_nursery() as nursery:
            handler = HttpClientAdapter(nursery)
            deferred = handler(
                httpx.Request("GET", "http://example.com/"),
                {"allow_redirects": {"max": 3}, "connect_timeout": 5},
            )
            response = await deferred
    """

    def __init__(
        self,
        nursery: trio.Nursery,
        client: HttpClient | None = None,
        resolver: Resolver | None = None,
        factory: RequestFactory | None = None,
    ) -> None:
        self.nursery = nursery
        self.client = client if client is not None else HttpClient()
        self.resolver = resolver if resolver is not None else TrioResolver()
        self.factory = factory if factory is not None else RequestFactory()

    def __call__(
        self,
        request: httpx.Request,
        options: RequestOptions | typing.Mapping[str, typing.Any] | None = None,
    ) -> Deferred[httpx.Response]:
        return self.factory.create(
            request, options, self.resolver, self.client, self.nursery
        )
