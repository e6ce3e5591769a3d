"""
The request factory turns a request plus Guzzle style options into a
:class:`~ringbridge.deferred.Deferred` response, running the transfer as a
task in the caller's nursery.
"""

from __future__ import annotations

import logging
import os
import typing

import httpcore
import httpx
import trio

from .client import HttpClient
from .deferred import Deferred
from .exceptions import RequestCancelledError, RequestTimeoutError
from .options import RequestOptions
from .sender import Sender, create_sender
from .util.resolver import Resolver

log = logging.getLogger(__name__)

_TYPE_OPTIONS = typing.Union[RequestOptions, typing.Mapping[str, typing.Any], None]


class RequestFactory:
    def create(
        self,
        request: httpx.Request,
        options: _TYPE_OPTIONS,
        resolver: Resolver,
        http_client: HttpClient,
        nursery: trio.Nursery,
    ) -> Deferred[httpx.Response]:
        """
        Start sending ``request`` and return a deferred response.

        The transfer runs as a task in ``nursery``, so the deferred is still
        pending when this method returns. With a ``delay`` option the task
        first sleeps that many seconds.

        The deferred resolves with the response once its body has been read,
        or, with a ``sink`` option, once the body has been written to the
        sink. It is rejected with whatever the transfer raised, or with
        :class:`~ringbridge.exceptions.RequestCancelledError` when ``nursery``
        is cancelled first.
        """
        request_options = RequestOptions.coerce(options)
        deferred: Deferred[httpx.Response] = Deferred()
        nursery.start_soon(
            self._settle, deferred, request, request_options, resolver, http_client
        )
        return deferred

    async def _settle(
        self,
        deferred: Deferred[httpx.Response],
        request: httpx.Request,
        options: RequestOptions,
        resolver: Resolver,
        http_client: HttpClient,
    ) -> None:
        try:
            if options.delay is not None:
                # A negative delay fires right away.
                await trio.sleep(max(options.delay, 0))
            else:
                await trio.lowlevel.checkpoint()
            response = await self.send(request, options, resolver, http_client)
        except Exception as e:
            deferred.reject(e)
        except BaseException:
            # This task's Cancelled never reaches other tasks.
            deferred.reject(RequestCancelledError(str(request.url)))
            raise
        else:
            deferred.resolve(response)

    async def send(
        self,
        request: httpx.Request,
        options: RequestOptions,
        resolver: Resolver,
        http_client: HttpClient,
    ) -> httpx.Response:
        """Send ``request`` right away, for callers that run their own tasks."""
        if options.timeout is None:
            return await self._send(request, options, resolver, http_client)

        with trio.move_on_after(options.timeout) as cancel_scope:
            return await self._send(request, options, resolver, http_client)
        assert cancel_scope.cancelled_caught
        raise RequestTimeoutError(str(request.url), options.timeout)

    async def _send(
        self,
        request: httpx.Request,
        options: RequestOptions,
        resolver: Resolver,
        http_client: HttpClient,
    ) -> httpx.Response:
        sender = self.create_sender(options, resolver, http_client.connector)
        request = http_client.prepare(request)

        async with http_client.browser(sender, options) as browser:
            if options.sink is None:
                return await browser.send(request)

            response = await browser.send(request, stream=True)
            try:
                await self.sink(response, options.sink)
            finally:
                await response.aclose()
            return response

    async def sink(self, response: httpx.Response, target: typing.Any) -> None:
        """
        Write the body of ``response`` into ``target``.

        A path is opened for writing and always closed again, also when the
        transfer fails part way. Anything else is treated as an open async
        file; it is written to and left open.
        """
        if isinstance(target, (str, os.PathLike)):
            async with await trio.open_file(target, "wb") as f:
                await self._pipe(response, f)
        else:
            await self._pipe(response, target)

        log.debug("Wrote body of %s %s to %r", response.status_code, response.url, target)

    async def _pipe(self, response: httpx.Response, target: typing.Any) -> None:
        async for chunk in response.aiter_bytes():
            await target.write(chunk)

    def create_sender(
        self,
        options: RequestOptions,
        resolver: Resolver,
        connector: httpcore.AsyncNetworkBackend,
    ) -> Sender:
        return create_sender(options, resolver, connector)
