from __future__ import annotations

import logging
import typing

import httpcore
import trio

from ..exceptions import ConnectTimeoutError
from ._base import ConnectorDecorator

log = logging.getLogger(__name__)


class TimeoutConnector(ConnectorDecorator):
    """
    A connector that gives up on ``connect_tcp`` after ``timeout`` seconds.

    The deadline covers everything the wrapped connector does before it
    hands back a stream, so wrapping a proxy connector bounds the proxy
    handshake as well as the TCP connect.
    """

    def __init__(self, connector: httpcore.AsyncNetworkBackend, timeout: float) -> None:
        if timeout < 0:
            raise ValueError(f"Connect timeout must be non-negative, got {timeout!r}")
        super().__init__(connector)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connector={self.connector!r}, timeout={self.timeout!r})"

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: typing.Iterable[httpcore.SOCKET_OPTION] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        with trio.move_on_after(self.timeout) as cancel_scope:
            return await self.connector.connect_tcp(
                host,
                port,
                timeout=timeout,
                local_address=local_address,
                socket_options=socket_options,
            )

        log.debug(
            "Connection to %s:%s timed out after %s seconds", host, port, self.timeout
        )
        assert cancel_scope.cancelled_caught
        raise ConnectTimeoutError(host, port, self.timeout)
