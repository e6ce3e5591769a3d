from __future__ import annotations

import typing

import httpcore

#: Read size used while talking to a proxy.
READ_CHUNK_SIZE = 65536


class ConnectorDecorator(httpcore.AsyncNetworkBackend):
    """
    A connector that wraps another connector and adds behaviour to
    ``connect_tcp``. Everything else goes straight to the wrapped connector.
    """

    def __init__(self, connector: httpcore.AsyncNetworkBackend) -> None:
        self._connector = connector

    @property
    def connector(self) -> httpcore.AsyncNetworkBackend:
        """The connector this one wraps."""
        return self._connector

    async def connect_unix_socket(
        self,
        path: str,
        timeout: float | None = None,
        socket_options: typing.Iterable[httpcore.SOCKET_OPTION] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        return await self._connector.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )

    async def sleep(self, seconds: float) -> None:
        await self._connector.sleep(seconds)


class BufferedStream(httpcore.AsyncNetworkStream):
    """
    A stream that replays bytes read ahead during a proxy handshake before
    reading from the underlying stream again.
    """

    def __init__(self, stream: httpcore.AsyncNetworkStream, buffered: bytes) -> None:
        self._stream = stream
        self._buffered = buffered

    async def read(self, max_bytes: int, timeout: float | None = None) -> bytes:
        if self._buffered:
            data = self._buffered[:max_bytes]
            self._buffered = self._buffered[max_bytes:]
            return data
        return await self._stream.read(max_bytes, timeout=timeout)

    async def write(self, buffer: bytes, timeout: float | None = None) -> None:
        await self._stream.write(buffer, timeout=timeout)

    async def aclose(self) -> None:
        await self._stream.aclose()

    async def start_tls(
        self,
        ssl_context: typing.Any,
        server_hostname: str | None = None,
        timeout: float | None = None,
    ) -> httpcore.AsyncNetworkStream:
        # Read-ahead bytes are plain text and are not carried into TLS.
        return await self._stream.start_tls(
            ssl_context, server_hostname=server_hostname, timeout=timeout
        )

    def get_extra_info(self, info: str) -> typing.Any:
        if info == "is_readable" and self._buffered:
            return True
        return self._stream.get_extra_info(info)
