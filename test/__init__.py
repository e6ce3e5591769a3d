from __future__ import annotations

import typing

import httpcore
import trio
import trio.testing


def http_response(
    body: bytes = b"hello",
    status: bytes = b"200 OK",
    headers: typing.Sequence[bytes] = (),
) -> bytes:
    """A complete HTTP/1.1 response with a Content-Length framed body."""
    lines = [b"HTTP/1.1 " + status, b"Content-Length: %d" % len(body), *headers]
    return b"\r\n".join(lines) + b"\r\n\r\n" + body


def autojump_clock() -> trio.testing.MockClock:
    """A clock that skips ahead whenever every task is asleep."""
    return trio.testing.MockClock(autojump_threshold=0)


class ConnectCall(typing.NamedTuple):
    host: str
    port: int
    time: float


class ScriptedStream(httpcore.AsyncMockStream):
    """A mock stream that replays ``replies`` and records what is written."""

    def __init__(self, replies: list[bytes]) -> None:
        super().__init__(replies)
        self.written: list[bytes] = []
        self.closed = False

    async def write(self, buffer: bytes, timeout: float | None = None) -> None:
        self.written.append(buffer)

    async def aclose(self) -> None:
        self.closed = True
        await super().aclose()


class ScriptedBackend(httpcore.AsyncNetworkBackend):
    """
    A connector whose connections replay ``replies``, one read per item.

    Every ``connect_tcp`` call is recorded together with the trio clock time
    it was made at, and every stream handed out is kept.
    """

    def __init__(self, replies: typing.Sequence[bytes]) -> None:
        self.replies = list(replies)
        self.calls: list[ConnectCall] = []
        self.streams: list[ScriptedStream] = []

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: typing.Iterable[httpcore.SOCKET_OPTION] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        self.calls.append(ConnectCall(host, port, trio.current_time()))
        stream = ScriptedStream(list(self.replies))
        self.streams.append(stream)
        return stream

    async def sleep(self, seconds: float) -> None:
        await trio.sleep(seconds)


class HangingStream(httpcore.AsyncMockStream):
    """A stream that accepts writes but never answers."""

    def __init__(self) -> None:
        super().__init__([])
        self.closed = False

    async def read(self, max_bytes: int, timeout: float | None = None) -> bytes:
        await trio.sleep_forever()
        raise AssertionError("unreachable")

    async def aclose(self) -> None:
        self.closed = True
        await super().aclose()


class HangingBackend(ScriptedBackend):
    """
    A connector that takes ``connect_delay`` seconds to connect, forever by
    default, and whose streams never answer.
    """

    def __init__(self, connect_delay: float = float("inf")) -> None:
        super().__init__([])
        self.connect_delay = connect_delay
        self.hanging_streams: list[HangingStream] = []

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: typing.Iterable[httpcore.SOCKET_OPTION] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        self.calls.append(ConnectCall(host, port, trio.current_time()))
        await trio.sleep(self.connect_delay)
        stream = HangingStream()
        self.hanging_streams.append(stream)
        return stream


class StaticResolver:
    """Resolves names from a fixed table and remembers what it was asked."""

    def __init__(self, table: typing.Mapping[str, str] | None = None) -> None:
        self.table = dict(table or {})
        self.queries: list[str] = []

    async def resolve(self, host: str) -> str:
        self.queries.append(host)
        return self.table[host]
