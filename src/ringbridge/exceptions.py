from __future__ import annotations

import socket
import typing

_TYPE_REDUCE_RESULT = typing.Tuple[
    typing.Callable[..., object], typing.Tuple[object, ...]
]

# Base Exceptions


class RingBridgeError(Exception):
    """Base exception used by this module."""

    pass


class RingBridgeWarning(Warning):
    """Base warning used by this module."""

    pass


class ProxyError(RingBridgeError):
    """Raised when the connection to a proxy fails."""

    # The original error is also available as __cause__.
    original_error: Exception | None

    def __init__(self, message: str, error: Exception | None = None) -> None:
        super().__init__(message, error)
        self.original_error = error

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.args[0], self.original_error)


class TimeoutError(RingBridgeError):
    """Raised when a deadline expires.

    Catching this error will catch both :exc:`ConnectTimeoutErrors
    <ConnectTimeoutError>` and :exc:`RequestTimeoutErrors <RequestTimeoutError>`.
    """

    pass


# Leaf Exceptions


class FailedTunnelError(ProxyError):
    """Raised when an HTTP proxy refuses to open a CONNECT tunnel."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.args[0], self.status_code)


class SOCKSHandshakeError(ProxyError):
    """Raised when a SOCKS proxy rejects or garbles the handshake."""

    pass


class ConnectTimeoutError(TimeoutError):
    """Raised when establishing a connection takes longer than ``connect_timeout``"""

    def __init__(self, host: str, port: int, timeout: float) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        super().__init__(
            f"Connection to {host}:{port} timed out. (connect timeout={timeout})"
        )

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.host, self.port, self.timeout)


class RequestTimeoutError(TimeoutError):
    """Raised when a whole transfer takes longer than ``timeout``"""

    def __init__(self, url: str, timeout: float) -> None:
        self.url = url
        self.timeout = timeout
        super().__init__(f"Request to {url} timed out. (timeout={timeout})")

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.url, self.timeout)


class RequestCancelledError(RingBridgeError):
    """Raised to waiters when the nursery running a request is cancelled."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Request to {url} was cancelled")

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.url,)


class NameResolutionError(RingBridgeError):
    """Raised when host name resolution fails."""

    def __init__(self, host: str, reason: socket.gaierror | None = None) -> None:
        self.host = host
        self.reason = reason
        super().__init__(f"Failed to resolve '{host}' ({reason})")

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.host, None)


class AlreadySettledError(RingBridgeError):
    """Raised when a :class:`~ringbridge.deferred.Deferred` is settled twice."""

    pass


class IgnoredOptionWarning(RingBridgeWarning):
    """Warned when a request option has a value that cannot be honoured.

    The option is dropped and the request goes ahead without it.
    """

    pass
