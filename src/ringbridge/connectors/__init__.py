"""
Connector decorators.

Each of these wraps an :class:`httpcore.AsyncNetworkBackend` and is one
itself, so they stack: ``TimeoutConnector(HTTPProxyConnector(url, base), 5)``
bounds the whole proxied connect by five seconds.
"""

from __future__ import annotations

from ._base import ConnectorDecorator
from .http_proxy import HTTPProxyConnector
from .socks import DEFAULT_SOCKS_VERSION, SOCKSProxyConnector
from .timeout import TimeoutConnector

__all__ = [
    "DEFAULT_SOCKS_VERSION",
    "ConnectorDecorator",
    "HTTPProxyConnector",
    "SOCKSProxyConnector",
    "TimeoutConnector",
]
