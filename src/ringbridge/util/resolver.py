from __future__ import annotations

import ipaddress
import logging
import socket
import typing

import trio

from ..exceptions import NameResolutionError

log = logging.getLogger(__name__)


class Resolver(typing.Protocol):
    """Type stub for the name resolver handed to proxy connectors.

    SOCKS4 can only carry an IPv4 destination, so the SOCKS connector asks
    the resolver to turn host names into addresses before the handshake.
    Implementations must return an IPv4 address as a string.
    """

    async def resolve(self, host: str) -> str: ...


def is_ipv4_address(host: str) -> bool:
    try:
        ipaddress.IPv4Address(host)
    except ValueError:
        return False
    return True


class TrioResolver:
    """Resolve names with trio's ``getaddrinfo``, which honours any custom
    hostname resolver installed with ``trio.socket.set_custom_hostname_resolver``.
    """

    async def resolve(self, host: str) -> str:
        if is_ipv4_address(host):
            return host

        try:
            results = await trio.socket.getaddrinfo(
                host, None, family=socket.AF_INET, type=socket.SOCK_STREAM
            )
        except socket.gaierror as e:
            raise NameResolutionError(host, e) from e

        if not results:
            raise NameResolutionError(host)

        address = results[0][4][0]
        log.debug("Resolved %s to %s", host, address)
        return typing.cast(str, address)
