from __future__ import annotations

from .request import make_tunnel_headers, proxy_basic_auth, tunnel_target
from .resolver import Resolver, TrioResolver, is_ipv4_address
from .ssl_ import create_ssl_context
from .url import Url, parse_url

__all__ = (
    "Resolver",
    "TrioResolver",
    "Url",
    "create_ssl_context",
    "is_ipv4_address",
    "make_tunnel_headers",
    "parse_url",
    "proxy_basic_auth",
    "tunnel_target",
)
