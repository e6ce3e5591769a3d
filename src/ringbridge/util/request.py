from __future__ import annotations

from base64 import b64encode

from .url import Url


def make_tunnel_headers(
    host: str,
    port: int,
    proxy_basic_auth: str | None = None,
) -> list[tuple[bytes, bytes]]:
    """
    Build the header list sent along with an HTTP ``CONNECT`` request.

    :param host:
        Destination host the tunnel should reach.

    :param port:
        Destination port the tunnel should reach.

    :param proxy_basic_auth:
        Colon-separated username:password string for 'proxy-authorization: basic ...'
        auth header.

    Example:

    .. code-block:: python

        print(make_tunnel_headers("example.com", 443, "user:pass"))
        # [(b'host', b'example.com:443'), (b'proxy-authorization', b'Basic dXNlcjpwYXNz')]
    """
    headers = [(b"host", tunnel_target(host, port))]

    if proxy_basic_auth:
        headers.append(
            (
                b"proxy-authorization",
                b"Basic " + b64encode(proxy_basic_auth.encode("latin-1")),
            )
        )

    return headers


def tunnel_target(host: str, port: int) -> bytes:
    """Request target of a ``CONNECT`` request, in authority form."""
    if ":" in host:
        return f"[{host}]:{port}".encode("ascii")
    return f"{host}:{port}".encode("ascii")


def proxy_basic_auth(proxy: Url) -> str | None:
    """Credentials of ``proxy`` in ``user:password`` form, if it carries any."""
    if proxy.auth is None:
        return None
    if ":" not in proxy.auth:
        return proxy.auth + ":"
    return proxy.auth
