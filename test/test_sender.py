from __future__ import annotations

import ssl

import pytest

from ringbridge.connectors import (
    HTTPProxyConnector,
    SOCKSProxyConnector,
    TimeoutConnector,
)
from ringbridge.exceptions import IgnoredOptionWarning
from ringbridge.options import RequestOptions
from ringbridge.sender import Sender, create_sender

from . import ScriptedBackend, StaticResolver


class TestCreateSender:
    def test_no_options(self, backend: ScriptedBackend, resolver: StaticResolver) -> None:
        sender = create_sender(RequestOptions(), resolver, backend)
        assert isinstance(sender, Sender)
        assert sender.connector is backend

    def test_http_proxy(self, backend: ScriptedBackend, resolver: StaticResolver) -> None:
        sender = create_sender(
            RequestOptions(proxy="http://host:1234"), resolver, backend
        )
        connector = sender.connector
        assert isinstance(connector, HTTPProxyConnector)
        assert connector.connector is backend
        assert connector.proxy.host == "host"
        assert connector.proxy.port == 1234

    @pytest.mark.parametrize(
        "proxy_url, version, remote_dns",
        [
            ("socks5://host:1080", 5, True),
            ("socks://host:1080", None, True),
            ("socks4://host:1080", 4, False),
            ("socks4a://host:1080", 4, True),
        ],
    )
    def test_socks_proxy(
        self,
        backend: ScriptedBackend,
        resolver: StaticResolver,
        proxy_url: str,
        version: int | None,
        remote_dns: bool,
    ) -> None:
        sender = create_sender(RequestOptions(proxy=proxy_url), resolver, backend)
        connector = sender.connector
        assert isinstance(connector, SOCKSProxyConnector)
        assert connector.connector is backend
        assert connector.resolver is resolver
        assert connector.version == version
        assert connector.remote_dns is remote_dns

    def test_connect_timeout_only(
        self, backend: ScriptedBackend, resolver: StaticResolver
    ) -> None:
        sender = create_sender(RequestOptions(connect_timeout=5), resolver, backend)
        connector = sender.connector
        assert type(connector) is TimeoutConnector
        assert connector.connector is backend
        assert connector.timeout == 5

    def test_timeout_wraps_proxy(
        self, backend: ScriptedBackend, resolver: StaticResolver
    ) -> None:
        sender = create_sender(
            RequestOptions(proxy="socks5://host", connect_timeout=5), resolver, backend
        )
        connector = sender.connector
        assert isinstance(connector, TimeoutConnector)
        assert isinstance(connector.connector, SOCKSProxyConnector)
        assert connector.connector.connector is backend

    def test_unsupported_proxy_scheme_is_ignored(
        self, backend: ScriptedBackend, resolver: StaticResolver
    ) -> None:
        plain = create_sender(RequestOptions(), resolver, backend)
        with pytest.warns(IgnoredOptionWarning, match="ftp"):
            ignored = create_sender(
                RequestOptions(proxy="ftp://host:21"), resolver, backend
            )
        assert ignored.connector is plain.connector is backend

    def test_unsupported_proxy_scheme_keeps_timeout(
        self, backend: ScriptedBackend, resolver: StaticResolver
    ) -> None:
        with pytest.warns(IgnoredOptionWarning):
            sender = create_sender(
                RequestOptions(proxy="ftp://host:21", connect_timeout=1),
                resolver,
                backend,
            )
        assert isinstance(sender.connector, TimeoutConnector)
        assert sender.connector.connector is backend

    def test_proxy_scheme_is_case_insensitive(
        self, backend: ScriptedBackend, resolver: StaticResolver
    ) -> None:
        sender = create_sender(RequestOptions(proxy="SOCKS5://host"), resolver, backend)
        assert isinstance(sender.connector, SOCKSProxyConnector)
        assert sender.connector.version == 5

    def test_verify_leaves_chain_alone(
        self, backend: ScriptedBackend, resolver: StaticResolver
    ) -> None:
        sender = create_sender(RequestOptions(verify=False), resolver, backend)
        assert sender.connector is backend
        assert "connector=" in repr(sender)

    def test_from_connector(self, backend: ScriptedBackend) -> None:
        sender = Sender.from_connector(backend, ssl_context=ssl.create_default_context())
        assert sender.connector is backend

