"""
Request options.

Callers hand over a Guzzle style mapping of options. :func:`convert_options`
folds the legacy aliases into their canonical keys, and
:meth:`RequestOptions.from_dict` turns the canonical mapping into a typed
value the rest of the package reads from.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import typing
import warnings
from collections.abc import Mapping

from .exceptions import IgnoredOptionWarning

log = logging.getLogger(__name__)

_TYPE_SINK = typing.Union[str, "os.PathLike[str]", typing.Any]
_TYPE_VERIFY = typing.Union[bool, str, "os.PathLike[str]"]

#: Redirect policy used when the caller says nothing about redirects.
DEFAULT_FOLLOW_REDIRECTS = True
DEFAULT_MAX_REDIRECTS = 10

# Keys that RequestOptions maps onto named fields.
_KNOWN_KEYS = frozenset(
    [
        "delay",
        "proxy",
        "connect_timeout",
        "sink",
        "followRedirects",
        "maxRedirects",
        "timeout",
        "verify",
    ]
)


def warn_ignored_option(message: str, *args: typing.Any) -> None:
    """Log and warn that an option value is being dropped."""
    log.warning(message, *args)
    warnings.warn(message % args, IgnoredOptionWarning, stacklevel=3)


def convert_options(options: Mapping[str, typing.Any]) -> dict[str, typing.Any]:
    """
    Return a copy of ``options`` with the legacy aliases resolved.

    - ``client`` (a mapping) is merged into the top level, its values win.
    - ``save_to`` is renamed to ``sink``.
    - ``allow_redirects`` becomes ``followRedirects`` and, when given as a
      mapping with a ``max`` entry, ``maxRedirects``.

    None of the legacy keys survive. A ``None`` value counts as not given.
    Values of the wrong shape are dropped with an :class:`IgnoredOptionWarning`.
    """
    options = dict(options)

    if "client" in options:
        client = options["client"]
        if isinstance(client, Mapping):
            options.update(client)
        elif client is not None:
            warn_ignored_option("Ignoring 'client' option of type %s", type(client).__name__)
        # Merge first, so a nested "client" entry is dropped too.
        options.pop("client", None)

    if "save_to" in options:
        save_to = options.pop("save_to")
        if save_to is not None:
            options["sink"] = save_to

    if "allow_redirects" in options:
        _convert_redirect_option(options, options.pop("allow_redirects"))

    return options


def _convert_redirect_option(options: dict[str, typing.Any], option: typing.Any) -> None:
    if option is None:
        return

    if isinstance(option, bool):
        options["followRedirects"] = option
        return

    if isinstance(option, Mapping):
        if option.get("max") is not None:
            options["maxRedirects"] = option["max"]
        options["followRedirects"] = True
        return

    warn_ignored_option("Ignoring 'allow_redirects' option of type %s", type(option).__name__)


@dataclasses.dataclass(frozen=True)
class RequestOptions:
    """
    Canonical, typed request options.

    :param delay:
        Seconds to wait before the request is sent.

    :param proxy:
        Proxy URL. Its scheme selects the proxy connector, see
        :func:`ringbridge.sender.create_sender`.

    :param connect_timeout:
        Seconds allowed for establishing the connection, proxy handshake
        included.

    :param sink:
        Path of a file the response body is written to, or an open async
        file to write it into.

    :param follow_redirects:
        Whether redirects are followed.

    :param max_redirects:
        Maximum number of redirects followed before giving up.

    :param timeout:
        Seconds allowed for the whole transfer.

    :param verify:
        TLS verification, see :func:`ringbridge.util.create_ssl_context`.

    :param extra:
        Every other option, passed along untouched.
    """

    delay: float | None = None
    proxy: str | None = None
    connect_timeout: float | None = None
    sink: _TYPE_SINK | None = None
    follow_redirects: bool = DEFAULT_FOLLOW_REDIRECTS
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    timeout: float | None = None
    verify: _TYPE_VERIFY = True
    extra: Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_dict(cls, options: Mapping[str, typing.Any]) -> "RequestOptions":
        """
        Build from an options mapping already passed through :func:`convert_options`.

        Redirect settings that cannot be converted fall back to their defaults
        with an :class:`IgnoredOptionWarning`.
        """

        def get(key: str, default: typing.Any = None) -> typing.Any:
            value = options.get(key)
            return default if value is None else value

        def convert(
            key: str, type_: typing.Callable[[typing.Any], typing.Any], default: typing.Any
        ) -> typing.Any:
            value = get(key, default)
            try:
                return type_(value)
            except (TypeError, ValueError):
                warn_ignored_option("Ignoring %r option %r", key, value)
                return default

        return cls(
            delay=get("delay"),
            proxy=get("proxy"),
            connect_timeout=get("connect_timeout"),
            sink=get("sink"),
            follow_redirects=convert("followRedirects", bool, DEFAULT_FOLLOW_REDIRECTS),
            max_redirects=convert("maxRedirects", int, DEFAULT_MAX_REDIRECTS),
            timeout=get("timeout"),
            verify=get("verify", True),
            extra={k: v for k, v in options.items() if k not in _KNOWN_KEYS},
        )

    @classmethod
    def coerce(
        cls, options: "RequestOptions | Mapping[str, typing.Any] | None"
    ) -> "RequestOptions":
        """Accept either a ready ``RequestOptions`` or a raw Guzzle style mapping."""
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options
        return cls.from_dict(convert_options(options))
