"""
Guzzle style request handling on top of trio, httpx and httpcore.
"""

from __future__ import annotations

# Set default logging handler to avoid "No handler found" warnings.
import logging
import typing
import warnings
from logging import NullHandler

from . import exceptions
from ._version import __version__
from .adapter import HttpClientAdapter
from .client import HttpClient
from .deferred import Deferred
from .factory import RequestFactory
from .options import RequestOptions, convert_options
from .sender import Sender, create_sender
from .util.resolver import Resolver, TrioResolver

__license__ = "MIT"
__version__ = __version__

__all__ = (
    "Deferred",
    "HttpClient",
    "HttpClientAdapter",
    "RequestFactory",
    "RequestOptions",
    "Resolver",
    "Sender",
    "TrioResolver",
    "add_stderr_logger",
    "convert_options",
    "create_sender",
    "disable_warnings",
)

logging.getLogger(__name__).addHandler(NullHandler())


def add_stderr_logger(level: int = logging.DEBUG) -> "logging.StreamHandler[typing.TextIO]":
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    # This method needs to be in this __init__.py to get the __name__ correct
    # even if ringbridge is vendored within another package.
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler


# ... Clean up.
del NullHandler


def disable_warnings(
    category: typing.Type[Warning] = exceptions.RingBridgeWarning,
) -> None:
    """
    Helper for quickly disabling all ringbridge warnings.
    """
    warnings.simplefilter("ignore", category)
