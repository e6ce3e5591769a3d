from __future__ import annotations

import os
import ssl
import typing

_TYPE_VERIFY = typing.Union[bool, str, "os.PathLike[str]"]


def create_ssl_context(verify: _TYPE_VERIFY = True) -> ssl.SSLContext:
    """Build the SSL context handed to a sender's connection pool.

    :param verify:
        ``True`` verifies peers against the system trust store, ``False``
        disables certificate and hostname verification, and a path selects a
        CA bundle file (or a directory of hashed certificates) instead of the
        system store.
    :returns:
        Constructed SSLContext object with specified options
    :rtype: SSLContext
    """
    if verify is True:
        return ssl.create_default_context()

    if verify is False:
        context = ssl.create_default_context()
        # The order of the below lines matter, SSLContext refuses
        # check_hostname=True together with verify_mode=CERT_NONE.
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    path = os.fspath(verify)
    if os.path.isdir(path):
        return ssl.create_default_context(capath=path)
    return ssl.create_default_context(cafile=path)
