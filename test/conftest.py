from __future__ import annotations

import pytest

from . import ScriptedBackend, StaticResolver, http_response


@pytest.fixture
def resolver() -> StaticResolver:
    return StaticResolver({"example.com": "93.184.216.34"})


@pytest.fixture
def backend() -> ScriptedBackend:
    """A connector that answers every connection with ``200 OK`` and ``hello``."""
    return ScriptedBackend([http_response()])
