"""
Shared fixtures: every test starts with tracing off, the accept-all backend
and an empty default registry.
"""

import pytest

from plotrecipes import AnyKeyBackend, debug, get_default_registry, set_backend


@pytest.fixture(autouse=True)
def reset_runtime_state():
    debug(False)
    previous = set_backend(AnyKeyBackend())
    get_default_registry().clear()
    yield
    debug(False)
    set_backend(previous)
    get_default_registry().clear()
