"""
Backend capability queries.

The rendering backend decides which attributes it understands. Generated
recipe code asks the active backend one key at a time; 'quiet' and 'require'
flagged attributes and keyword-parameter cleanup depend on the answer.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Optional


class Backend(ABC):
    """A rendering backend as seen by recipes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name, used in error messages."""
        pass

    @abstractmethod
    def is_key_supported(self, key: str) -> bool:
        """Return True if the backend understands attribute key."""
        pass


class AnyKeyBackend(Backend):
    """Backend that accepts every attribute. Active until another is set."""

    @property
    def name(self) -> str:
        return "any"

    def is_key_supported(self, key: str) -> bool:
        return True


class KeySetBackend(Backend):
    """Backend supporting a fixed set of attribute names."""

    def __init__(self, name: str, keys: Iterable[str]):
        self._name = name
        self.keys = frozenset(str(k) for k in keys)

    @property
    def name(self) -> str:
        return self._name

    def is_key_supported(self, key: str) -> bool:
        return str(key) in self.keys

    def __repr__(self) -> str:
        return f"KeySetBackend({self._name!r}, {sorted(self.keys)!r})"


_backend: Optional[Backend] = None


def current_backend() -> Backend:
    """Get the active backend."""
    global _backend
    if _backend is None:
        _backend = AnyKeyBackend()
    return _backend


def set_backend(backend: Backend) -> Backend:
    """Make backend the active one; returns the previous backend."""
    global _backend
    previous = current_backend()
    _backend = backend
    return previous


@contextmanager
def use_backend(backend: Backend):
    """
    Context manager that activates a backend temporarily.

    Usage:
        with use_backend(KeySetBackend("svg", ["linecolor"])):
            records = apply_recipe(attributes, obj)
    """
    previous = set_backend(backend)
    try:
        yield backend
    finally:
        set_backend(previous)


def is_key_supported(key: str) -> bool:
    """Ask the active backend about one key."""
    return bool(current_backend().is_key_supported(key))


def backend_name() -> str:
    """Name of the active backend."""
    return current_backend().name
