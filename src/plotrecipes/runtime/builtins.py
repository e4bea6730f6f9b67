"""
Built-in function registry for recipe bodies.

Maps names used in recipe trees to Python implementations. Data
constructors are numpy-backed so recipe results plug straight into
plotting backends.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import copy as _copy

import numpy as np

from .values import Symbol, AttributeMap
from ..errors import error_user


@dataclass
class BuiltinFunction:
    """A built-in function with its implementation."""
    name: str
    implementation: Callable[..., Any]
    doc: str = ""


class BuiltinRegistry:
    """
    Registry of all built-in functions.

    Functions are registered by name and looked up when a recipe body calls
    a name that is neither a local variable nor in the recipe namespace.
    """

    def __init__(self):
        self._functions: Dict[str, BuiltinFunction] = {}
        self._register_all()

    def get_function(self, name: str) -> Optional[BuiltinFunction]:
        """Look up a function by name."""
        return self._functions.get(name)

    def register(self, func: BuiltinFunction) -> None:
        """Register a function."""
        self._functions[func.name] = func

    def names(self):
        return sorted(self._functions)

    def _register_all(self) -> None:
        """Register all built-in functions."""
        self._register_data_functions()
        self._register_utility_functions()

    # --- Data Functions ---

    def _register_data_functions(self) -> None:
        """Register numpy-backed data constructors."""

        def _rand(*shape: int) -> np.ndarray:
            return np.random.rand(*shape)

        def _randn(*shape: int) -> np.ndarray:
            return np.random.randn(*shape)

        def _zeros(*shape: int) -> np.ndarray:
            return np.zeros(shape)

        def _ones(*shape: int) -> np.ndarray:
            return np.ones(shape)

        self.register(BuiltinFunction("rand", _rand, "uniform samples in [0, 1)"))
        self.register(BuiltinFunction("randn", _randn, "standard normal samples"))
        self.register(BuiltinFunction("zeros", _zeros, "array of zeros"))
        self.register(BuiltinFunction("ones", _ones, "array of ones"))
        self.register(BuiltinFunction("linspace", np.linspace, "evenly spaced values"))
        self.register(BuiltinFunction("arange", np.arange, "evenly stepped values"))
        self.register(BuiltinFunction("cumsum", np.cumsum, "cumulative sum"))
        self.register(BuiltinFunction("sqrt", np.sqrt))
        self.register(BuiltinFunction("sin", np.sin))
        self.register(BuiltinFunction("cos", np.cos))
        self.register(BuiltinFunction("minimum", np.min))
        self.register(BuiltinFunction("maximum", np.max))

    # --- Utility Functions ---

    def _register_utility_functions(self) -> None:
        """Register general-purpose helpers."""

        def _string(*parts: Any) -> str:
            return "".join(str(p) for p in parts)

        def _error(*parts: Any) -> None:
            raise error_user(_string(*parts))

        def _symbol(name: Any) -> Symbol:
            return Symbol(str(name))

        def _copy_value(value: Any) -> Any:
            if isinstance(value, AttributeMap):
                return value.copy()
            return _copy.copy(value)

        def _dict(*pairs: Any, **kwargs: Any) -> dict:
            result = dict(pairs)
            result.update(kwargs)
            return result

        self.register(BuiltinFunction("len", len))
        self.register(BuiltinFunction("range", range))
        self.register(BuiltinFunction("tuple", lambda *items: tuple(items)))
        self.register(BuiltinFunction("list", lambda *items: list(items)))
        self.register(BuiltinFunction("Dict", _dict, "dictionary from pairs"))
        self.register(BuiltinFunction("string", _string, "concatenate as text"))
        self.register(BuiltinFunction("error", _error, "fail the recipe call"))
        self.register(BuiltinFunction("Symbol", _symbol))
        self.register(BuiltinFunction("copy", _copy_value))
        self.register(BuiltinFunction("print", print))
        self.register(BuiltinFunction("abs", abs))
        self.register(BuiltinFunction("round", round))


_registry: Optional[BuiltinRegistry] = None


def get_builtin_registry() -> BuiltinRegistry:
    """Get the global built-in function registry."""
    global _registry
    if _registry is None:
        _registry = BuiltinRegistry()
    return _registry


def lookup_builtin(name: str) -> Optional[Callable[..., Any]]:
    """Return the implementation registered under name, or None."""
    func = get_builtin_registry().get_function(name)
    if func is None:
        return None
    return func.implementation
