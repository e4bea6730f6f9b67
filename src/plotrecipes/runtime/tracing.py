"""
Process-wide debug switch for generated recipe functions.

When enabled, every generated function prints its positional arguments
before doing any other work.
"""

_debug_recipes = [False]


def debug(enabled: bool = True) -> None:
    """Turn argument tracing on (default) or off."""
    _debug_recipes[0] = bool(enabled)


def is_debug_enabled() -> bool:
    """Check whether argument tracing is on."""
    return _debug_recipes[0]
