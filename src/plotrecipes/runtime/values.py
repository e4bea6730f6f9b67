"""
Runtime values produced and consumed by generated recipe functions.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Number
from typing import Any, Dict, Tuple


class Symbol(str):
    """An interned-style symbolic value such as :auto or :green."""

    def __repr__(self) -> str:
        return f":{str.__str__(self)}"


class ValueKind(Enum):
    """Coarse classification of attribute values."""
    NUMERIC = "numeric"
    TEXT = "text"
    SYMBOLIC = "symbolic"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Classify an attribute value."""
    if isinstance(value, Symbol):
        return ValueKind.SYMBOLIC
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Number) and not isinstance(value, bool):
        return ValueKind.NUMERIC
    return ValueKind.OTHER


class AttributeMap(dict):
    """
    Mapping from attribute name to value.

    Created fresh per top-level recipe invocation and mutated in place by
    generated code. Series blocks work on an independent copy.
    """

    def get_or_insert(self, key: str, default: Any) -> Any:
        """Return the value for key, inserting default first if absent."""
        return self.setdefault(key, default)

    def copy(self) -> "AttributeMap":
        return AttributeMap(self)

    def kinds(self) -> Dict[str, ValueKind]:
        """Classify every value in the map."""
        return {k: value_kind(v) for k, v in self.items()}

    def __repr__(self) -> str:
        return f"AttributeMap({dict.__repr__(self)})"


@dataclass(frozen=True)
class SeriesRecord:
    """
    One plottable series: an attribute snapshot and positional data.

    Returned in order from every generated recipe function.
    """
    attributes: AttributeMap
    args: Tuple[Any, ...]


# Name used by plotting pipelines for the same record
RecipeData = SeriesRecord


def wrap_tuple(value: Any) -> Tuple[Any, ...]:
    """Normalize a recipe result to a tuple of positional values."""
    if isinstance(value, tuple):
        return value
    return (value,)
