"""
Recipe dispatch registry.

Generated recipe functions are registered under the Python types of their
positional parameters. A call picks the most specific applicable recipe,
the way ordinary overload resolution would:

- a recipe applies when the argument count fits its parameters (defaults
  included) and every argument is an instance of its parameter type
- recipe A beats recipe B when each of A's types is a subclass of B's
- when two applicable recipes have identical types, the later one wins
- incomparable applicable recipes are ambiguous
"""

import numbers
from collections.abc import Callable as CallableABC
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from .values import AttributeMap, SeriesRecord, Symbol
from ..ast import Param, TypeParam
from ..errors import error_ambiguous_recipe, error_no_matching_recipe, error_unresolved_type

if TYPE_CHECKING:
    from .interpreter import GeneratedRecipe


# Type names usable in recipe signatures without a namespace entry
BASE_TYPES: Dict[str, type] = {
    "Any": object,
    "object": object,
    "Number": numbers.Number,
    "Real": numbers.Real,
    "Integer": numbers.Integral,
    "Int": int,
    "Int64": int,
    "int": int,
    "AbstractFloat": float,
    "Float64": float,
    "float": float,
    "Bool": bool,
    "bool": bool,
    "AbstractString": str,
    "String": str,
    "str": str,
    "Symbol": Symbol,
    "Tuple": tuple,
    "tuple": tuple,
    "list": list,
    "dict": dict,
    "AbstractArray": np.ndarray,
    "AbstractVector": np.ndarray,
    "AbstractMatrix": np.ndarray,
    "Function": CallableABC,
}


def resolve_type(name: str, namespace: Dict[str, Any]) -> type:
    """Resolve a type name against the namespace, then BASE_TYPES."""
    candidate = namespace.get(name)
    if isinstance(candidate, type):
        return candidate
    if name in BASE_TYPES:
        return BASE_TYPES[name]
    raise error_unresolved_type(name)


def resolve_parameter_types(
    parameters: Sequence[Param],
    type_params: Sequence[TypeParam],
    namespace: Dict[str, Any],
) -> Tuple[type, ...]:
    """
    Python types for each positional parameter.

    Unannotated parameters accept anything; a parameter annotated with a
    type parameter accepts that parameter's bound.
    """
    bounds = {tp.name: tp.bound for tp in type_params}
    types = []
    for param in parameters:
        annotation = param.annotation
        if annotation is None:
            types.append(object)
        elif annotation.name in bounds:
            bound = bounds[annotation.name]
            types.append(object if bound is None else resolve_type(bound.name, namespace))
        else:
            types.append(resolve_type(annotation.name, namespace))
    return tuple(types)


def _type_names(types: Sequence[type]) -> str:
    return ", ".join(getattr(t, "__name__", str(t)) for t in types)


@dataclass
class RecipeMethod:
    """One registered recipe with its dispatch types."""
    recipe: "GeneratedRecipe"
    types: Tuple[type, ...]
    required: int
    order: int

    def accepts(self, args: Sequence[Any]) -> bool:
        if not self.required <= len(args) <= len(self.types):
            return False
        return all(isinstance(arg, t) for arg, t in zip(args, self.types))

    def describe(self) -> str:
        return f"{self.recipe.name}({_type_names(self.types)})"


def _at_least_as_specific(a: Sequence[type], b: Sequence[type]) -> bool:
    return all(issubclass(x, y) for x, y in zip(a, b))


class RecipeRegistry:
    """
    Registry of generated recipe functions keyed by positional types.
    """

    def __init__(self):
        self._methods: List[RecipeMethod] = []
        self._counter = 0

    def register(self, recipe: "GeneratedRecipe",
                 types: Optional[Tuple[type, ...]] = None) -> RecipeMethod:
        """Register a recipe; an identical signature replaces the older one."""
        types = tuple(types if types is not None else recipe.dispatch_types)
        self._counter += 1
        method = RecipeMethod(recipe, types, recipe.required_count, self._counter)
        self._methods = [
            m for m in self._methods
            if not (m.types == method.types and m.required == method.required)
        ]
        self._methods.append(method)
        return method

    def methods(self) -> List[RecipeMethod]:
        return list(self._methods)

    def clear(self) -> None:
        self._methods.clear()

    def resolve(self, args: Sequence[Any]) -> "GeneratedRecipe":
        """
        Pick the most specific recipe for args.

        Raises:
            DispatchError: if nothing applies or the best match is ambiguous
        """
        n = len(args)
        applicable = [m for m in self._methods if m.accepts(args)]
        arg_types = _type_names([type(a) for a in args])
        if not applicable:
            raise error_no_matching_recipe(arg_types)

        best = []
        for m in applicable:
            mine = m.types[:n]
            dominated = False
            for other in applicable:
                if other is m:
                    continue
                theirs = other.types[:n]
                if mine == theirs:
                    dominated = other.order > m.order
                elif _at_least_as_specific(theirs, mine):
                    dominated = True
                if dominated:
                    break
            if not dominated:
                best.append(m)

        if len(best) != 1:
            raise error_ambiguous_recipe(arg_types, [m.describe() for m in best or applicable])
        return best[0].recipe

    def apply(self, attributes: AttributeMap, *args: Any) -> List[SeriesRecord]:
        """
        Dispatch on args and run the chosen recipe.

        With no positional arguments there is nothing to convert and the
        result is empty.
        """
        if not args:
            return []
        return self.resolve(args)(attributes, *args)


_registry: Optional[RecipeRegistry] = None


def get_default_registry() -> RecipeRegistry:
    """Get the process-wide recipe registry."""
    global _registry
    if _registry is None:
        _registry = RecipeRegistry()
    return _registry


def apply_recipe(attributes: AttributeMap, *args: Any) -> List[SeriesRecord]:
    """Run the most specific recipe in the default registry."""
    return get_default_registry().apply(attributes, *args)
