"""
Execution context for generated recipe functions.

Manages variable scopes and collects the series records of one invocation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from contextlib import contextmanager

from .values import AttributeMap, SeriesRecord
from .backend import Backend, current_backend

# Name under which the attribute map is visible to recipe code
ATTRIBUTES_NAME = "plotattributes"

_MISSING = object()
_ABSENT = object()


@dataclass
class Scope:
    """
    A single scope containing variable bindings.

    Scopes form a chain via the `parent` field for lexical scoping.
    """
    variables: Dict[str, Any] = field(default_factory=dict)
    parent: Optional["Scope"] = None
    name: str = "anonymous"  # For debugging

    def lookup(self, name: str, default: Any = _MISSING) -> Any:
        """Look up a variable in this scope or parent scopes."""
        scope = self
        while scope is not None:
            if name in scope.variables:
                return scope.variables[name]
            scope = scope.parent
        if default is _MISSING:
            raise KeyError(name)
        return default

    def set(self, name: str, value: Any) -> None:
        """Set a variable in this scope (shadowing parent if exists)."""
        self.variables[name] = value

    def update(self, name: str, value: Any) -> bool:
        """
        Update an existing variable.

        Searches up the scope chain to find where the variable is defined.
        Returns True if found and updated, False if not found.
        """
        if name in self.variables:
            self.variables[name] = value
            return True
        if self.parent:
            return self.parent.update(name, value)
        return False

    def contains(self, name: str) -> bool:
        """Check if a variable exists in this scope or parents."""
        return self.lookup(name, _ABSENT) is not _ABSENT


@dataclass
class ExecutionContext:
    """
    The full execution context for one generated-function call.

    Tracks:
    - Variable scopes (the attribute map is bound as ATTRIBUTES_NAME)
    - Series records in the order they were produced
    - The backend answering support queries
    - The namespace of callables and types visible to the recipe
    """
    current_scope: Scope = field(default_factory=lambda: Scope(name="recipe"))
    recipe_name: str = ""
    namespace: Dict[str, Any] = field(default_factory=dict)
    series_list: List[SeriesRecord] = field(default_factory=list)
    backend: Backend = field(default_factory=current_backend)

    def get_variable(self, name: str, default: Any = _MISSING) -> Any:
        """Look up a variable in the current scope chain."""
        return self.current_scope.lookup(name, default)

    def set_variable(self, name: str, value: Any) -> None:
        """Define a new variable in the current scope."""
        self.current_scope.set(name, value)

    def assign_variable(self, name: str, value: Any) -> None:
        """Rebind an existing variable, or define it in the current scope."""
        if not self.current_scope.update(name, value):
            self.current_scope.set(name, value)

    @property
    def attributes(self) -> AttributeMap:
        """The attribute map visible at this point (forks shadow it)."""
        return self.current_scope.lookup(ATTRIBUTES_NAME)

    @contextmanager
    def new_scope(self, name: str = "block"):
        """
        Context manager to create a new nested scope.

        Usage:
            with ctx.new_scope("series"):
                ctx.set_variable(ATTRIBUTES_NAME, ctx.attributes.copy())
        """
        old_scope = self.current_scope
        self.current_scope = Scope(parent=old_scope, name=name)
        try:
            yield self.current_scope
        finally:
            self.current_scope = old_scope

    def add_series(self, attributes: AttributeMap, args: tuple) -> SeriesRecord:
        """Append a record to the series list."""
        record = SeriesRecord(attributes, args)
        self.series_list.append(record)
        return record


def create_context(
    recipe_name: str,
    attributes: AttributeMap,
    parameters: Dict[str, Any],
    namespace: Optional[Dict[str, Any]] = None,
    backend: Optional[Backend] = None,
) -> ExecutionContext:
    """
    Create a new execution context for a recipe invocation.

    Args:
        recipe_name: The recipe being executed
        attributes: The caller's attribute map (mutated in place)
        parameters: Positional parameter values by name
        namespace: Callables and types visible to the recipe body
        backend: Backend for support queries (defaults to the active one)

    Returns:
        A fresh ExecutionContext with the map and parameters bound in scope
    """
    ctx = ExecutionContext(
        recipe_name=recipe_name,
        namespace=dict(namespace or {}),
        backend=backend or current_backend(),
    )
    ctx.set_variable(ATTRIBUTES_NAME, attributes)
    for name, value in parameters.items():
        ctx.set_variable(name, value)
    return ctx
