"""
Recipe Runtime - Tree-walking evaluation of generated recipe functions.

This module provides:
- Interpreter: Compiles RecipeFunction trees into callables
- Values: AttributeMap, SeriesRecord and symbolic values
- ExecutionContext: Variable scope management and series collection
- Backend: Attribute support queries
- RecipeRegistry: Type-directed dispatch across recipes
- debug: Argument tracing toggle
"""

from .values import (
    Symbol,
    ValueKind,
    value_kind,
    AttributeMap,
    SeriesRecord,
    RecipeData,
    wrap_tuple,
)

from .context import (
    ATTRIBUTES_NAME,
    Scope,
    ExecutionContext,
    create_context,
)

from .backend import (
    Backend,
    AnyKeyBackend,
    KeySetBackend,
    current_backend,
    set_backend,
    use_backend,
    is_key_supported,
    backend_name,
)

from .tracing import (
    debug,
    is_debug_enabled,
)

from .builtins import (
    BuiltinFunction,
    BuiltinRegistry,
    get_builtin_registry,
    lookup_builtin,
)

from .registry import (
    BASE_TYPES,
    RecipeMethod,
    RecipeRegistry,
    get_default_registry,
    apply_recipe,
    resolve_type,
    resolve_parameter_types,
)

from .interpreter import (
    Interpreter,
    GeneratedRecipe,
)

__all__ = [
    # Values
    'Symbol',
    'ValueKind',
    'value_kind',
    'AttributeMap',
    'SeriesRecord',
    'RecipeData',
    'wrap_tuple',

    # Context
    'ATTRIBUTES_NAME',
    'Scope',
    'ExecutionContext',
    'create_context',

    # Backend
    'Backend',
    'AnyKeyBackend',
    'KeySetBackend',
    'current_backend',
    'set_backend',
    'use_backend',
    'is_key_supported',
    'backend_name',

    # Debug
    'debug',
    'is_debug_enabled',

    # Builtins
    'BuiltinFunction',
    'BuiltinRegistry',
    'get_builtin_registry',
    'lookup_builtin',

    # Registry
    'BASE_TYPES',
    'RecipeMethod',
    'RecipeRegistry',
    'get_default_registry',
    'apply_recipe',
    'resolve_type',
    'resolve_parameter_types',

    # Interpreter
    'Interpreter',
    'GeneratedRecipe',
]
