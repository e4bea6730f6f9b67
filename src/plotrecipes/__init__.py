"""
plotrecipes: turn recipe definitions into series-producing functions.

This package provides:
- Tree nodes: the recipe tree the engine operates on
- Signature analysis: dispatch target, positional and keyword parameters
- Transforms: attribute statement and series block rewriting
- Assembler: the generated apply_recipe function tree
- Runtime: interpreter, attribute maps, series records, backends, dispatch

Usage:
    from plotrecipes import recipe, apply_recipe, AttributeMap
    from plotrecipes.build import define, signature, param, attr, force, series, call, sym

    recipe(define(
        signature("f", param("t", "T")),
        attr("linecolor", sym("red")),
        series(force("fillcolor", sym("green")), call("rand", 10)),
        call("rand", 100),
    ), namespace={"T": T})

    records = apply_recipe(AttributeMap(), T())
    for record in records:
        print(record.attributes, record.args)
"""

from .ast import (
    # Base
    SourceLocation,
    SourceSpan,
    AstNode,
    AstVisitor,
    # Types
    TypeRef,
    TypeParam,
    Curly,
    # Leaves
    Literal,
    Symbol,
    Identifier,
    # Expressions
    Keyword,
    Call,
    Parameters,
    Param,
    TupleLiteral,
    ListLiteral,
    Pair,
    Index,
    Attribute,
    BinaryOp,
    UnaryOp,
    Conditional,
    # Statements
    Assign,
    Block,
    If,
    For,
    # Recipe nodes
    AttrSet,
    ForceSet,
    SeriesBlock,
    RecipeDefinition,
    # Generated nodes
    MapSetDefault,
    MapAssign,
    MapDelete,
    KeySupported,
    UnsupportedKey,
    ForkSeries,
    CollectSeries,
    DebugTrace,
    RecipeFunction,
    # Helpers
    format_ast,
    print_ast,
)

from .errors import (
    RecipeError,
    RecipeSyntaxError,
    UnsupportedKeyError,
    DispatchError,
    RecipeEvaluationError,
    Diagnostic,
    DiagnosticCollector,
    ErrorSeverity,
)

from .signature import (
    RecipeSignature,
    analyze_signature,
)

from .transforms import (
    AstTransform,
    TransformPipeline,
    RecipeBodyTransform,
    RecipeFlags,
    rewrite_body,
    extract_series,
)

from .assembler import (
    GENERATED_NAME,
    assemble,
    expand,
    dispatch_key,
)

from .runtime import (
    AttributeMap,
    SeriesRecord,
    RecipeData,
    ValueKind,
    value_kind,
    wrap_tuple,
    Backend,
    AnyKeyBackend,
    KeySetBackend,
    current_backend,
    set_backend,
    use_backend,
    is_key_supported,
    backend_name,
    debug,
    is_debug_enabled,
    Interpreter,
    GeneratedRecipe,
    RecipeRegistry,
    get_default_registry,
    apply_recipe,
)
from .runtime import Symbol as SymbolValue

from .api import (
    recipe,
    compile_recipe,
    define_recipes,
)

__version__ = "0.1.0"

__all__ = [
    # Tree
    'SourceLocation', 'SourceSpan', 'AstNode', 'AstVisitor',
    'TypeRef', 'TypeParam', 'Curly',
    'Literal', 'Symbol', 'Identifier',
    'Keyword', 'Call', 'Parameters', 'Param', 'TupleLiteral', 'ListLiteral',
    'Pair', 'Index', 'Attribute', 'BinaryOp', 'UnaryOp', 'Conditional',
    'Assign', 'Block', 'If', 'For',
    'AttrSet', 'ForceSet', 'SeriesBlock', 'RecipeDefinition',
    'MapSetDefault', 'MapAssign', 'MapDelete', 'KeySupported', 'UnsupportedKey',
    'ForkSeries', 'CollectSeries', 'DebugTrace', 'RecipeFunction',
    'format_ast', 'print_ast',
    # Errors
    'RecipeError', 'RecipeSyntaxError', 'UnsupportedKeyError', 'DispatchError',
    'RecipeEvaluationError', 'Diagnostic', 'DiagnosticCollector', 'ErrorSeverity',
    # Engine
    'RecipeSignature', 'analyze_signature',
    'AstTransform', 'TransformPipeline', 'RecipeBodyTransform', 'RecipeFlags',
    'rewrite_body', 'extract_series',
    'GENERATED_NAME', 'assemble', 'expand', 'dispatch_key',
    # Runtime
    'AttributeMap', 'SeriesRecord', 'RecipeData', 'ValueKind', 'value_kind',
    'wrap_tuple', 'SymbolValue',
    'Backend', 'AnyKeyBackend', 'KeySetBackend', 'current_backend', 'set_backend',
    'use_backend', 'is_key_supported', 'backend_name',
    'debug', 'is_debug_enabled',
    'Interpreter', 'GeneratedRecipe', 'RecipeRegistry', 'get_default_registry',
    'apply_recipe',
    # Entry points
    'recipe', 'compile_recipe', 'define_recipes',
]
