"""
Recipe function assembly.

Stitches a rewritten recipe body into the generated function

    function apply_recipe(plotattributes, params...)
        <debug trace of params>
        kw = get!(plotattributes, :kw, default)          # per keyword
        is_key_supported(:kw) || delete!(plotattributes, :kw)
        series_list = RecipeData[]
        result = <rewritten body>
        result === nothing || push!(series_list, RecipeData(plotattributes, wrap_tuple(result)))
        series_list
    end

as a RecipeFunction tree. The interpreter turns that tree into a callable.
"""

from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from .ast import (
    AstNode, Assign, Block, CollectSeries, Conditional, DebugTrace, Identifier,
    KeySupported, Literal, MapDelete, MapSetDefault, RecipeDefinition,
    RecipeFunction, Symbol,
)
from .signature import RecipeSignature, analyze_signature
from .runtime.registry import resolve_parameter_types
from .transforms import RecipeBodyTransform, TransformPipeline

GENERATED_NAME = "apply_recipe"


def build_keyword_preamble(signature: RecipeSignature) -> List[AstNode]:
    """One 'name = get!(map, :name, default)' binding per keyword parameter."""
    return [
        Assign(Identifier(kw.name), MapSetDefault(Symbol(kw.name), kw.value), span=kw.span)
        for kw in signature.keywords
    ]


def build_keyword_cleanup(signature: RecipeSignature) -> List[AstNode]:
    """Drop keyword parameters the backend does not support from the map."""
    return [
        Conditional(KeySupported(Symbol(kw.name)), Literal(None), MapDelete(Symbol(kw.name)))
        for kw in signature.keywords
    ]


def assemble(signature: RecipeSignature, body: Block, name: str = GENERATED_NAME) -> RecipeFunction:
    """
    Build the generated function from a signature and a rewritten body.

    Args:
        signature: The analysed recipe signature
        body: The recipe body after attribute/series rewriting
        name: Name given to the generated function

    Returns:
        RecipeFunction whose body is: debug trace, keyword preamble, keyword
        cleanup, then the recipe body wrapped in CollectSeries
    """
    trace = DebugTrace([Identifier(n) for n in signature.binding_names()])
    statements: List[AstNode] = [trace]
    statements.extend(build_keyword_preamble(signature))
    statements.extend(build_keyword_cleanup(signature))
    statements.append(CollectSeries(body, span=body.span))
    return RecipeFunction(
        name=name,
        type_params=signature.type_params,
        parameters=list(signature.parameters),
        keywords=list(signature.keywords),
        body=Block(statements),
        span=signature.target.span,
    )


def expand(definition: RecipeDefinition, name: str = GENERATED_NAME) -> RecipeFunction:
    """
    Transform a recipe definition into its generated function tree.

    The input tree is not modified: the definition is copied before the
    body is rewritten.

    Raises:
        RecipeSyntaxError: on any malformed signature or body
    """
    signature = analyze_signature(definition.signature)
    pipeline = TransformPipeline([RecipeBodyTransform()])
    rewritten = pipeline.apply(deepcopy(definition))
    return assemble(signature, rewritten.body, name)


def dispatch_key(function: RecipeFunction,
                 namespace: Optional[Dict[str, Any]] = None) -> Tuple[type, ...]:
    """Python types of the positional parameters, used as the registry key."""
    return resolve_parameter_types(function.parameters, function.type_params, namespace or {})
