"""
Recipe definition entry point.

`recipe()` does for a recipe tree what the @recipe macro does for source:
rewrite the body, assemble the generated function, compile it and register
it for dispatch.

An example, building the tree with plotrecipes.build:

    from plotrecipes import recipe, apply_recipe, AttributeMap
    from plotrecipes.build import *

    class T:
        pass

    recipe(define(
        signature("plot", param("t", "T"), param("n", "N", lit(1)),
                  keywords=[kw("customcolor", sym("green"))],
                  type_params=[type_param("N", "Integer")]),
        attr("markershape", sym("auto"), "require"),
        attr("markercolor", ident("customcolor"), "force"),
        attr("xrotation", lit(5)),
        attr("zrotation", lit(6), "quiet"),
        call("rand", lit(10), ident("n")),
    ), namespace={"T": T})

    records = apply_recipe(AttributeMap(customcolor="black"), T(), 5)

Attribute statements can be trailed by flags:

- quiet:   skip the attribute if the backend does not support it
- require: fail the call if the backend does not support it
- force:   do not let the caller override the attribute
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from .ast import RecipeDefinition, RecipeFunction
from .assembler import expand
from .errors import DiagnosticCollector, RecipeError
from .runtime.interpreter import GeneratedRecipe, Interpreter
from .runtime.registry import RecipeRegistry, get_default_registry

_interpreter: Optional[Interpreter] = None


def get_interpreter() -> Interpreter:
    """Get the shared interpreter."""
    global _interpreter
    if _interpreter is None:
        _interpreter = Interpreter()
    return _interpreter


def compile_recipe(
    definition: RecipeDefinition,
    namespace: Optional[Dict[str, Any]] = None,
) -> GeneratedRecipe:
    """Expand and compile a recipe without registering it."""
    function: RecipeFunction = expand(definition)
    return get_interpreter().compile(function, namespace)


def recipe(
    definition: RecipeDefinition,
    namespace: Optional[Dict[str, Any]] = None,
    registry: Optional[RecipeRegistry] = None,
) -> GeneratedRecipe:
    """
    Define a recipe.

    Args:
        definition: The recipe tree (signature plus body)
        namespace: Types and callables the recipe refers to by name
        registry: Registry to add the recipe to (default: process-wide)

    Returns:
        The compiled recipe, already registered

    Raises:
        RecipeSyntaxError: if the definition is malformed; nothing is
            registered in that case
    """
    compiled = compile_recipe(definition, namespace)
    (registry or get_default_registry()).register(compiled)
    return compiled


def define_recipes(
    definitions: Iterable[RecipeDefinition],
    namespace: Optional[Dict[str, Any]] = None,
    registry: Optional[RecipeRegistry] = None,
) -> Tuple[List[GeneratedRecipe], DiagnosticCollector]:
    """
    Define several recipes, collecting errors instead of stopping.

    A malformed definition is reported and skipped; the others are still
    registered.
    """
    diagnostics = DiagnosticCollector()
    compiled = []
    for definition in definitions:
        if diagnostics.should_stop:
            break
        try:
            compiled.append(recipe(definition, namespace, registry))
        except RecipeError as e:
            diagnostics.add_error(e)
    return compiled, diagnostics
