"""
Recipe signature analysis.

Splits a call-form signature such as

    plot{N <: Integer}(t::T, n::N = 1; customcolor = :green)

into the dispatch target (callee plus type parameters), the positional
parameters and the keyword parameters with their default expressions.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .ast import (
    AstNode, Call, Curly, Identifier, Keyword, Param, Parameters, TypeParam,
)
from .errors import (
    error_not_call_form,
    error_missing_dispatch_args,
    error_bad_keyword_parameter,
    error_bad_positional_parameter,
    error_misplaced_keywords,
    error_required_after_optional,
)


@dataclass
class RecipeSignature:
    """The pieces of a recipe signature needed to generate its function."""
    target: AstNode
    parameters: List[Param] = field(default_factory=list)
    keywords: List[Keyword] = field(default_factory=list)

    @property
    def name(self) -> str:
        callee = self.target.callee if isinstance(self.target, Curly) else self.target
        if isinstance(callee, Identifier):
            return callee.name
        return callee.kind

    @property
    def type_params(self) -> List[TypeParam]:
        if isinstance(self.target, Curly):
            return list(self.target.params)
        return []

    @property
    def keyword_pairs(self) -> List[Tuple[str, AstNode]]:
        return [(kw.name, kw.value) for kw in self.keywords]

    @property
    def required_count(self) -> int:
        return required_count(self.parameters)

    def binding_names(self) -> List[str]:
        """Local names the positional arguments are bound to."""
        return [parameter_name(p, i) for i, p in enumerate(self.parameters)]


def parameter_name(param: Param, index: int) -> str:
    """Name a positional argument is bound to; anonymous ones get '_arg<i>'."""
    return param.name or f"_arg{index}"


def required_count(parameters: List[Param]) -> int:
    """Number of leading positional parameters without defaults."""
    count = 0
    for param in parameters:
        if param.default is not None:
            break
        count += 1
    return count


def _check_default_order(parameters: List[Param]) -> None:
    seen_default = False
    for index, param in enumerate(parameters):
        if param.default is not None:
            seen_default = True
        elif seen_default:
            raise error_required_after_optional(parameter_name(param, index), param.span)


def _describe(node: Optional[AstNode]) -> str:
    return "nothing" if node is None else node.kind


def _to_param(node: AstNode) -> Param:
    if isinstance(node, Param):
        return node
    if isinstance(node, Identifier):
        return Param(node.name, span=node.span)
    raise error_bad_positional_parameter(_describe(node), node.span)


def analyze_signature(signature: AstNode) -> RecipeSignature:
    """
    Decompose a recipe signature.

    Args:
        signature: A Call node; an optional Parameters node may lead its
            arguments.

    Returns:
        RecipeSignature with keyword entries removed from the positional list

    Raises:
        RecipeSyntaxError: if the signature is not call-form, has nothing to
            dispatch on, or contains malformed parameters
    """
    if not isinstance(signature, Call):
        span = signature.span if isinstance(signature, AstNode) else None
        raise error_not_call_form(_describe(signature), span)

    name = signature.callee.name if isinstance(signature.callee, Identifier) else "recipe"
    args = list(signature.arguments)
    if len(args) < 1:
        raise error_missing_dispatch_args(name, signature.span)

    keywords: List[Keyword] = []
    if isinstance(args[0], Parameters):
        for entry in args[0].keywords:
            if not isinstance(entry, Keyword):
                raise error_bad_keyword_parameter(_describe(entry), args[0].span)
            keywords.append(entry)
        args = args[1:]

    for arg in args:
        if isinstance(arg, Parameters):
            raise error_misplaced_keywords(arg.span)

    if signature.keywords:
        # keyword parameters only come from the leading Parameters list
        raise error_bad_keyword_parameter(signature.keywords[0].kind, signature.keywords[0].span)

    if not args:
        raise error_missing_dispatch_args(name, signature.span)

    parameters = [_to_param(a) for a in args]
    _check_default_order(parameters)

    return RecipeSignature(
        target=signature.callee,
        parameters=parameters,
        keywords=keywords,
    )
