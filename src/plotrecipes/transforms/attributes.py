"""
Attribute statement rewriting.

Walks a recipe body and turns every attribute statement into map operations:

    key --> value                  ->  setdefault(key, value)
    key := value                   ->  map[key] = value
    key --> value, :force          ->  map[key] = value
    key --> value, :quiet          ->  only if the backend supports key
    key --> value, :require        ->  error unless the backend supports key

Series blocks are handed to the series extractor. Call arguments are never
walked, so pair-like data such as Dict(1 => 2) or build(a --> b) is left
alone.
"""

from dataclasses import dataclass
from typing import Tuple

from ..ast import (
    AstNode, AttrSet, Block, Call, Conditional, ForceSet, Identifier,
    KeySupported, Literal, MapAssign, MapSetDefault, RecipeDefinition,
    SeriesBlock, Symbol, TupleLiteral, UnsupportedKey,
)
from ..errors import error_bad_attribute_key, error_bad_recipe_body
from .base import AstTransform, replace_children
from .series import extract_series

FLAG_NAMES = ("quiet", "require", "force")


@dataclass
class RecipeFlags:
    """Trailing flags of an attribute statement."""
    quiet: bool = False
    require: bool = False
    force: bool = False


def _flag_name(node: AstNode) -> str:
    if isinstance(node, (Symbol, Identifier)):
        return node.name
    return ""


def is_flagged_tuple(node: AstNode) -> bool:
    """Check for 'key --> value, flag...' (a tuple led by an attribute statement)."""
    return (
        isinstance(node, TupleLiteral)
        and len(node.elements) > 0
        and isinstance(node.elements[0], (AttrSet, ForceSet))
    )


def extract_flags(node: AstNode) -> Tuple[AstNode, RecipeFlags]:
    """
    Split a flagged tuple into its attribute statement and flags.

    Unknown trailing entries are ignored. Nodes that are not flagged tuples
    come back unchanged with no flags set.
    """
    flags = RecipeFlags()
    if not is_flagged_tuple(node):
        return node, flags
    for entry in node.elements[1:]:
        name = _flag_name(entry)
        if name in FLAG_NAMES:
            setattr(flags, name, True)
    return node.elements[0], flags


def normalize_key(key: AstNode) -> Symbol:
    """Turn an attribute key (name, symbol or string) into a Symbol node."""
    if isinstance(key, Symbol):
        return key
    if isinstance(key, Identifier):
        return Symbol(key.name, span=key.span)
    if isinstance(key, Literal) and isinstance(key.value, str):
        return Symbol(key.value, span=key.span)
    raise error_bad_attribute_key(key.kind, key.span)


def build_attribute_write(stmt: AttrSet, flags: RecipeFlags) -> AstNode:
    """Build the guarded map operation for one attribute statement."""
    key = normalize_key(stmt.key)
    if flags.force:
        write = MapAssign(key, stmt.value, span=stmt.span)
    else:
        write = MapSetDefault(key, stmt.value, span=stmt.span)

    if flags.require:
        return Conditional(
            KeySupported(key), write, UnsupportedKey(key, span=stmt.span), span=stmt.span
        )
    if flags.quiet:
        return Conditional(KeySupported(key), write, Literal(None), span=stmt.span)
    return write


def rewrite_statement(node: AstNode) -> AstNode:
    """Rewrite one statement; returns the node that replaces it."""
    stmt, flags = extract_flags(node)

    if isinstance(stmt, ForceSet):
        flags.force = True
        stmt = AttrSet(stmt.key, stmt.value, span=stmt.span)

    if isinstance(stmt, AttrSet):
        return build_attribute_write(stmt, flags)

    if isinstance(stmt, SeriesBlock):
        return extract_series(stmt, rewrite_body)

    if not isinstance(stmt, Call):
        rewrite_body(stmt)
    return stmt


def rewrite_body(node: AstNode) -> AstNode:
    """Rewrite attribute statements beneath node, in place."""
    replace_children(node, rewrite_statement)
    return node


class RecipeBodyTransform(AstTransform):
    """Rewrites a recipe body's attribute statements and series blocks."""

    @property
    def name(self) -> str:
        return "recipe-body"

    def transform(self, definition: RecipeDefinition) -> RecipeDefinition:
        if not isinstance(definition.body, Block):
            raise error_bad_recipe_body(definition.body.kind, definition.body.span)
        rewrite_body(definition.body)
        return definition
