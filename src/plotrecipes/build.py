"""
Terse constructors for recipe trees.

Plain Python values passed where a node is expected become Literal nodes;
names given as strings become Identifier (or TypeRef) nodes.
"""

from typing import Any, Iterable, List, Optional, Union

from .ast import (
    AstNode, Assign, AttrSet, Attribute, BinaryOp, Block, Call, Curly, For,
    ForceSet, Identifier, If, Index, Keyword, ListLiteral, Literal, Pair,
    Param, Parameters, RecipeDefinition, SeriesBlock, Symbol, TupleLiteral,
    TypeParam, TypeRef, UnaryOp,
)

__all__ = [
    'lit', 'sym', 'ident', 'nothing', 'call', 'attr', 'force', 'series',
    'block', 'param', 'kw', 'type_param', 'signature', 'define', 'if_',
    'for_', 'assign', 'pair', 'tup', 'lst', 'binop', 'unop', 'index',
    'member',
]

NodeLike = Union[AstNode, Any]


def _node(value: NodeLike) -> AstNode:
    if isinstance(value, AstNode):
        return value
    return Literal(value)


def _name(value: Union[str, AstNode]) -> AstNode:
    if isinstance(value, str):
        return Identifier(value)
    return value


def _block(statements: Iterable[NodeLike]) -> Block:
    return Block([_node(s) for s in statements])


def lit(value: Any) -> Literal:
    return Literal(value)


def nothing() -> Literal:
    """The 'no value' sentinel."""
    return Literal(None)


def sym(name: str) -> Symbol:
    return Symbol(name)


def ident(name: str) -> Identifier:
    return Identifier(name)


def call(callee: Union[str, AstNode], *args: NodeLike, **kwargs: NodeLike) -> Call:
    return Call(
        _name(callee),
        [_node(a) for a in args],
        [Keyword(k, _node(v)) for k, v in kwargs.items()],
    )


def attr(key: Union[str, AstNode], value: NodeLike, *flags: str) -> AstNode:
    """key --> value, with optional trailing flags ('quiet', 'require', 'force')."""
    stmt = AttrSet(_name(key), _node(value))
    if not flags:
        return stmt
    return TupleLiteral([stmt] + [Symbol(f) for f in flags])


def force(key: Union[str, AstNode], value: NodeLike) -> ForceSet:
    """key := value"""
    return ForceSet(_name(key), _node(value))


def series(*statements: NodeLike) -> SeriesBlock:
    return SeriesBlock(_block(statements))


def block(*statements: NodeLike) -> Block:
    return _block(statements)


def param(name: str, annotation: Optional[str] = None, default: Optional[NodeLike] = None) -> Param:
    return Param(
        name,
        TypeRef(annotation) if annotation else None,
        _node(default) if default is not None else None,
    )


def kw(name: str, value: NodeLike) -> Keyword:
    return Keyword(name, _node(value))


def type_param(name: str, bound: Optional[str] = None) -> TypeParam:
    return TypeParam(name, TypeRef(bound) if bound else None)


def signature(
    name: str,
    *params: Union[Param, str],
    keywords: Optional[List[Keyword]] = None,
    type_params: Optional[List[TypeParam]] = None,
) -> Call:
    """name{type_params...}(params...; keywords...)"""
    callee: AstNode = Identifier(name)
    if type_params:
        callee = Curly(callee, list(type_params))
    args: List[AstNode] = []
    if keywords:
        args.append(Parameters(list(keywords)))
    args.extend(Param(p) if isinstance(p, str) else p for p in params)
    return Call(callee, args)


def define(sig: AstNode, *statements: NodeLike) -> RecipeDefinition:
    return RecipeDefinition(sig, _block(statements))


def if_(condition: NodeLike, then: Iterable[NodeLike],
        otherwise: Optional[Iterable[NodeLike]] = None) -> If:
    return If(
        _node(condition),
        _block(then),
        _block(otherwise) if otherwise is not None else None,
    )


def for_(variable: str, iterable: NodeLike, *statements: NodeLike) -> For:
    return For(variable, _node(iterable), _block(statements))


def assign(target: Union[str, AstNode], value: NodeLike) -> Assign:
    return Assign(_name(target), _node(value))


def pair(key: NodeLike, value: NodeLike) -> Pair:
    return Pair(_node(key), _node(value))


def tup(*elements: NodeLike) -> TupleLiteral:
    return TupleLiteral([_node(e) for e in elements])


def lst(*elements: NodeLike) -> ListLiteral:
    return ListLiteral([_node(e) for e in elements])


def binop(operator: str, left: NodeLike, right: NodeLike) -> BinaryOp:
    return BinaryOp(operator, _node(left), _node(right))


def unop(operator: str, operand: NodeLike) -> UnaryOp:
    return UnaryOp(operator, _node(operand))


def index(target: NodeLike, idx: NodeLike) -> Index:
    return Index(_node(target), _node(idx))


def member(target: NodeLike, name: str) -> Attribute:
    return Attribute(_node(target), name)
