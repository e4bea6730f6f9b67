"""
Tree node definitions for plotrecipes.

A recipe definition arrives as an already-built tree of these nodes. The
engine rewrites the tree (see ``plotrecipes.transforms`` and
``plotrecipes.assembler``) and the runtime interpreter evaluates the result.

Node groups:
- Generic expression and statement nodes (calls, literals, blocks, loops)
- Domain nodes recognised by the engine (AttrSet, ForceSet, SeriesBlock)
- Generated nodes emitted by the engine (map operations, series collection)
"""

from dataclasses import dataclass, field, fields
from typing import Optional, List, Any, Iterator
from abc import ABC


# =============================================================================
# Source Locations
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """A position in recipe source (1-based line and column)."""
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """A range between two source locations."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all tree nodes."""
    span: Optional[SourceSpan] = field(default=None, kw_only=True, compare=False)

    @property
    def kind(self) -> str:
        """The node's kind tag."""
        return self.__class__.__name__

    def children(self) -> Iterator["AstNode"]:
        """Yield child nodes in field order, flattening lists."""
        for f in fields(self):
            if f.name == "span":
                continue
            value = getattr(self, f.name)
            if isinstance(value, AstNode):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, AstNode):
                        yield item

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class AstVisitor(ABC):
    """Base class for tree visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


# =============================================================================
# Type Nodes
# =============================================================================

@dataclass
class TypeRef(AstNode):
    """A named type, resolved against the recipe namespace (e.g. 'T')."""
    name: str


@dataclass
class TypeParam(AstNode):
    """A type parameter with an optional upper bound (e.g. 'N <: Integer')."""
    name: str
    bound: Optional[TypeRef] = None


@dataclass
class Curly(AstNode):
    """A callee carrying type parameters (e.g. 'plot{N <: Integer}')."""
    callee: "Identifier"
    params: List[TypeParam] = field(default_factory=list)


# =============================================================================
# Leaf Nodes
# =============================================================================

@dataclass
class Literal(AstNode):
    """A literal value (number, string, bool, None)."""
    value: Any


@dataclass
class Symbol(AstNode):
    """A quoted symbol (e.g. ':auto')."""
    name: str


@dataclass
class Identifier(AstNode):
    """A variable or function name reference."""
    name: str


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Keyword(AstNode):
    """A name=value pair: a call keyword argument or a keyword parameter."""
    name: str
    value: AstNode


@dataclass
class Call(AstNode):
    """A call expression (e.g. rand(10), Dict(1 => 2))."""
    callee: AstNode
    arguments: List[AstNode] = field(default_factory=list)
    keywords: List[Keyword] = field(default_factory=list)


@dataclass
class Parameters(AstNode):
    """The keyword-parameter sub-list of a signature (after ';')."""
    keywords: List[Keyword] = field(default_factory=list)


@dataclass
class Param(AstNode):
    """A positional parameter with optional annotation and default."""
    name: str
    annotation: Optional[TypeRef] = None
    default: Optional[AstNode] = None


@dataclass
class TupleLiteral(AstNode):
    """A tuple (e.g. 'a --> b, :quiet' or '(x, y)')."""
    elements: List[AstNode] = field(default_factory=list)


@dataclass
class ListLiteral(AstNode):
    """A list literal."""
    elements: List[AstNode] = field(default_factory=list)


@dataclass
class Pair(AstNode):
    """An ordinary pair literal (e.g. '1 => 2'). Never rewritten."""
    key: AstNode
    value: AstNode


@dataclass
class Index(AstNode):
    """Index access (e.g. x[1])."""
    target: AstNode
    index: AstNode


@dataclass
class Attribute(AstNode):
    """Member access (e.g. t.data)."""
    target: AstNode
    name: str


@dataclass
class BinaryOp(AstNode):
    """A binary operation; operator is the Python spelling ('+', '==', 'and')."""
    operator: str
    left: AstNode
    right: AstNode


@dataclass
class UnaryOp(AstNode):
    """A unary operation ('-', 'not')."""
    operator: str
    operand: AstNode


@dataclass
class Conditional(AstNode):
    """A ternary conditional: then if condition else otherwise."""
    condition: AstNode
    then: AstNode
    otherwise: AstNode


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Assign(AstNode):
    """An assignment (e.g. n2 = n * 2, x[1] = 0). Evaluates to the value."""
    target: AstNode
    value: AstNode


@dataclass
class Block(AstNode):
    """A sequence of statements. Its value is the last statement's value."""
    statements: List[AstNode] = field(default_factory=list)


@dataclass
class If(AstNode):
    """An if/else; evaluates to the value of the branch taken."""
    condition: AstNode
    then_branch: Block
    else_branch: Optional[Block] = None


@dataclass
class For(AstNode):
    """A for loop; evaluates to None."""
    variable: str
    iterable: AstNode
    body: Block


# =============================================================================
# Recipe Nodes
# =============================================================================

@dataclass
class AttrSet(AstNode):
    """An attribute-set statement: 'key --> value'."""
    key: AstNode
    value: AstNode


@dataclass
class ForceSet(AstNode):
    """The force operator: 'key := value', equivalent to 'key --> value, :force'."""
    key: AstNode
    value: AstNode


@dataclass
class SeriesBlock(AstNode):
    """A nested '@series begin ... end' block producing its own record."""
    body: Block


@dataclass
class RecipeDefinition(AstNode):
    """A recipe: a call-form signature plus a statement block body."""
    signature: AstNode
    body: AstNode


# =============================================================================
# Generated Nodes
# =============================================================================

@dataclass
class MapSetDefault(AstNode):
    """Insert value under key unless present; evaluates to the stored value."""
    key: Symbol
    value: AstNode


@dataclass
class MapAssign(AstNode):
    """Unconditionally store value under key."""
    key: Symbol
    value: AstNode


@dataclass
class MapDelete(AstNode):
    """Remove key from the attribute map if present."""
    key: Symbol


@dataclass
class KeySupported(AstNode):
    """Ask the active backend whether key is supported."""
    key: Symbol


@dataclass
class UnsupportedKey(AstNode):
    """Fail the call: a required key is not supported by the backend."""
    key: Symbol


@dataclass
class ForkSeries(AstNode):
    """Evaluate body against a copy of the map and record a series."""
    body: Block


@dataclass
class CollectSeries(AstNode):
    """Evaluate body; unless it yields None, record it as the main series."""
    body: AstNode


@dataclass
class DebugTrace(AstNode):
    """Print the positional arguments when debugging is enabled."""
    arguments: List[Identifier] = field(default_factory=list)


@dataclass
class RecipeFunction(AstNode):
    """The generated function: (attributes, *parameters) -> [SeriesRecord]."""
    name: str
    type_params: List[TypeParam]
    parameters: List[Param]
    keywords: List[Keyword]
    body: Block


# =============================================================================
# Visitor Helpers
# =============================================================================

class PrintVisitor(AstVisitor):
    """Debug visitor that renders the tree structure."""

    def __init__(self, indent: int = 0, lines: Optional[List[str]] = None):
        self.indent = indent
        self.lines = lines if lines is not None else []

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self.indent + text)

    def generic_visit(self, node: AstNode) -> List[str]:
        self._emit(node.kind)
        for f in fields(node):
            if f.name == "span":
                continue
            value = getattr(node, f.name)
            if isinstance(value, AstNode):
                self._emit(f"  {f.name}:")
                value.accept(PrintVisitor(self.indent + 2, self.lines))
            elif isinstance(value, list):
                self._emit(f"  {f.name}: [")
                for item in value:
                    if isinstance(item, AstNode):
                        item.accept(PrintVisitor(self.indent + 2, self.lines))
                    else:
                        self._emit(f"    {item!r}")
                self._emit("  ]")
            else:
                self._emit(f"  {f.name}: {value!r}")
        return self.lines


def format_ast(node: AstNode) -> str:
    """Render a tree as indented text."""
    return "\n".join(node.accept(PrintVisitor()))


def print_ast(node: AstNode) -> None:
    """Print a tree for debugging."""
    print(format_ast(node))
