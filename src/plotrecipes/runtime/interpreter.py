"""
Tree-walking interpreter for generated recipe functions.

Compiles a RecipeFunction tree into a Python callable and evaluates recipe
bodies node by node.
"""

import operator
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .values import AttributeMap, SeriesRecord, Symbol as SymbolValue, wrap_tuple
from .context import ATTRIBUTES_NAME, ExecutionContext, create_context
from .builtins import lookup_builtin
from .backend import Backend
from .tracing import is_debug_enabled

from ..ast import (
    AstNode, Assign, Attribute, BinaryOp, Block, Call, CollectSeries,
    Conditional, DebugTrace, For, ForkSeries, Identifier, If, Index,
    KeySupported, Literal, ListLiteral, MapAssign, MapDelete, MapSetDefault,
    Pair, RecipeFunction, Symbol, TupleLiteral, UnaryOp,
    UnsupportedKey,
)
from ..errors import (
    RecipeEvaluationError, Diagnostic, ErrorSeverity,
    error_undefined_name, error_unexpected_node, error_unsupported_key,
)
from ..signature import parameter_name, required_count

_MISSING = object()

BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "//": operator.floordiv,
    "%": operator.mod,
    "**": operator.pow,
    "^": operator.pow,
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
    "in": lambda a, b: a in b,
}

UNARY_OPERATORS: Dict[str, Callable[[Any], Any]] = {
    "-": operator.neg,
    "+": operator.pos,
    "not": operator.not_,
    "!": operator.not_,
}


def _arity_error(name: str, message: str) -> RecipeEvaluationError:
    diag = Diagnostic(
        code="E505",
        message=f"{name}: {message}",
        severity=ErrorSeverity.ERROR,
    )
    return RecipeEvaluationError(diag)


class GeneratedRecipe:
    """
    A compiled recipe function.

    Call it with an attribute map and the recipe's positional arguments; it
    returns the ordered list of SeriesRecords.
    """

    def __init__(
        self,
        function: RecipeFunction,
        interpreter: "Interpreter",
        namespace: Optional[Dict[str, Any]] = None,
    ):
        from ..assembler import dispatch_key

        self.function = function
        self.interpreter = interpreter
        self.namespace = dict(namespace or {})
        self.dispatch_types: Tuple[type, ...] = dispatch_key(function, self.namespace)

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def parameter_names(self) -> List[str]:
        return [parameter_name(p, i) for i, p in enumerate(self.function.parameters)]

    @property
    def keyword_names(self) -> List[str]:
        return [kw.name for kw in self.function.keywords]

    @property
    def required_count(self) -> int:
        return required_count(self.function.parameters)

    def __call__(self, attributes: AttributeMap, *args: Any,
                 backend: Optional[Backend] = None) -> List[SeriesRecord]:
        return self.interpreter.run(self, attributes, args, backend)

    def __repr__(self) -> str:
        types = ", ".join(t.__name__ for t in self.dispatch_types)
        return f"<GeneratedRecipe {self.name}({types})>"


class Interpreter:
    """
    Tree-walking interpreter for generated recipe functions.

    Evaluates nodes by dispatching to type-specific methods.
    """

    def __init__(self):
        self._evaluators: Dict[type, Callable[[Any, ExecutionContext], Any]] = {
            Literal: self._eval_literal,
            Symbol: self._eval_symbol,
            Identifier: self._eval_identifier,
            Call: self._eval_call,
            TupleLiteral: self._eval_tuple,
            ListLiteral: self._eval_list,
            Pair: self._eval_pair,
            Index: self._eval_index,
            Attribute: self._eval_attribute,
            BinaryOp: self._eval_binary_op,
            UnaryOp: self._eval_unary_op,
            Conditional: self._eval_conditional,
            Assign: self._eval_assign,
            Block: self._eval_block,
            If: self._eval_if,
            For: self._eval_for,
            MapSetDefault: self._eval_map_set_default,
            MapAssign: self._eval_map_assign,
            MapDelete: self._eval_map_delete,
            KeySupported: self._eval_key_supported,
            UnsupportedKey: self._eval_unsupported_key,
            ForkSeries: self._eval_fork_series,
            CollectSeries: self._eval_collect_series,
            DebugTrace: self._eval_debug_trace,
        }

    def compile(self, function: RecipeFunction,
                namespace: Optional[Dict[str, Any]] = None) -> GeneratedRecipe:
        """Turn a generated function tree into a callable."""
        return GeneratedRecipe(function, self, namespace)

    def run(
        self,
        recipe: GeneratedRecipe,
        attributes: AttributeMap,
        args: Sequence[Any],
        backend: Optional[Backend] = None,
    ) -> List[SeriesRecord]:
        """
        Execute a compiled recipe.

        Args:
            recipe: The compiled recipe
            attributes: Attribute map, mutated in place
            args: Positional arguments
            backend: Backend for support queries (defaults to the active one)

        Returns:
            SeriesRecords in evaluation order, main series last
        """
        function = recipe.function
        params = function.parameters
        if len(args) > len(params):
            raise _arity_error(recipe.name, f"expected at most {len(params)} arguments, got {len(args)}")
        if len(args) < recipe.required_count:
            raise _arity_error(recipe.name, f"expected at least {recipe.required_count} arguments, got {len(args)}")

        ctx = create_context(recipe.name, attributes, {}, recipe.namespace, backend)
        for index, param in enumerate(params):
            if index < len(args):
                value = args[index]
            elif param.default is None:
                raise _arity_error(recipe.name, f"missing argument '{parameter_name(param, index)}'")
            else:
                value = self.evaluate(param.default, ctx)
            ctx.set_variable(parameter_name(param, index), value)

        self.evaluate(function.body, ctx)
        return ctx.series_list

    def evaluate(self, node: AstNode, ctx: ExecutionContext) -> Any:
        """Evaluate a node to a Python value."""
        evaluator = self._evaluators.get(type(node))
        if evaluator is None:
            raise error_unexpected_node(node.kind, node.span)
        return evaluator(node, ctx)

    # --- Leaves ---

    def _eval_literal(self, node: Literal, ctx: ExecutionContext) -> Any:
        return node.value

    def _eval_symbol(self, node: Symbol, ctx: ExecutionContext) -> Any:
        return SymbolValue(node.name)

    def _eval_identifier(self, node: Identifier, ctx: ExecutionContext) -> Any:
        return self._resolve_name(node.name, ctx, node)

    def _resolve_name(self, name: str, ctx: ExecutionContext, node: AstNode) -> Any:
        value = ctx.get_variable(name, _MISSING)
        if value is not _MISSING:
            return value
        if name in ctx.namespace:
            return ctx.namespace[name]
        builtin = lookup_builtin(name)
        if builtin is not None:
            return builtin
        raise error_undefined_name(name, node.span)

    # --- Expressions ---

    def _eval_call(self, node: Call, ctx: ExecutionContext) -> Any:
        func = self.evaluate(node.callee, ctx)
        args = [self.evaluate(arg, ctx) for arg in node.arguments]
        kwargs = {kw.name: self.evaluate(kw.value, ctx) for kw in node.keywords}
        return func(*args, **kwargs)

    def _eval_tuple(self, node: TupleLiteral, ctx: ExecutionContext) -> Any:
        return tuple(self.evaluate(e, ctx) for e in node.elements)

    def _eval_list(self, node: ListLiteral, ctx: ExecutionContext) -> Any:
        return [self.evaluate(e, ctx) for e in node.elements]

    def _eval_pair(self, node: Pair, ctx: ExecutionContext) -> Any:
        return (self.evaluate(node.key, ctx), self.evaluate(node.value, ctx))

    def _eval_index(self, node: Index, ctx: ExecutionContext) -> Any:
        return self.evaluate(node.target, ctx)[self.evaluate(node.index, ctx)]

    def _eval_attribute(self, node: Attribute, ctx: ExecutionContext) -> Any:
        return getattr(self.evaluate(node.target, ctx), node.name)

    def _eval_binary_op(self, node: BinaryOp, ctx: ExecutionContext) -> Any:
        # Short-circuit for logical operators
        if node.operator in ("and", "&&"):
            left = self.evaluate(node.left, ctx)
            return left and self.evaluate(node.right, ctx)
        if node.operator in ("or", "||"):
            left = self.evaluate(node.left, ctx)
            return left or self.evaluate(node.right, ctx)
        func = BINARY_OPERATORS.get(node.operator)
        if func is None:
            raise error_unexpected_node(f"operator '{node.operator}'", node.span)
        return func(self.evaluate(node.left, ctx), self.evaluate(node.right, ctx))

    def _eval_unary_op(self, node: UnaryOp, ctx: ExecutionContext) -> Any:
        func = UNARY_OPERATORS.get(node.operator)
        if func is None:
            raise error_unexpected_node(f"operator '{node.operator}'", node.span)
        return func(self.evaluate(node.operand, ctx))

    def _eval_conditional(self, node: Conditional, ctx: ExecutionContext) -> Any:
        if self.evaluate(node.condition, ctx):
            return self.evaluate(node.then, ctx)
        return self.evaluate(node.otherwise, ctx)

    # --- Statements ---

    def _eval_assign(self, node: Assign, ctx: ExecutionContext) -> Any:
        value = self.evaluate(node.value, ctx)
        target = node.target
        if isinstance(target, Identifier):
            ctx.assign_variable(target.name, value)
        elif isinstance(target, Index):
            self.evaluate(target.target, ctx)[self.evaluate(target.index, ctx)] = value
        elif isinstance(target, Attribute):
            setattr(self.evaluate(target.target, ctx), target.name, value)
        else:
            raise error_unexpected_node(f"assignment to {target.kind}", node.span)
        return value

    def _eval_block(self, node: Block, ctx: ExecutionContext) -> Any:
        result = None
        for stmt in node.statements:
            result = self.evaluate(stmt, ctx)
        return result

    def _eval_if(self, node: If, ctx: ExecutionContext) -> Any:
        if self.evaluate(node.condition, ctx):
            return self.evaluate(node.then_branch, ctx)
        if node.else_branch is not None:
            return self.evaluate(node.else_branch, ctx)
        return None

    def _eval_for(self, node: For, ctx: ExecutionContext) -> Any:
        iterable = self.evaluate(node.iterable, ctx)
        for item in iterable:
            with ctx.new_scope("for-loop"):
                ctx.set_variable(node.variable, item)
                self.evaluate(node.body, ctx)
        return None

    # --- Generated nodes ---

    def _eval_map_set_default(self, node: MapSetDefault, ctx: ExecutionContext) -> Any:
        value = self.evaluate(node.value, ctx)
        attributes = ctx.attributes
        if isinstance(attributes, AttributeMap):
            return attributes.get_or_insert(node.key.name, value)
        return attributes.setdefault(node.key.name, value)

    def _eval_map_assign(self, node: MapAssign, ctx: ExecutionContext) -> Any:
        value = self.evaluate(node.value, ctx)
        ctx.attributes[node.key.name] = value
        return value

    def _eval_map_delete(self, node: MapDelete, ctx: ExecutionContext) -> Any:
        ctx.attributes.pop(node.key.name, None)
        return None

    def _eval_key_supported(self, node: KeySupported, ctx: ExecutionContext) -> Any:
        return bool(ctx.backend.is_key_supported(node.key.name))

    def _eval_unsupported_key(self, node: UnsupportedKey, ctx: ExecutionContext) -> Any:
        raise error_unsupported_key(node.key.name, ctx.backend.name, node.span)

    def _eval_fork_series(self, node: ForkSeries, ctx: ExecutionContext) -> Any:
        with ctx.new_scope("series"):
            ctx.set_variable(ATTRIBUTES_NAME, AttributeMap(ctx.attributes))
            value = self.evaluate(node.body, ctx)
            ctx.add_series(ctx.attributes, wrap_tuple(value))
        return None

    def _eval_collect_series(self, node: CollectSeries, ctx: ExecutionContext) -> Any:
        value = self.evaluate(node.body, ctx)
        if value is not None:
            ctx.add_series(ctx.attributes, wrap_tuple(value))
        return None

    def _eval_debug_trace(self, node: DebugTrace, ctx: ExecutionContext) -> Any:
        if is_debug_enabled():
            args = tuple(self._resolve_name(a.name, ctx, a) for a in node.arguments)
            print(f"apply_recipe args: {args!r}")
        return None

