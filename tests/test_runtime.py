"""
Tests for the recipe runtime (values, backends, context, builtins, interpreter).
"""

import numpy as np
import pytest

from plotrecipes import (
    AnyKeyBackend, AttributeMap, KeySetBackend, RecipeEvaluationError,
    SeriesRecord, SymbolValue, ValueKind, backend_name, compile_recipe,
    current_backend, debug, is_debug_enabled, is_key_supported, set_backend,
    use_backend, value_kind, wrap_tuple,
)
from plotrecipes.build import (
    assign, attr, binop, call, define, for_, ident, if_, index, lit, lst,
    member, nothing, pair, param, signature, sym, tup, unop,
)
from plotrecipes.runtime import (
    ExecutionContext, Interpreter, Scope, create_context, get_builtin_registry,
    lookup_builtin,
)
from plotrecipes.ast import Block, CollectSeries, Literal, Param, RecipeFunction


# --- Value Tests ---

class TestValues:
    """Test runtime values."""

    def test_symbol_is_str(self):
        """Test that symbols compare equal to their names."""
        s = SymbolValue("auto")
        assert s == "auto"
        assert repr(s) == ":auto"

    def test_value_kind(self):
        assert value_kind(SymbolValue("red")) == ValueKind.SYMBOLIC
        assert value_kind("red") == ValueKind.TEXT
        assert value_kind(2.5) == ValueKind.NUMERIC
        assert value_kind(True) == ValueKind.OTHER
        assert value_kind([1]) == ValueKind.OTHER

    def test_get_or_insert(self):
        """Test that existing values win over defaults."""
        attributes = AttributeMap(linecolor="black")
        assert attributes.get_or_insert("linecolor", "red") == "black"
        assert attributes.get_or_insert("fillcolor", "green") == "green"
        assert attributes["fillcolor"] == "green"

    def test_copy_independent(self):
        """Test that copies are independent maps of the same type."""
        attributes = AttributeMap(a=1)
        other = attributes.copy()
        other["b"] = 2
        assert isinstance(other, AttributeMap)
        assert "b" not in attributes

    def test_kinds(self):
        attributes = AttributeMap(a=1, b=SymbolValue("x"))
        assert attributes.kinds() == {"a": ValueKind.NUMERIC, "b": ValueKind.SYMBOLIC}

    def test_wrap_tuple(self):
        """Test result normalisation."""
        assert wrap_tuple((1, 2)) == (1, 2)
        assert wrap_tuple(3) == (3,)
        assert wrap_tuple(None) == (None,)

    def test_series_record_frozen(self):
        record = SeriesRecord(AttributeMap(), (1,))
        with pytest.raises(Exception):
            record.args = (2,)


# --- Backend Tests ---

class TestBackends:
    """Test backend capability queries."""

    def test_default_accepts_everything(self):
        assert isinstance(current_backend(), AnyKeyBackend)
        assert is_key_supported("anything")
        assert backend_name() == "any"

    def test_key_set_backend(self):
        backend = KeySetBackend("svg", ["linecolor"])
        assert backend.is_key_supported("linecolor")
        assert not backend.is_key_supported("markershape")

    def test_set_backend_returns_previous(self):
        backend = KeySetBackend("svg", [])
        previous = set_backend(backend)
        assert isinstance(previous, AnyKeyBackend)
        assert current_backend() is backend

    def test_use_backend_restores(self):
        """Test that the context manager restores the previous backend."""
        before = current_backend()
        with use_backend(KeySetBackend("svg", [])):
            assert backend_name() == "svg"
            assert not is_key_supported("linecolor")
        assert current_backend() is before


# --- Debug Switch ---

class TestDebugSwitch:
    """Test the process-wide tracing flag."""

    def test_toggle(self):
        assert not is_debug_enabled()
        debug()
        assert is_debug_enabled()
        debug(False)
        assert not is_debug_enabled()


# --- Context Tests ---

class TestContext:
    """Test scopes and execution context."""

    def test_scope_chain(self):
        """Test lookup through parent scopes."""
        parent = Scope(name="outer")
        parent.set("x", 1)
        child = Scope(parent=parent)
        assert child.lookup("x") == 1
        assert child.contains("x")
        assert not child.contains("y")
        with pytest.raises(KeyError):
            child.lookup("y")

    def test_scope_update(self):
        """Test that update rebinds in the defining scope."""
        parent = Scope()
        parent.set("x", 1)
        child = Scope(parent=parent)
        assert child.update("x", 5)
        assert parent.variables["x"] == 5
        assert not child.update("missing", 1)

    def test_create_context(self):
        """Test that the map and parameters are bound."""
        attributes = AttributeMap()
        ctx = create_context("f", attributes, {"t": 3})
        assert ctx.attributes is attributes
        assert ctx.get_variable("t") == 3
        assert isinstance(ctx.backend, AnyKeyBackend)

    def test_new_scope_restores(self):
        ctx = create_context("f", AttributeMap(), {})
        outer = ctx.current_scope
        with ctx.new_scope("series"):
            ctx.set_variable("y", 1)
            assert ctx.get_variable("y") == 1
        assert ctx.current_scope is outer
        assert ctx.get_variable("y", None) is None

    def test_add_series(self):
        ctx = ExecutionContext()
        record = ctx.add_series(AttributeMap(a=1), (2,))
        assert ctx.series_list == [record]


# --- Builtin Tests ---

class TestBuiltins:
    """Test functions available to recipe bodies."""

    def test_rand_shape(self):
        assert lookup_builtin("rand")(10).shape == (10,)
        assert lookup_builtin("rand")(10, 3).shape == (10, 3)

    def test_dict_from_pairs(self):
        assert lookup_builtin("Dict")((1, 2), (3, 4)) == {1: 2, 3: 4}

    def test_error_raises(self):
        with pytest.raises(RecipeEvaluationError) as exc:
            lookup_builtin("error")("bad ", "input")
        assert exc.value.code == "E504"
        assert exc.value.diagnostic.message == "bad input"

    def test_unknown(self):
        assert lookup_builtin("no_such_function") is None

    def test_registry_names(self):
        names = get_builtin_registry().names()
        assert "linspace" in names
        assert names == sorted(names)


# --- Interpreter Tests ---

def run(*statements, args=(0,), params=("x",), attributes=None):
    generated = compile_recipe(define(signature("f", *params), *statements))
    return generated(AttributeMap() if attributes is None else attributes, *args)


class TestInterpreter:
    """Test evaluation of recipe bodies."""

    def test_loop_and_branch(self):
        """Test assignment, loops and conditionals."""
        statements = (
            assign("total", 0),
            for_("i", call("range", ident("n")), assign("total", binop("+", ident("total"), ident("i")))),
            if_(binop(">", ident("total"), 5), [tup(ident("total"), "big")], [tup(ident("total"), "small")]),
        )
        assert run(*statements, args=(4,), params=("n",))[0].args == (6, "big")
        assert run(*statements, args=(3,), params=("n",))[0].args == (3, "small")

    def test_symbols_evaluate_to_symbol_values(self):
        [record] = run(sym("auto"))
        assert isinstance(record.args[0], SymbolValue)
        assert record.args[0] == "auto"

    def test_containers(self):
        """Test list, index, pair and member access."""
        [record] = run(
            assign("xs", lst(1, 2, 3)),
            tup(index(ident("xs"), 1), pair("a", 1), member(lit(2.5), "real"), unop("-", 4)),
        )
        assert record.args == (2, ("a", 1), 2.5, -4)

    def test_short_circuit(self):
        """Test that 'and' does not evaluate its right side when false."""
        [record] = run(binop("and", False, call("error", "evaluated")))
        assert record.args == (False,)

    def test_plotattributes_visible(self):
        """Test that the attribute map is reachable by name."""
        [record] = run(
            attr("linecolor", sym("red")),
            index(ident("plotattributes"), "linecolor"),
        )
        assert record.args == ("red",)

    def test_namespace_callables(self):
        """Test calling functions supplied through the namespace."""
        generated = compile_recipe(
            define(signature("f", "x"), call("double", ident("x"))),
            namespace={"double": lambda v: v * 2},
        )
        assert generated(AttributeMap(), 21)[0].args == (42,)

    def test_numpy_results(self):
        [record] = run(call("linspace", 0, 1, 5))
        np.testing.assert_allclose(record.args[0], [0, 0.25, 0.5, 0.75, 1])

    def test_parameter_default(self):
        """Test that missing trailing arguments use their defaults."""
        generated = compile_recipe(define(signature("f", "x", param("n", default=lit(3))), ident("n")))
        assert generated(AttributeMap(), "t")[0].args == (3,)
        assert generated(AttributeMap(), "t", 7)[0].args == (7,)

    def test_arity_checked(self):
        generated = compile_recipe(define(signature("f", "x"), nothing()))
        with pytest.raises(RecipeEvaluationError) as exc:
            generated(AttributeMap(), 1, 2)
        assert exc.value.code == "E505"

    def test_undefined_name(self):
        with pytest.raises(RecipeEvaluationError) as exc:
            run(ident("nowhere"))
        assert exc.value.code == "E501"

    def test_statement_inside_call_not_evaluable(self):
        """Test that an attribute statement left inside a call cannot run."""
        with pytest.raises(RecipeEvaluationError) as exc:
            run(call("tuple", attr("x", 1)))
        assert exc.value.code == "E503"

    def test_unresolved_type(self):
        """Test that unknown annotation names fail at compile time."""
        with pytest.raises(RecipeEvaluationError) as exc:
            compile_recipe(define(signature("f", param("t", "Unknown")), nothing()))
        assert exc.value.code == "E502"

    def test_backend_argument(self):
        """Test that an explicit backend overrides the active one."""
        generated = compile_recipe(define(signature("f", "x"), attr("a", 1, "quiet"), nothing()))
        attributes = AttributeMap()
        generated(attributes, 0, backend=KeySetBackend("svg", []))
        assert attributes == {}

    def test_missing_argument_without_default(self):
        """Test that an unfilled parameter with no default is an arity error."""
        function = RecipeFunction(
            name="apply_recipe",
            type_params=[],
            parameters=[Param("a", default=Literal(1)), Param("b")],
            keywords=[],
            body=Block([CollectSeries(Block([Literal(1)]))]),
        )
        generated = Interpreter().compile(function)
        with pytest.raises(RecipeEvaluationError) as exc:
            generated(AttributeMap(), 5)
        assert exc.value.code == "E505"
        assert "'b'" in exc.value.diagnostic.message

    def test_defaults_go_through_get_or_insert(self):
        """Test that unflagged statements use the map's get_or_insert."""
        class RecordingMap(AttributeMap):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                self.inserted = []

            def get_or_insert(self, key, default):
                self.inserted.append(key)
                return super().get_or_insert(key, default)

        attributes = RecordingMap(xrotation=1)
        run(attr("xrotation", 5), attr("yrotation", 6), nothing(), attributes=attributes)
        assert attributes.inserted == ["xrotation", "yrotation"]
        assert attributes == {"xrotation": 1, "yrotation": 6}

    def test_plain_dict_map(self):
        """Test that a plain dict works as the attribute map."""
        attributes = {}
        run(attr("xrotation", 5), nothing(), attributes=attributes)
        assert attributes == {"xrotation": 5}
