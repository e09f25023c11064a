import pytest
from hypothesis import given, strategies as st

from calcy.builtin import env_builtin
from calcy.errors import CalcySyntaxError
from calcy.debug_utils.pprint import pformat
from calcy.evaluation.context import EvaluationContext
from calcy.evaluation.evaluator import evaluate
from calcy.reader.parser import parse
from calcy.types.ast import List, Number, Symbol
from calcy.types.values import TRUE, NativeFunction


@pytest.fixture
def env():
    return env_builtin.standard_environment()


@pytest.mark.parametrize(
    "value, expected",
    [
        (Number(3), "3"),
        (Number(-3), "-3"),
        (Number(2.5), "2.5"),
        (Number(0.1 + 0.2), "0.30000000000000004"),
        (Symbol("x"), "x"),
        (List([]), "()"),
        (List([Symbol("a"), List([Number(1), Number(2)])]), "(a (1 2))"),
    ],
)
def test_pformat_nodes(value, expected):
    assert pformat(value) == expected


def test_pformat_closures(interp):
    assert pformat(interp.eval("(function (x y) (+ x y))")) == "(function (x y) (+ x y))"
    assert pformat(interp.eval("(lambda () 1)")) == "(function () 1)"
    assert pformat(interp.eval("(callByName (a) a)")) == "(callByName (a) a)"


def test_pformat_natives(env):
    assert pformat(env.lookup(Symbol("+"))) == "<native +>"


def test_pformat_thunks(make_interp):
    interp = make_interp("value", memoize=True)
    interp.eval("(define t (lazy (+ 1 2)))")
    thunk = interp.env.lookup(Symbol("t"))
    assert pformat(thunk) == "3"
    interp.eval("(define u (function () (lazy (* 2 2))))")
    pending = evaluate(parse("(u)"), EvaluationContext(interp.env, interp.config))
    assert pformat(pending) == "L(* 2 2)"


@given(st.integers(min_value=-10**12, max_value=10**12))
def test_integral_numbers_print_without_decimal_point(n):
    assert pformat(Number(n)) == str(n)


def test_print_outputs_and_returns_value(env, capsys):
    pr = env.lookup(Symbol("print"))
    assert isinstance(pr, NativeFunction)
    ret = pr(List([Symbol("alpha"), Number(42)]))
    assert capsys.readouterr().out == "(alpha 42)\n"
    assert ret == List([Symbol("alpha"), Number(42)])


def test_print_inside_expressions(interp, capsys):
    assert interp.eval("(+ 1 (print (* 2 3)))") == Number(7)
    assert capsys.readouterr().out == "6\n"


def test_natives_carry_signatures(env):
    minus = env.lookup(Symbol("-"))
    assert minus.arity == 2
    assert minus.kinds == ("number", "number")
    assert env.lookup(Symbol("print")).kinds == ("any",)
    assert env.lookup(Symbol("true")) == TRUE


def test_less_is_an_alias_of_lt(env):
    assert env.lookup(Symbol("less")).implementation is env.lookup(Symbol("<")).implementation


@pytest.mark.parametrize("signature", ["(+ :number :complex)", "(+ number)", ":number", "(1 :any)"])
def test_malformed_native_signatures(signature):
    with pytest.raises(CalcySyntaxError):
        env_builtin.native_from_signature(signature, lambda *a: None)


def test_pformat_typed_closures(interp):
    closure = interp.eval("(function (f:function x) (f x))")
    assert pformat(closure) == "(function (f:function x) (f x))"
