import pytest

from calcy.config import EvaluatorConfig
from calcy.errors import CalcyArityError, CalcyRuntimeError, CalcySyntaxError, CalcyTypeError
from calcy.evaluation.context import EvaluationContext
from calcy.evaluation.dispatcher import Pattern, RuleDispatcher, node_matches
from calcy.evaluation.special_forms import DISPATCHER, RULES
from calcy.reader.parser import parse
from calcy.types.ast import Symbol
from calcy.types.environment import Environment


def tag(name):
    def handler(node, ctx, evaluate_fn):
        return name
    handler.__name__ = name
    return handler


@pytest.fixture
def dispatcher():
    return RuleDispatcher(
        [
            (":number", tag("number")),
            (":any", tag("atom")),
            ("(define :symbol :any)", tag("define")),
            ("(print :any ...)", tag("print")),
            ("(:number ...)", tag("number-head")),
            ("(:any ...)", tag("apply")),
        ]
    )


@pytest.fixture
def ctx():
    return EvaluationContext(Environment(), EvaluatorConfig())


def dispatch(dispatcher, source, ctx):
    return dispatcher.dispatch(parse(source), ctx, None)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("1", "number"),
        ("x", "atom"),
        ("(define x 1)", "define"),
        ("(print 1 2 3)", "print"),
        ("(1 2)", "number-head"),
        ("(f 2)", "apply"),
        ("((f) 2)", "apply"),
    ],
)
def test_matching_priority(dispatcher, ctx, source, expected):
    assert dispatch(dispatcher, source, ctx) == expected


def test_exact_head_beats_typed_head(ctx):
    d = RuleDispatcher([("(:symbol ...)", tag("symbol-head")), ("(quote :any)", tag("quote"))])
    assert dispatch(d, "(quote x)", ctx) == "quote"
    assert dispatch(d, "(other x)", ctx) == "symbol-head"


def test_fixed_arity_is_checked(dispatcher, ctx):
    with pytest.raises(CalcyArityError) as excinfo:
        dispatch(dispatcher, "(define x 1 2)", ctx)
    assert str(excinfo.value) == '"define" expects 2 arguments, instead got 3'


def test_variadic_minimum_is_checked(dispatcher, ctx):
    with pytest.raises(CalcyArityError, match="at least 1 arguments, instead got 0"):
        dispatch(dispatcher, "(print)", ctx)


def test_argument_kind_is_checked(dispatcher, ctx):
    with pytest.raises(CalcyTypeError) as excinfo:
        dispatch(dispatcher, "(define (a b) 1)", ctx)
    assert str(excinfo.value) == '"define" expects symbol as the 1 argument, instead got "(a b)"'


def test_no_matching_rule():
    d = RuleDispatcher([(":number", tag("number"))])
    ctx = EvaluationContext(Environment(), EvaluatorConfig())
    with pytest.raises(CalcyRuntimeError, match='No rule to evaluate "x"'):
        dispatch(d, "x", ctx)
    with pytest.raises(CalcyRuntimeError, match=r'No rule to evaluate "\(\)"'):
        dispatch(d, "()", ctx)


def test_conflicting_rules_are_rejected():
    with pytest.raises(CalcySyntaxError, match="conflicts"):
        RuleDispatcher([("(if :any :any :any)", tag("a")), ("(if :any)", tag("b"))])


@pytest.mark.parametrize(
    "text",
    ["(define symbol :any)", "(define :float)", "()", "(1 :any)", "number"],
)
def test_malformed_patterns(text):
    with pytest.raises(CalcySyntaxError):
        Pattern.parse(text)


def test_pattern_parts():
    p = Pattern.parse("(function params:list<symbol> body:any)")
    assert p.head == Symbol("function")
    assert p.kinds == ("list<symbol>", "any")
    assert not p.variadic
    p = Pattern.parse("(:any ...)")
    assert p.head is None and p.head_kind == "any" and p.variadic
    assert Pattern.parse(":symbol").atom_kind == "symbol"


@pytest.mark.parametrize(
    "kind, source, expected",
    [
        ("number", "1", True),
        ("number", "x", False),
        ("symbol", "x", True),
        ("list", "(1 x)", True),
        ("list", "x", False),
        ("list<symbol>", "(x y)", True),
        ("list<symbol>", "()", True),
        ("list<symbol>", "(x 1)", False),
        ("list<list<number>>", "((1) (2 3))", True),
        ("any", "(anything 1)", True),
    ],
)
def test_node_matches(kind, source, expected):
    assert node_matches(kind, parse(source)) is expected


def test_builtin_operators_are_the_exact_head_rules():
    names = {str(s) for s in DISPATCHER.operators}
    assert names == {"define", "function", "lambda", "callByName", "if", "quote", "eval", "lazy"}
    assert len(RULES) == len(names) + 3
