"""Rule dispatcher: maps AST shapes to the handlers that evaluate them.

Rules are registered as (pattern, handler) pairs, where a pattern is written
in the language's own s-expression syntax and read with the ordinary reader:

    :number                 a bare atom of the given kind (:symbol, :any, ...)
    (define :symbol :any)   exact head symbol, one kind per argument position
    (print :any ...)        trailing `...` makes the rule variadic
    (:symbol ...)           a list whose head node has the given kind
    (:any ...)              catch-all application

Argument kinds are `number`, `symbol`, `list`, `any` and `list<kind>` (a list
whose every element has `kind`). A position may carry a descriptive name
before the colon (`name:symbol`); only the kind is used.

Matching priority, highest first: exact head symbol, typed list head, bare
atom kind, catch-all. The dispatcher checks arity and per-position kinds
before a handler runs, so handlers can destructure their node without
re-validating it.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from calcy import EvaluatorFn, Node, Value
from calcy.errors import CalcyArityError, CalcyRuntimeError, CalcySyntaxError, CalcyTypeError
from calcy.types.ast import List, Symbol, node_kind
from calcy.reader.parser import parse as read_pattern
from calcy.debug_utils.pprint import pformat

logger = logging.getLogger(__name__)

Handler = Callable[[Node, "EvaluationContext", EvaluatorFn], Value]

BASE_KINDS = ("number", "symbol", "list", "any")
VARIADIC = Symbol("...")


def split_kind(kind: str) -> tuple[str, Optional[str]]:
    """'list<symbol>' -> ('list', 'symbol'); 'number' -> ('number', None)."""
    if kind.endswith(">") and "<" in kind:
        outer, inner = kind[:-1].split("<", 1)
        return outer, inner
    return kind, None


def is_valid_kind(kind: str) -> bool:
    outer, inner = split_kind(kind)
    if inner is None:
        return outer in BASE_KINDS
    return outer == "list" and is_valid_kind(inner)


def node_matches(kind: str, node: object) -> bool:
    """True when `node` is an AST node of the declared `kind`."""
    outer, inner = split_kind(kind)
    if outer == "any":
        return node_kind(node) is not None
    if node_kind(node) != outer:
        return False
    if inner is None:
        return True
    return all(node_matches(inner, item) for item in node)


def expectation_error(name: str, position: int, kind: str, actual: object) -> CalcyTypeError:
    return CalcyTypeError(
        f'"{name}" expects {kind} as the {position} argument, instead got "{pformat(actual)}"'
    )


def check_arity(name: str, expected: int, actual: int, variadic: bool = False) -> None:
    if variadic:
        if actual < expected:
            raise CalcyArityError(
                f'"{name}" expects at least {expected} arguments, instead got {actual}'
            )
    elif actual != expected:
        raise CalcyArityError(f'"{name}" expects {expected} arguments, instead got {actual}')


def _kind_of_token(token: Node, pattern_text: str) -> str:
    if not isinstance(token, Symbol) or ":" not in token.id:
        raise CalcySyntaxError(f"Malformed rule pattern {pattern_text!r}: {pformat(token)}")
    kind = token.id.split(":", 1)[1]
    if not is_valid_kind(kind):
        raise CalcySyntaxError(f"Unknown kind {kind!r} in rule pattern {pattern_text!r}")
    return kind


class Pattern:
    """A parsed rule pattern."""

    __slots__ = ("text", "head", "head_kind", "atom_kind", "kinds", "variadic")

    def __init__(
        self,
        text: str,
        head: Optional[Symbol] = None,
        head_kind: Optional[str] = None,
        atom_kind: Optional[str] = None,
        kinds: tuple[str, ...] = (),
        variadic: bool = False,
    ):
        self.text = text
        self.head = head
        self.head_kind = head_kind
        self.atom_kind = atom_kind
        self.kinds = kinds
        self.variadic = variadic

    @classmethod
    def parse(cls, text: str) -> Pattern:
        node = read_pattern(text)
        if not isinstance(node, List):
            return cls(text, atom_kind=_kind_of_token(node, text))
        if not node.items:
            raise CalcySyntaxError(f"Empty rule pattern {text!r}")
        head, *rest = node.items
        variadic = bool(rest) and rest[-1] == VARIADIC
        if variadic:
            rest = rest[:-1]
        kinds = tuple(_kind_of_token(tok, text) for tok in rest)
        if isinstance(head, Symbol) and head.id.startswith(":"):
            return cls(text, head_kind=_kind_of_token(head, text), kinds=kinds, variadic=variadic)
        if not isinstance(head, Symbol):
            raise CalcySyntaxError(f"Rule pattern {text!r} must start with a symbol")
        return cls(text, head=head, kinds=kinds, variadic=variadic)

    def __repr__(self):
        return f"Pattern({self.text!r})"


class Rule:
    __slots__ = ("pattern", "handler")

    def __init__(self, pattern: Pattern, handler: Handler):
        self.pattern = pattern
        self.handler = handler

    def validate(self, node: Node) -> None:
        """Check arity and per-position kinds of a list node against the pattern."""
        pattern = self.pattern
        if not isinstance(node, List):
            return
        name = str(pattern.head) if pattern.head is not None else pformat(node.head)
        args = node.args
        check_arity(name, len(pattern.kinds), len(args), pattern.variadic)
        for position, (kind, arg) in enumerate(zip(pattern.kinds, args), start=1):
            if not node_matches(kind, arg):
                raise expectation_error(name, position, kind, arg)

    def __repr__(self):
        return f"Rule({self.pattern.text!r}, {getattr(self.handler, '__name__', self.handler)!r})"


class RuleDispatcher:
    """Static table of rules, built once and consulted for every list or atom."""

    def __init__(self, rules: Iterable[tuple[str, Handler]] = ()):
        self._symbol_rules: dict[Symbol, Rule] = {}
        self._list_types: dict[str, Rule] = {}
        self._atom_types: dict[str, Rule] = {}
        for text, handler in rules:
            self.register(text, handler)
        logger.debug(
            "Rule dispatcher built: operators=%s list types=%s atom types=%s",
            [str(s) for s in self._symbol_rules],
            list(self._list_types),
            list(self._atom_types),
        )

    def register(self, text: str, handler: Handler) -> Rule:
        pattern = Pattern.parse(text)
        rule = Rule(pattern, handler)
        if pattern.head is not None:
            table, key = self._symbol_rules, pattern.head
        elif pattern.head_kind is not None:
            table, key = self._list_types, pattern.head_kind
        else:
            table, key = self._atom_types, pattern.atom_kind
        if key in table:
            raise CalcySyntaxError(f"Rule {text!r} conflicts with {table[key].pattern.text!r}")
        table[key] = rule
        return rule

    @property
    def operators(self) -> tuple[Symbol, ...]:
        """Exact head symbols handled by the table; these are reserved keywords."""
        return tuple(self._symbol_rules)

    def match(self, node: Node) -> Rule:
        rule: Optional[Rule]
        if isinstance(node, List):
            head = node.head
            rule = None
            if head is not None:
                if isinstance(head, Symbol):
                    rule = self._symbol_rules.get(head)
                if rule is None:
                    rule = self._list_types.get(node_kind(head)) or self._list_types.get("any")
        else:
            rule = self._atom_types.get(node_kind(node)) or self._atom_types.get("any")
        if rule is None:
            raise CalcyRuntimeError(f'No rule to evaluate "{pformat(node)}"')
        return rule

    def dispatch(self, node: Node, ctx, evaluate_fn: EvaluatorFn) -> Value:
        rule = self.match(node)
        rule.validate(node)
        return rule.handler(node, ctx, evaluate_fn)
