"""
  calcy Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits the immutable node classes from calcy.types.ast:

    - numbers -> Number (always a float)
    - symbols -> Symbol
    - lists   -> List
    - `;` starts a comment running to the end of the line
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from calcy.errors import CalcySyntaxError
from calcy.types.ast import List, Node, Number, Symbol


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<atom>[^\s();]+)"  # numbers and symbols
    r")",
    re.DOTALL,
)

# Plain decimal notation only; `inf` and `nan` stay symbols.
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            # only trailing whitespace is left
            break
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in ("lparen", "rparen", "atom"):
            if m.group(nm):
                yield nm, m.group(nm)
                break


def read_atom(token: str) -> Node:
    if NUMBER_RE.fullmatch(token):
        return Number(float(token))
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []
        self.last: Optional[str] = None

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            tok = self.buffer.pop(0)
        else:
            tok = next(self.tokens, (None, None))
        if tok[1] is not None:
            self.last = tok[1]
        return tok

    def at_end(self) -> bool:
        return self.peek()[0] is None

    def parse_expr(self) -> Node:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise CalcySyntaxError("Unexpected end of input")
        if tok_type == "rparen":
            raise CalcySyntaxError('Unexpected ")"')
        if tok_type == "atom":
            return read_atom(tok_val)

        # List
        items = []
        while True:
            nxt, _ = self.peek()
            if nxt is None:
                raise CalcySyntaxError('Expected ")" at the end of the input')
            if nxt == "rparen":
                self.advance()
                return List(items)
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[Node]:
        while not self.at_end():
            yield self.parse_expr()


def parse(source: str) -> Node:
    """Read exactly one top-level form; anything after it is an error."""
    stream = TokenStream(lex(source))
    expr = stream.parse_expr()
    if not stream.at_end():
        _, extra = stream.peek()
        raise CalcySyntaxError(f'Unexpected "{extra}" after "{stream.last}"')
    return expr


def parse_program(source: str) -> list[Node]:
    """Read every top-level form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
