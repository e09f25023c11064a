"""Immutable AST nodes produced by the reader.

A parsed program is built from exactly three node kinds. The same classes
double as runtime data: numbers evaluate to themselves and `quote` hands back
symbols and lists unevaluated.
"""

from __future__ import annotations
import sys
from typing import Iterable, Iterator


class Number:
    __slots__ = ("value",)

    def __init__(self, value: float):
        object.__setattr__(self, "value", float(value))

    def __setattr__(self, key, value):
        raise AttributeError("Number is immutable")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("number", self.value))

    def __repr__(self):
        return f"Number({self.value!r})"


class Symbol:
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        object.__setattr__(self, "id", sys.intern(name))

    def __setattr__(self, key, value):
        raise AttributeError("Symbol is immutable")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


class List:
    __slots__ = ("items",)

    def __init__(self, items: Iterable[Node] = ()):
        object.__setattr__(self, "items", tuple(items))

    def __setattr__(self, key, value):
        raise AttributeError("List is immutable")

    @property
    def head(self) -> Node | None:
        return self.items[0] if self.items else None

    @property
    def args(self) -> tuple[Node, ...]:
        return self.items[1:]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, List) and self.items == other.items

    def __hash__(self) -> int:
        return hash(("list", self.items))

    def __repr__(self):
        return f"List({list(self.items)!r})"


Node = Number | Symbol | List


def node_kind(node: object) -> str | None:
    """Syntactic kind of a node: 'number', 'symbol', 'list', or None for non-nodes."""
    match node:
        case Number():
            return "number"
        case Symbol():
            return "symbol"
        case List():
            return "list"
    return None
