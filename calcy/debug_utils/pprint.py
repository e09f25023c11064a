"""Display helpers. Used by the REPL and in error messages, never by evaluation."""

from __future__ import annotations

from calcy.types.ast import List, Number, Symbol
from calcy.types.values import Closure, NativeFunction, Thunk

LAZY_MARKER = "L"


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def pformat(obj) -> str:
    """Render a node or value the way the REPL prints it."""
    match obj:
        case Number(value=value):
            return format_number(value)
        case Symbol():
            return str(obj)
        case List(items=items):
            return "(" + " ".join(pformat(item) for item in items) + ")"
        case Closure(body=body, mode=mode):
            names = " ".join(obj.typed_params())
            return f"({mode.value} ({names}) {pformat(body)})"
        case NativeFunction(name=name):
            return f"<native {name}>"
        case Thunk():
            if obj.is_forced:
                return pformat(obj.cached)
            return f"{LAZY_MARKER}{pformat(obj.expr)}"
    return str(obj)
