# Core type aliases for calcy's data model.
# Code is represented by the immutable node classes in calcy.types.ast
# (Number, Symbol, List); runtime values are those nodes (numbers and quoted
# data) plus the callables and thunks in calcy.types.values.
#
# Naming guidance:
# - Node:  Use in reader/dispatcher code to denote syntactic forms (code-as-data).
# - Value: Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` so that the modules defining the concrete
# classes can import them without cycles.

from typing import Any, Callable

# Runtime value alias
Value = Any
# Parsed program alias
Node = Any

# Evaluator function type: handed to rule handlers so they can recurse
EvaluatorFn = Callable[..., Value]
