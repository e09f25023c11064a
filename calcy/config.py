from __future__ import annotations
import os
import sys
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from calcy.errors import CalcyConfigError


class Strategy(Enum):
    """Argument-passing discipline used for closures and `define`."""

    VALUE = "value"
    NAME = "name"
    NEED = "need"

    @classmethod
    def parse(cls, raw: str) -> Strategy:
        key = raw.strip().lower()
        try:
            return cls(_STRATEGY_ALIASES.get(key, key))
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise CalcyConfigError(f"Unknown strategy {raw!r}, expected one of {choices}")


_STRATEGY_ALIASES = {
    "eager": "value",
    "by-value": "value",
    "call-by-value": "value",
    "by-name": "name",
    "call-by-name": "name",
    "lazy": "need",
    "by-need": "need",
    "call-by-need": "need",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# Defaults
DEFAULT_MAX_DEPTH = 800

# Upper bound on host frames between two nested `evaluate` calls
# (evaluate -> dispatch -> handler -> apply -> apply_native -> evaluate, plus
# force -> Thunk.force, which also advances the depth).
_FRAMES_PER_LEVEL = 12


def flag_from_env(var: str, default: Optional[bool], environ: Mapping[str, str]) -> Optional[bool]:
    raw = environ.get(var)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise CalcyConfigError(f"{var} must be a boolean flag, got {raw!r}")


def int_from_env(var: str, default: int, environ: Mapping[str, str]) -> int:
    raw = environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise CalcyConfigError(f"{var} must be an integer, got {raw!r}")
    if value < 1:
        raise CalcyConfigError(f"{var} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class EvaluatorConfig:
    strategy: Strategy = Strategy.VALUE
    max_depth: int = DEFAULT_MAX_DEPTH
    # None means "whatever the strategy implies": on for NEED, off otherwise
    memoize: Optional[bool] = None
    trace: bool = False

    @property
    def memoize_thunks(self) -> bool:
        if self.memoize is not None:
            return self.memoize
        return self.strategy is Strategy.NEED

    @property
    def defers_arguments(self) -> bool:
        """True when closures created by `function` receive unevaluated arguments."""
        return self.strategy is not Strategy.VALUE

    @property
    def defers_definitions(self) -> bool:
        return self.strategy is Strategy.NEED

    def with_overrides(self, **changes) -> EvaluatorConfig:
        """Copy with the given fields replaced; `None` values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EvaluatorConfig:
        environ = os.environ if environ is None else environ
        raw_strategy = environ.get("CALCY_STRATEGY")
        strategy = Strategy.parse(raw_strategy) if raw_strategy else Strategy.VALUE
        return cls(
            strategy=strategy,
            max_depth=int_from_env("CALCY_MAX_DEPTH", DEFAULT_MAX_DEPTH, environ),
            memoize=flag_from_env("CALCY_MEMOIZE", None, environ),
            trace=bool(flag_from_env("CALCY_TRACE", False, environ)),
        )

    def ensure_recursion_headroom(self) -> None:
        """Raise the host recursion limit so `max_depth` always trips first."""
        needed = self.max_depth * _FRAMES_PER_LEVEL + 500
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)
