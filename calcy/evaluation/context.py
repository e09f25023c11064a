from __future__ import annotations

from typing import NamedTuple

from calcy.config import EvaluatorConfig
from calcy.types.environment import Environment


class EvaluationContext(NamedTuple):
    """Everything one `evaluate` call needs: frame, configuration, nesting depth.

    Contexts are never mutated; handlers derive new ones with `deeper` and
    `with_env`.
    """

    env: Environment
    config: EvaluatorConfig
    depth: int = 0

    def deeper(self) -> EvaluationContext:
        return self._replace(depth=self.depth + 1)

    def with_env(self, env: Environment) -> EvaluationContext:
        return self._replace(env=env)
