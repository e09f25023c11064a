import pytest

from calcy.config import EvaluatorConfig, Strategy
from calcy.interpreter import Interpreter

# Tests that request `interp` run three times, once per argument-passing
# strategy: call-by-value ["value"], call-by-name ["name"] and call-by-need
# ["need"]. Programs whose result must not depend on the strategy belong
# there; strategy-specific behaviour builds its own Interpreter.

TEST_MAX_DEPTH = 300


@pytest.fixture(params=["value", "name", "need"])
def strategy(request):
    return Strategy(request.param)


@pytest.fixture
def interp(strategy):
    return Interpreter(EvaluatorConfig(strategy=strategy, max_depth=TEST_MAX_DEPTH))


@pytest.fixture
def make_interp():
    def _make(strategy="value", **kwargs):
        kwargs.setdefault("max_depth", TEST_MAX_DEPTH)
        return Interpreter(EvaluatorConfig(strategy=Strategy(strategy), **kwargs))

    return _make
