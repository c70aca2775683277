import pytest

from lispy.builtins import register
from lispy.evaluation.evaluator import evaluate
from lispy.interpreter import Interpreter
from lispy.reader.grammar import parse
from lispy.reader.reader import read
from lispy.types import Environment


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    # Configuration comes from the process environment; isolate each test.
    for var in ("LISPY_INT_BITS", "LISPY_LOG_LEVEL", "LISPY_PRELUDE_PATH", "LISPY_MAX_NESTING"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter(prelude=None)


@pytest.fixture
def run(env):
    """Evaluate each top-level expression of a source string, return the last rendered result."""
    def _run(source: str) -> str:
        exprs = read(parse(source))
        result = None
        while len(exprs):
            result = evaluate(env, exprs.pop(0))
        return str(result)
    return _run
