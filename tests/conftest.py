import pytest

from mallet.builtin.env_builtin import register
from mallet.evaluation.evaluator import evaluate
from mallet.interpreter import Interpreter
from mallet.reader.parser import read_str
from mallet.types.environment import Environment


@pytest.fixture
def env():
    """Fresh top-level environment with special forms and builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Read one line and evaluate it in the `env` fixture."""
    def _run(source):
        return evaluate(read_str(source), env)
    return _run


@pytest.fixture
def interp():
    return Interpreter()
