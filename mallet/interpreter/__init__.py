"""Host-facing entry points: read, eval, print and an Interpreter that keeps
a top-level environment across lines.

The core raises MalletError subclasses; these functions turn every error into
an ErrorValue so a host only ever receives values.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from mallet import SExpression, LispValue
from mallet.builtin.env_builtin import register
from mallet.evaluation.evaluator import evaluate
from mallet.printer import pr_str
from mallet.reader.parser import lex, read_str, TokenStream
from mallet.types.collections import List
from mallet.types.errors import MalletAllocationError, MalletError, MalletEvaluationError
from mallet.types.environment import Environment
from mallet.types.nil import EndOfInput, Nil

logger = logging.getLogger(__name__)


def _guarded(fn: Callable[[], LispValue]) -> LispValue:
    try:
        return fn()
    except MalletError as exc:
        logger.debug("recovered %s error: %s", exc.kind, exc.message)
        return exc.to_value()
    except RecursionError:
        logger.debug("nesting too deep")
        return MalletEvaluationError("maximum nesting depth exceeded").to_value()
    except MemoryError:
        return MalletAllocationError("cannot allocate node").to_value()


def new_environment(outer: Optional[Environment] = None) -> Environment:
    return Environment(outer)


def initial_environment() -> Environment:
    """A top-level environment with the special forms and builtins installed."""
    env = Environment()
    register(env)
    return env


def read(text: Optional[str]) -> Optional[LispValue]:
    """Read the first form of `text`; an ErrorValue on a lexical or parse error."""
    return _guarded(lambda: read_str(text))


def eval(env: Environment, expr: SExpression) -> LispValue:
    """Evaluate `expr`; an ErrorValue if evaluation fails."""
    return _guarded(lambda: evaluate(expr, env))


def print(value: Optional[LispValue], readable: bool = True) -> str:
    """Render `value`; a line with no form (None) renders as the empty string."""
    return pr_str(value, readable)


class Interpreter:
    """
    Reads, evaluates and prints Mallet code.
    Maintains one top-level Environment across calls.
    """

    def __init__(self, prelude: str | None = None):
        self.env: Environment = initial_environment()
        if prelude:
            self.eval_source(prelude)

    def read(self, line: Optional[str]) -> Optional[LispValue]:
        return read(line)

    def eval(self, expr: SExpression) -> LispValue:
        return eval(self.env, expr)

    def rep(self, line: Optional[str], readable: bool = True) -> Optional[str]:
        """Read, evaluate and print one line.

        Returns None at end of input; an empty string when the line holds no
        form.
        """
        form = self.read(line)
        if form is EndOfInput:
            return None
        if form is None:
            return ""
        return print(self.eval(form), readable)

    def eval_source(self, code: str) -> LispValue:
        """Evaluate every form in `code`; stops at the first error.

        Returns Nil for no forms, the value for one, otherwise a List of the
        values.
        """
        def run() -> LispValue:
            stream = TokenStream(list(lex(code)))
            results = List()
            for expr in stream.parse_all():
                results.append(evaluate(expr, self.env))
            if not results:
                return Nil
            if len(results) == 1:
                return results[0]
            return results

        return _guarded(run)
