"""Built-in functions for the Mallet runtime environment.

This module defines integer arithmetic, comparison and structural equality
exposed to Lisp code, plus `register`, which installs them (and the special
forms) into an environment.
"""
from __future__ import annotations

from mallet import LispValue
from mallet.types.collections import HashMap, List, is_integer
from mallet.types.environment import Environment
from mallet.types.errors import MalletTypeError, MalletZeroDivisionError
from mallet.types.symbol import Symbol
from mallet.evaluation import special_forms


def _check_integers(expr: list[LispValue], message: str, first_message: str | None = None) -> None:
    for i, x in enumerate(expr):
        if not is_integer(x):
            raise MalletTypeError(first_message if i == 0 and first_message else message)


def _truncdiv(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> int:
    """Return the sum of all arguments; 0 with none."""
    _check_integers(expr, "argument to + not a number")
    return sum(expr)


def mul(env: Environment, expr: list[LispValue]) -> int:
    """Return the product of all arguments; 1 with none."""
    _check_integers(expr, "argument to * not a number")
    result = 1
    for x in expr:
        result *= x
    return result


def sub(env: Environment, expr: list[LispValue]) -> int:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _check_integers(expr, "argument to - not a number", "first argument to - not a number")
    if len(expr) <= 1:
        return -sum(expr)
    result = expr[0]
    for x in expr[1:]:
        result -= x
    return result


def div(env: Environment, expr: list[LispValue]) -> int:
    """Divide the first argument by each later one, truncating; 0 with none."""
    _check_integers(
        expr, "division by something other than number", "first argument to / not a number"
    )
    if not expr:
        return 0
    result = expr[0]
    for x in expr[1:]:
        if x == 0:
            raise MalletZeroDivisionError("division by 0")
        result = _truncdiv(result, x)
    return result


# -------------------------------
# Comparison
# -------------------------------
def _comparison(name: str, test):
    def compare(env: Environment, expr: list[LispValue]) -> bool:
        _check_integers(
            expr, "comparison by something other than number", f"first argument to {name} not a number"
        )
        if not expr:
            return False
        first = expr[0]
        return all(test(first, x) for x in expr[1:])

    compare.__name__ = f"compare_{name}"
    compare.__doc__ = f"True if the first argument is {name} every later argument."
    return compare


lt = _comparison("<", lambda a, b: a < b)
lte = _comparison("<=", lambda a, b: a <= b)
gt = _comparison(">", lambda a, b: a > b)
gte = _comparison(">=", lambda a, b: a >= b)


# -------------------------------
# Equality
# -------------------------------
def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality; values of different variants are never equal."""
    if type(a) is not type(b):
        return False
    if isinstance(a, List):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, HashMap):
        if len(a) != len(b):
            return False
        return all(
            is_equal(k1, k2) and is_equal(v1, v2)
            for (k1, v1), (k2, v2) in zip(a.items(), b.items())
        )
    return a == b


def equals(env: Environment, expr: list[LispValue]) -> bool:
    """True if every argument equals the first; False with no arguments."""
    if not expr:
        return False
    first = expr[0]
    return all(is_equal(first, other) for other in expr[1:])


BUILTINS = {
    Symbol("+"): add,
    Symbol("-"): sub,
    Symbol("*"): mul,
    Symbol("/"): div,
    Symbol("<"): lt,
    Symbol("<="): lte,
    Symbol(">"): gt,
    Symbol(">="): gte,
    Symbol("="): equals,
}


def register(env: Environment) -> None:
    """Install the special forms and every builtin into `env`."""
    special_forms.register(env)
    for name, fn in BUILTINS.items():
        env.bind_function(name, 0, fn)
