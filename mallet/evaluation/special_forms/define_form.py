from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.types.errors import MalletArityError, MalletInvalidSymbol
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def! name value)
    `name` arrives unevaluated; `value` has already been evaluated in `env`.
    Binds in the current scope only and returns a copy of the bound value.
    """
    if not tail:
        raise MalletArityError("no symbol to define")

    name = tail[0]
    if not isinstance(name, Symbol):
        raise MalletInvalidSymbol("not a symbol")
    if len(tail) < 2:
        raise MalletArityError("symbol value missing")
    if len(tail) > 2:
        raise MalletArityError("excessive symbol values")

    env.define(name, tail[1])
    return env.lookup_variable(name)
