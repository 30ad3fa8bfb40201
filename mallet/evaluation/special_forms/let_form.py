from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.types.collections import List
from mallet.types.errors import (
    MalletArityError,
    MalletError,
    MalletEvaluationError,
    MalletInvalidSymbol,
    MalletTypeError,
)
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (let* (name1 expr1 name2 expr2 ...) body)
    Both arguments arrive unevaluated. Each expr is evaluated in the new
    child scope, so later bindings see earlier ones; the body is evaluated
    there too and the child scope is dropped afterwards.
    """
    if not tail:
        raise MalletArityError("no bindings")

    bindings = tail[0]
    # Vector is a List subclass, so this accepts both
    if not isinstance(bindings, List):
        raise MalletTypeError("no valid list/vector of bindings")
    if len(tail) < 2:
        raise MalletArityError("no expression to evaluate using bindings")
    if len(tail) > 2:
        raise MalletArityError("too many expressions to evaluate")
    body = tail[1]

    inner = Environment(outer=env)
    for i in range(0, len(bindings), 2):
        if i + 1 >= len(bindings):
            raise MalletArityError("unterminated binding")
        name, val_expr = bindings[i], bindings[i + 1]
        if not isinstance(name, Symbol):
            raise MalletInvalidSymbol("can not set binding for non-symbol")
        try:
            value = evaluate_fn(val_expr, inner)
        except MalletError as exc:
            raise MalletEvaluationError(
                f"can not evaluate binding value for '{name}': {exc.message}"
            ) from exc
        inner.define(name, value)

    return evaluate_fn(body, inner)
