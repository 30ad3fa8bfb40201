"""Core evaluator for the Mallet interpreter.

Evaluation is structurally recursive over the value tree. A list whose head
names a Function binding is a call; the handler's `nonevalargs` count decides
how many leading arguments it receives unevaluated, which is how `def!` and
`let*` are implemented without a separate special-form table. Any other list
evaluates to the list of its evaluated elements.

Errors are raised as MalletError subclasses and propagate unchanged; partial
results built at a frame are dropped as the exception unwinds.
"""

from __future__ import annotations

from mallet import SExpression, LispValue
from mallet.types.builtin import Builtin
from mallet.types.collections import HashMap, List, Vector, copy_value
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in `env` and return the resulting value."""
    match expr:
        case Symbol():
            return env.lookup_variable(expr)

        case Vector():
            return Vector(evaluate(item, env) for item in expr)

        case List():
            if not expr:
                return List()
            head = expr[0]
            if isinstance(head, Symbol):
                fn = env.lookup_function(head)
                if fn is not None:
                    return apply(fn, expr[1:], env)
            return List(evaluate(item, env) for item in expr)

        case HashMap():
            result = HashMap()
            for key, value in expr.items():
                result.assoc(key, evaluate(value, env))
            return result

    # --- Atoms evaluate to themselves ---
    return expr


def apply(fn: Builtin, raw_args: list[SExpression], env: Environment) -> LispValue:
    """Call a native handler, evaluating all but its leading raw arguments."""
    args: list[LispValue] = []
    for i, arg in enumerate(raw_args):
        if i < fn.nonevalargs:
            args.append(copy_value(arg))
        else:
            args.append(evaluate(arg, env))
    return fn(args, env, evaluate)
