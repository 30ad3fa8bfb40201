"""Native function bindings.

A Function binding is one of two handler variants, which makes the argument
evaluation policy explicit:

- NativeProc: every argument is evaluated before the call;
  the implementation is called as ``impl(env, args)``.
- SpecialForm: the first ``nonevalargs`` arguments are passed as raw forms and
  the rest are evaluated; the implementation is called as
  ``impl(args, env, evaluate_fn)`` so it can evaluate what it received raw.
"""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

from mallet import LispValue, EvaluatorFn

if TYPE_CHECKING:
    from mallet.types.environment import Environment


class NativeProc:
    __slots__ = ("name", "impl")

    nonevalargs = 0

    def __init__(self, name: str, impl: Callable[[Environment, list[LispValue]], LispValue]):
        self.name = name
        self.impl = impl

    def __call__(self, args: list[LispValue], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
        return self.impl(env, args)

    def __repr__(self):
        return f"#<builtin {self.name}>"


class SpecialForm:
    __slots__ = ("name", "nonevalargs", "impl")

    def __init__(
        self,
        name: str,
        nonevalargs: int,
        impl: Callable[[list[LispValue], Environment, EvaluatorFn], LispValue],
    ):
        if nonevalargs < 1:
            raise ValueError(f"special form {name} must take at least one raw argument")
        self.name = name
        self.nonevalargs = nonevalargs
        self.impl = impl

    def __call__(self, args: list[LispValue], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
        return self.impl(args, env, evaluate_fn)

    def __repr__(self):
        return f"#<special-form {self.name}>"


Builtin = NativeProc | SpecialForm
