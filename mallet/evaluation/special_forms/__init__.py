"""Registry of special forms for the Mallet evaluator.

Maps Symbols to handler functions that receive some arguments unevaluated,
together with how many. `register` binds them into an environment as
SpecialForm handlers, where the evaluator finds them like any other function.
"""

from mallet.types.environment import Environment
from mallet.types.symbol import Symbol
from mallet.evaluation.special_forms.define_form import define_form
from mallet.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    Symbol("def!"): (1, define_form),
    Symbol("let*"): (2, let_form),
}


def register(env: Environment) -> None:
    for name, (nonevalargs, impl) in SPECIAL_FORMS.items():
        env.bind_function(name, nonevalargs, impl)
