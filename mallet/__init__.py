# Core type aliases for Mallet's data model.
# Atoms are plain Python values where one fits (int, str, bool) and small
# classes where the reader needs a distinct tag (Symbol, Keyword, List, Vector,
# HashMap, Nil). See mallet.types for the variants.
#
# Naming guidance:
# - SExpression: Use in reader code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

__version__ = "0.4.0"

# Runtime value alias
LispValue = Any
# Forms alias (forms and values share one representation)
SExpression = LispValue

# Evaluator function type: passed to special forms so they control evaluation
EvaluatorFn = Callable[..., LispValue]
