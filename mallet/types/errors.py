from __future__ import annotations

from typing import Optional


class MalletError(Exception):
    """ Base class for all Mallet errors"""
    kind = "error"

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(message)
        # source offset, when the reader knows it
        self.pos = pos

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.kind

    def to_value(self):
        """Return the Error value carrying this error's message."""
        from mallet.types.error_value import ErrorValue
        return ErrorValue(self.message, self.kind)


class MalletLexicalError(MalletError):
    """ Raised when a token is malformed, e.g. an unterminated string"""
    kind = "lexical"


class MalletSyntaxError(MalletError):
    """ Raised when the token sequence does not form a valid form"""
    kind = "parse"


class MalletEvaluationError(MalletError):
    """ Raised when evaluating a form fails"""
    kind = "evaluation"


class MalletUnboundSymbol(MalletEvaluationError):
    """ Raised when a symbol is used before it is bound"""


class MalletInvalidSymbol(MalletEvaluationError):
    """ Raised when a non-symbol is used where a symbol is required"""


class MalletArityError(MalletEvaluationError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class MalletTypeError(MalletEvaluationError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class MalletZeroDivisionError(MalletEvaluationError):
    """ Raised when dividing by zero"""


class MalletAllocationError(MalletError):
    """ Raised when the interpreter runs out of memory"""
    kind = "allocation"
