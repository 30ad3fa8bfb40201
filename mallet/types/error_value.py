from __future__ import annotations


class ErrorValue:
    """The Error variant: a value carrying a human-readable message.

    `kind` names the error class (lexical, parse, evaluation, allocation) so a
    host can tell them apart without parsing the message.
    """

    __slots__ = ("message", "kind")

    def __init__(self, message: str, kind: str = "evaluation"):
        self.message = message
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ErrorValue)
            and self.message == other.message
            and self.kind == other.kind
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return f"ErrorValue({self.message!r}, {self.kind!r})"

    def __str__(self):
        return self.message
