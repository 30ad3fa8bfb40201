from __future__ import annotations


class NilType:
    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


class EndOfInputType:
    """Returned by the reader when the line source is exhausted."""

    def __repr__(self): return "EndOfInput"
    def __bool__(self): return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


Nil = NilType()
EndOfInput = EndOfInputType()
