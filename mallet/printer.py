"""Printer: renders a Mallet value as text.

Readable mode quotes strings and re-inserts the escapes the reader
understands, so `read_str(pr_str(v))` reproduces `v`. Display mode emits
string contents raw.
"""

from __future__ import annotations

from io import StringIO

from mallet import LispValue
from mallet.types.builtin import NativeProc, SpecialForm
from mallet.types.collections import HashMap, List, Vector
from mallet.types.error_value import ErrorValue
from mallet.types.nil import EndOfInputType, NilType
from mallet.types.symbol import Keyword, Symbol

ERROR_PREFIX = "Error: "

_ESCAPES = str.maketrans({"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", '"': '\\"'})


def escape_string(s: str) -> str:
    return '"' + s.translate(_ESCAPES) + '"'


def _write(buffer: StringIO, value: LispValue, readable: bool) -> None:
    if isinstance(value, str):
        buffer.write(escape_string(value) if readable else value)
    elif value is True:
        buffer.write("true")
    elif value is False:
        buffer.write("false")
    elif isinstance(value, NilType):
        buffer.write("nil")
    elif isinstance(value, int):
        buffer.write(str(value))
    elif isinstance(value, (Symbol, Keyword)):
        buffer.write(str(value))
    elif isinstance(value, List):
        opener, closer = ("[", "]") if isinstance(value, Vector) else ("(", ")")
        buffer.write(opener)
        for i, item in enumerate(value):
            if i:
                buffer.write(" ")
            _write(buffer, item, readable)
        buffer.write(closer)
    elif isinstance(value, HashMap):
        buffer.write("{")
        for i, (k, v) in enumerate(value.items()):
            if i:
                buffer.write(" ")
            _write(buffer, k, readable)
            buffer.write(" ")
            _write(buffer, v, readable)
        buffer.write("}")
    elif isinstance(value, ErrorValue):
        buffer.write(ERROR_PREFIX + value.message)
    elif value is None or isinstance(value, EndOfInputType):
        pass
    elif isinstance(value, (NativeProc, SpecialForm)):
        buffer.write(repr(value))
    else:
        raise TypeError(f"value not printable: {value!r}")


def pr_str(value: LispValue, readable: bool = True) -> str:
    """Render `value`; `readable=False` prints strings raw. None renders empty."""
    with StringIO() as buffer:
        _write(buffer, value, readable)
        return buffer.getvalue()
