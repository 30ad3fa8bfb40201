"""Container variants of the Mallet value model.

List and Vector are ordered sequences that differ only in their tag, so both
subclass `list` and refuse to compare equal to each other. HashMap keeps its
keys and values as two parallel lists in insertion order; the key invariant
(every key is a String or Keyword, one value per key) is checked whenever an
entry is added, never later.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from mallet import LispValue
from mallet.types.symbol import Keyword
from mallet.types.errors import MalletTypeError


class List(list):
    """A Lisp list `( ... )`."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and list.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list.__repr__(self)})"


class Vector(List):
    """A Lisp vector `[ ... ]`."""

    __slots__ = ()


def is_valid_key(key: LispValue) -> bool:
    return isinstance(key, (str, Keyword))


class HashMap:
    """A hash-map `{ ... }` stored as ordered, parallel key and value lists."""

    __slots__ = ("keys", "values")

    def __init__(
        self,
        keys: Optional[Iterable[LispValue]] = None,
        values: Optional[Iterable[LispValue]] = None,
    ):
        self.keys: list[LispValue] = []
        self.values: list[LispValue] = []
        keys = list(keys or ())
        values = list(values or ())
        if len(keys) != len(values):
            raise MalletTypeError(
                f"hashmap needs one value per key, got {len(keys)} keys and {len(values)} values"
            )
        for k, v in zip(keys, values):
            self.assoc(k, v)

    def assoc(self, key: LispValue, value: LispValue) -> None:
        """Append an entry, checking the key type."""
        if not is_valid_key(key):
            raise MalletTypeError(f"hashmap key must be a string or keyword, got {key!r}")
        self.keys.append(key)
        self.values.append(value)

    def items(self) -> Iterator[tuple[LispValue, LispValue]]:
        return zip(self.keys, self.values)

    def __len__(self) -> int:
        return len(self.keys)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, HashMap)
            and self.keys == other.keys
            and self.values == other.values
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HashMap({self.keys!r}, {self.values!r})"


def is_integer(value: LispValue) -> bool:
    """True for Integer values; bools are the True/False variants, not integers."""
    return isinstance(value, int) and not isinstance(value, bool)


def copy_value(value: LispValue) -> LispValue:
    """Deep-copy a value so the copy shares no container with the original.

    Atoms are immutable and returned as-is.
    """
    if isinstance(value, List):
        return type(value)(copy_value(x) for x in value)
    if isinstance(value, HashMap):
        result = HashMap()
        result.keys = list(value.keys)
        result.values = [copy_value(v) for v in value.values]
        return result
    return value
