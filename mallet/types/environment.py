"""Runtime environment for Mallet.

An Environment is one scope of the symbol table: Variable bindings map Symbols
to values and Function bindings map Symbols to native handlers. Scopes nest via
a non-owning `outer` link; lookups walk outward, definitions never do. Values
are copied on the way in and on the way out so no two scopes share a
container.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable, Optional

from mallet import LispValue
from mallet.types.builtin import Builtin, NativeProc, SpecialForm
from mallet.types.collections import copy_value
from mallet.types.errors import MalletInvalidSymbol, MalletUnboundSymbol
from mallet.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to variables and native functions."""

    __slots__ = ("vars", "functions", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.functions: dict[Symbol, Builtin] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to a copy of `value` in this scope, replacing any prior
        Variable of that name here.

        Raises MalletInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise MalletInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.vars[name] = copy_value(value)

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain holding a Variable `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def find_function(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain holding a Function `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.functions:
                return env
            env = env.outer
        return None

    def lookup_variable(self, name: Symbol) -> LispValue:
        """Return a copy of the nearest Variable bound to `name`.

        Raises MalletUnboundSymbol if no scope in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise MalletUnboundSymbol(f"unbound variable '{name}'")
        return copy_value(env.vars[name])

    def lookup_function(self, name: Symbol) -> Optional[Builtin]:
        """Return the nearest Function bound to `name`, or None."""
        env = self.find_function(name)
        if env is None:
            return None
        return env.functions[name]

    def bind(self, name: Symbol, handler: Builtin) -> None:
        """Register a prepared handler in this scope."""
        if not isinstance(name, Symbol):
            raise MalletInvalidSymbol(f"Cannot bind {name!r} as a symbol")
        self.functions[name] = handler

    def bind_function(self, name: Symbol, nonevalargs: int, impl: Callable[..., LispValue]) -> Builtin:
        """Register a native implementation in this scope.

        With `nonevalargs == 0` every argument is evaluated first and `impl` is
        a NativeProc; otherwise the first `nonevalargs` arguments are passed
        raw and `impl` is a SpecialForm.
        """
        if nonevalargs == 0:
            handler: Builtin = NativeProc(str(name), impl)
        else:
            handler = SpecialForm(str(name), nonevalargs, impl)
        self.bind(name, handler)
        return handler

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        for k, f in self.functions.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {f!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
