import pytest

from mallet.types.builtin import NativeProc, SpecialForm
from mallet.types.collections import List, Vector
from mallet.types.environment import Environment
from mallet.types.errors import MalletInvalidSymbol, MalletUnboundSymbol
from mallet.types.symbol import Symbol


def test_define_and_lookup():
    env = Environment()
    env.define(Symbol("a"), 1)
    assert env.lookup_variable(Symbol("a")) == 1


def test_lookup_walks_outer_scopes():
    outer = Environment()
    outer.define(Symbol("a"), 1)
    inner = Environment(outer=Environment(outer=outer))
    assert inner.lookup_variable(Symbol("a")) == 1
    assert inner.find(Symbol("a")) is outer


def test_nearest_binding_wins():
    outer = Environment()
    outer.define(Symbol("a"), 1)
    inner = Environment(outer=outer)
    inner.define(Symbol("a"), 2)
    assert inner.lookup_variable(Symbol("a")) == 2
    assert outer.lookup_variable(Symbol("a")) == 1


def test_define_only_touches_current_scope():
    outer = Environment()
    outer.define(Symbol("a"), 1)
    inner = Environment(outer=outer)
    inner.define(Symbol("a"), 5)
    assert outer.vars[Symbol("a")] == 1
    assert Symbol("a") in inner.vars


def test_unbound_variable():
    with pytest.raises(MalletUnboundSymbol, match="unbound variable 'missing'"):
        Environment().lookup_variable(Symbol("missing"))


def test_define_rejects_non_symbols():
    with pytest.raises(MalletInvalidSymbol):
        Environment().define("a", 1)


def test_define_copies_the_value():
    env = Environment()
    value = List([1, Vector([2])])
    env.define(Symbol("v"), value)
    value[1].append(3)
    assert env.lookup_variable(Symbol("v")) == List([1, Vector([2])])


def test_bind_function_picks_the_handler_variant():
    env = Environment()
    proc = env.bind_function(Symbol("f"), 0, lambda env, args: 1)
    form = env.bind_function(Symbol("g"), 2, lambda args, env, evaluate_fn: 2)
    assert isinstance(proc, NativeProc) and proc.nonevalargs == 0
    assert isinstance(form, SpecialForm) and form.nonevalargs == 2
    assert env.lookup_function(Symbol("f")) is proc


def test_bind_function_replaces_prior_binding():
    env = Environment()
    env.bind_function(Symbol("f"), 0, lambda env, args: 1)
    second = env.bind_function(Symbol("f"), 0, lambda env, args: 2)
    assert env.lookup_function(Symbol("f")) is second
    assert len(env.functions) == 1


def test_function_lookup_is_kind_specific():
    outer = Environment()
    proc = outer.bind_function(Symbol("f"), 0, lambda env, args: 1)
    inner = Environment(outer=outer)
    inner.define(Symbol("f"), 99)
    assert inner.lookup_function(Symbol("f")) is proc
    assert inner.lookup_variable(Symbol("f")) == 99
    assert inner.lookup_function(Symbol("nothing")) is None
    with pytest.raises(MalletUnboundSymbol):
        outer.lookup_variable(Symbol("f"))


def test_special_form_requires_raw_arguments():
    with pytest.raises(ValueError):
        SpecialForm("bad", 0, lambda args, env, evaluate_fn: None)


def test_str_and_repr():
    outer = Environment()
    outer.define(Symbol("a"), 1)
    inner = Environment(outer=outer)
    inner.define(Symbol("b"), 2)
    assert str(inner) == "{b: 2} -> ..."
    assert repr(inner) == "<Environment chain: {b: 2} -> {a: 1}>"
