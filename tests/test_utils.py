import sys

import pytest

from letdispatch import Any, Named, OverloadNotImplemented, ResolutionError
from letdispatch.utils import clsstring, marker_decorator, scopestring, sigstring


def test_named():
    assert repr(Named("HELLO")) == "HELLO"
    assert repr(Any) == "Any"


def test_clsstring():
    assert clsstring(int) == "int"
    assert clsstring(Any) == "*"
    assert clsstring(Named) == "Named"


def test_sigstring():
    assert sigstring((int, str)) == "int, str"
    assert sigstring((Any, float)) == "*, float"
    assert sigstring(()) == ""


def test_scopestring():
    assert scopestring(sys.modules[__name__]) == __name__
    assert scopestring(Named) == "Named"


def test_marker_decorator():
    @marker_decorator
    def deco(fn, *markers, tag=None):
        return (fn.__name__, markers, tag)

    def f():
        pass

    assert deco(f) == ("f", (), None)
    assert deco()(f) == ("f", (), None)
    assert deco(int, str)(f) == ("f", (int, str), None)
    assert deco(int, tag="x")(f) == ("f", (int,), "x")


def test_not_implemented_error():
    err = OverloadNotImplemented("f", Named, (float, str))
    assert err.name == "f"
    assert err.scope is Named
    assert err.types == (float, str)
    assert str(err) == "Method `f` in `Named` with types [float, str] not implemented."
    assert isinstance(err, ResolutionError)
    assert isinstance(err, TypeError)
    assert isinstance(err, NotImplementedError)

    with pytest.raises(TypeError):
        raise err
