import sys
from functools import singledispatch

import pytest
from multimethod import multimethod as multimethod_dispatch
from multipledispatch import dispatch as _md_dispatch
from plum import dispatch as plum_dispatch
from runtype import multidispatch as runtype_dispatch

from letdispatch import let


def _locate(fn):
    fr = sys._getframe(1)
    while fr and fn.__code__ not in fr.f_code.co_consts:
        fr = fr.f_back
    return fr.f_locals.get(fn.__name__, None)


def _getanns(fn):
    return list(fn.__annotations__.values())


def letdispatch_dispatch(fn):
    return let(*_getanns(fn))(fn)


def multipledispatch_dispatch(fn):
    anns = _getanns(fn)
    existing = _locate(fn)
    if existing:
        existing.register(*anns)(fn)
        return existing
    else:
        return _md_dispatch(*anns)(fn)


def singledispatch_dispatch(fn):
    existing = _locate(fn)
    if existing:
        existing.register(fn)
        return existing
    else:
        return singledispatch(fn)


def with_functions(**fns):
    return pytest.mark.parametrize("fn", list(fns.values()), ids=list(fns.keys()))


__all__ = [
    "letdispatch_dispatch",
    "multimethod_dispatch",
    "plum_dispatch",
    "runtype_dispatch",
    "multipledispatch_dispatch",
    "singledispatch_dispatch",
    "with_functions",
]
