"""Miscellaneous utilities."""

import functools
import inspect
import typing


class Named:
    """A named object.

    This class can be used to construct objects with a name that will be used
    for the string representation.
    """

    def __init__(self, name):
        """Construct a named object.

        Arguments:
            name: The name of this object.
        """
        self.name = name

    def __repr__(self):
        """Return the object's name."""
        return self.name


Any = Named("Any")
MISSING = Named("MISSING")

# Name under which constructor overloads are registered.
THIS = "this"


def marker_decorator(deco):
    """Wrap a decorator that takes type markers and optional keyword arguments.

    ``@deco`` applied bare registers a function with no markers,
    ``@deco(int, str, name=...)`` registers it with the given markers.
    """

    @functools.wraps(deco)
    def new_deco(*markers, **kwargs):
        if len(markers) == 1 and not kwargs and inspect.isfunction(markers[0]):
            return deco(markers[0])

        @functools.wraps(deco)
        def newer_deco(fn):
            return deco(fn, *markers, **kwargs)

        return newer_deco

    return new_deco


class UsageError(Exception):
    pass


class ResolutionError(TypeError):
    pass


class OverloadNotImplemented(ResolutionError, NotImplementedError):
    """No registered overload accepts the given argument types."""

    def __init__(self, name, scope, types):
        self.name = name
        self.scope = scope
        self.types = tuple(types)
        super().__init__(
            f"Method `{name}` in `{scopestring(scope)}` with types"
            f" [{sigstring(self.types)}] not implemented."
        )


def clsstring(cls):
    if cls is Any or cls is typing.Any:
        return "*"
    r = repr(cls)
    if r.startswith("<class ") or r.startswith("<enum "):
        return cls.__name__
    else:
        return r


def sigstring(types):
    return ", ".join(map(clsstring, types))


def scopestring(scope):
    if inspect.ismodule(scope):
        return scope.__name__
    return getattr(scope, "__qualname__", None) or repr(scope)
