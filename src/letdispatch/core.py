"""Utilities to overload methods and functions for multiple types."""

import inspect
import logging
import sys
import types
import typing

from .dispatch import ancestor_chain, default_dispatcher
from .registry import OverloadRecord, provision, registry_of
from .signatures import TypeSignature
from .utils import (
    MISSING,
    THIS,
    Any,
    UsageError,
    marker_decorator,
    scopestring,
    sigstring,
)

log = logging.getLogger(__name__)

METHOD = "method"
CLASSMETHOD = "classmethod"
KINDS = (METHOD, CLASSMETHOD)


def _attribute_name(scope, name):
    if name == THIS and not inspect.ismodule(scope):
        return "__init__"
    return name


def _method_hook(name):
    def hook(self, *args, **kwargs):
        record = default_dispatcher.resolve(name, type(self), tuple(map(type, args)))
        return record.body(self, *args, **kwargs)

    return hook


def _constructor_hook(name):
    def hook(self, *args, **kwargs):
        record = default_dispatcher.resolve(name, type(self), tuple(map(type, args)))
        record.body(self, *args, **kwargs)

    return hook


def _classmethod_hook(name):
    def hook(cls, *args, **kwargs):
        record = default_dispatcher.resolve(name, cls, tuple(map(type, args)))
        return record.body(cls, *args, **kwargs)

    return hook


def _function_hook(name, scope):
    def hook(*args, **kwargs):
        record = default_dispatcher.resolve(name, scope, tuple(map(type, args)))
        return record.body(*args, **kwargs)

    return hook


def _check_free(scope, attr):
    existing = scope.__dict__.get(attr)
    if existing is not None and not isinstance(existing, PendingOverload):
        raise UsageError(
            f"{scopestring(scope)}.{attr} is already defined and would be"
            " replaced by the overload hook"
        )


def _make_hook(scope, name, kind):
    attr = _attribute_name(scope, name)
    if inspect.ismodule(scope):
        hook = _function_hook(name, scope)
        hook.__qualname__ = attr
        hook.__module__ = scope.__name__
    else:
        _check_free(scope, attr)
        if name == THIS:
            hook = _constructor_hook(name)
        elif kind == CLASSMETHOD:
            hook = _classmethod_hook(name)
        else:
            hook = _method_hook(name)
        hook.__qualname__ = f"{scope.__qualname__}.{attr}"
        hook.__module__ = scope.__module__
    hook.__name__ = attr
    hook.__doc__ = f"Dispatch {name} to the overload matching the argument types."
    hook.__letdispatch__ = (scope, name)
    hook.kind = kind

    def resolve(*argtypes, scope=scope):
        return default_dispatcher.resolve(name, scope, argtypes)

    def resolve_all(*argtypes, scope=scope):
        return default_dispatcher.resolve_all(name, scope, argtypes)

    def resolve_for_values(*args, scope=scope):
        return default_dispatcher.resolve_for_values(name, scope, *args)

    def display_resolution(*argtypes, scope=scope):
        default_dispatcher.display_resolution(name, scope, *argtypes)

    hook.resolve = resolve
    hook.resolve_all = resolve_all
    hook.resolve_for_values = resolve_for_values
    hook.display_resolution = display_resolution

    setattr(scope, attr, classmethod(hook) if kind == CLASSMETHOD else hook)
    log.debug("Installed dispatch hook for %s on %s", name, scopestring(scope))
    return hook


def _check_kind(scope, name, kind):
    if kind not in KINDS:
        raise UsageError(f"Unknown overload kind {kind!r}, expected one of {KINDS}")
    if kind == METHOD:
        return
    if inspect.ismodule(scope):
        raise UsageError(f"{name} is declared in module {scope.__name__} and cannot be a {kind}")
    if name == THIS:
        raise UsageError(f"Constructor overloads cannot be a {kind}")


def _check_consistent(scope, name, kind):
    for ancestor in ancestor_chain(scope):
        hook = registry_of(ancestor).hook(name)
        if hook is not None and hook.kind != kind:
            raise UsageError(
                f"{name} is a {hook.kind} in {scopestring(ancestor)}"
                f" and cannot be overloaded as a {kind}"
            )


def declare(scope, name, markers, body, kind=METHOD):
    """Register body as an overload of name in scope.

    The first declaration of a name in a scope installs the hook that
    dispatches calls to that name. Later declarations only add records.
    Nothing is recorded if the declaration fails.

    Arguments:
        kind: ``"method"`` (the default), or ``"classmethod"`` for an
            overload that receives the class it is called on instead of
            an instance.

    Returns:
        The hook for name in scope.
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise UsageError(f"{name!r} is not a valid method name")
    if not callable(body):
        raise UsageError(f"The body of {name} must be callable, not {body!r}")
    _check_kind(scope, name, kind)
    signature = TypeSignature.from_markers(*markers)
    registry = provision(scope)
    _check_consistent(scope, name, kind)
    registry.register(
        OverloadRecord(name, signature, scope, body),
        make_hook=lambda: _make_hook(scope, name, kind),
    )
    return registry.hook(name)


def _is_marker(obj):
    return obj is Any or obj is typing.Any or isinstance(obj, type)


def _split_body(args, body):
    if body is MISSING and args and not _is_marker(args[-1]) and callable(args[-1]):
        *args, body = args
    return tuple(args), body


def let_in(scope, name, *args, body=MISSING, kind=METHOD):
    """Declare an overload of name in scope.

    Can be called as ``let_in(scope, name, *markers, body)`` or used as a
    decorator with ``@let_in(scope, name, *markers)``.
    """
    markers, body = _split_body(args, body)
    if body is MISSING:

        def deco(fn):
            declare(scope, name, markers, fn, kind=kind)
            return fn

        return deco
    return declare(scope, name, markers, body, kind=kind)


class PendingOverload:
    """Overload declared in a class body, bound when the class is created.

    Successive declarations of the same attribute in one class body are
    chained through ``previous`` so that none of them is lost when the
    attribute is reassigned.
    """

    def __init__(self, name, markers, fn, previous=None, kind=METHOD):
        self.name = name
        self.markers = markers
        self.fn = fn
        self.previous = previous
        self.kind = kind

    def chain(self):
        if self.previous is not None:
            yield from self.previous.chain()
        yield self

    def __set_name__(self, owner, attr):
        for pending in self.chain():
            declare(owner, pending.name, pending.markers, pending.fn, kind=pending.kind)
        if owner.__dict__.get(attr) is self:
            delattr(owner, attr)

    def __call__(self, *args, **kwargs):
        raise UsageError(f"{self.name} is not bound yet; @let must be used in a class body.")

    def __repr__(self):
        return f"<PendingOverload {self.name}({sigstring(self.markers)})>"


def _defining_frame(fn):
    fr = sys._getframe(1)
    while fr and fn.__code__ not in fr.f_code.co_consts:
        # The frame that executes a def statement holds the function's
        # code object in its constants.
        fr = fr.f_back
    if not fr:
        raise UsageError("@let only works as a decorator.")
    return fr


@marker_decorator
def let(fn, *markers, name=None, kind=METHOD):
    """Overload a method or a function for the given type markers.

    Inside a class body, the overload is added to the class when the class
    is created. At module level, it is added to the module, and the function
    that dispatches over every overload of that name is returned. Inside a
    function body, consecutive declarations share a private scope.

    Arguments:
        fn: The implementation.
        markers: One class (or Any) per positional argument, not counting
            ``self`` (or ``cls``).
        name: Register under this name instead of ``fn.__name__``.
        kind: ``"classmethod"`` to overload a class-level method, which is
            resolved against the class it is called on.
    """
    name = name or fn.__name__
    fr = _defining_frame(fn)
    lcl = fr.f_locals
    previous = lcl.get(fn.__name__, None)

    if lcl is fr.f_globals:
        scope = sys.modules[lcl["__name__"]]
    elif "__module__" in lcl and "__qualname__" in lcl:
        if not isinstance(previous, PendingOverload):
            previous = None
        return PendingOverload(name, markers, fn, previous, kind=kind)
    elif hasattr(previous, "__letdispatch__"):
        scope = previous.__letdispatch__[0]
    else:
        scope = types.ModuleType(f"{fn.__module__}.{fn.__qualname__}")

    return declare(scope, name, markers, fn, kind=kind)


def is_overloaded(x):
    """Return whether the argument is a dispatch hook (or a method bound to one)."""
    return hasattr(getattr(x, "__func__", x), "__letdispatch__")


class OverloadBase:
    """Base class for classes whose methods can be overloaded.

    Every subclass gets its own empty registry. Passing ``locked=True`` in the
    class statement freezes that registry once the class body is processed.
    """

    def __init_subclass__(cls, locked=False, **kwargs):
        super().__init_subclass__(**kwargs)
        registry = provision(cls)
        if locked:
            registry.lock()

    @classmethod
    def let(cls, name, *args, body=MISSING, kind=METHOD):
        """Declare an overload of name on this class.

        ``C.let(name, *markers, body)`` registers body directly, while
        ``@C.let(name, *markers)`` is the decorator form.
        """
        return let_in(cls, name, *args, body=body, kind=kind)


def display_methods(scope):
    """Print the overloads visible from scope, grouped by owner."""
    for ancestor in ancestor_chain(scope):
        registry = registry_of(ancestor)
        print(f"{scopestring(ancestor)}:")
        for record in registry:
            print(f"    {record.name}{record.signature}")
