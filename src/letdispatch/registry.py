"""Per-scope storage of overload records."""

import logging
import threading
import weakref
from collections.abc import Mapping
from dataclasses import dataclass

from .signatures import TypeSignature
from .utils import UsageError, scopestring

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class OverloadRecord:
    """One registered overload.

    Attributes:
        name: The method name the overload answers to.
        signature: The TypeSignature declared for it.
        owner: The class or module in which it was declared.
        body: The callable to run when it is selected.
    """

    name: str
    signature: TypeSignature
    owner: object
    body: object

    def __repr__(self):
        return f"<OverloadRecord {scopestring(self.owner)}.{self.name}{self.signature}>"


class Registry:
    """Append-only collection of the overloads declared in one scope."""

    def __init__(self, scope):
        self._scope = weakref.ref(scope)
        self._records = ()
        self._hooks = {}
        self._locked = False
        self._mutex = threading.Lock()

    @property
    def scope(self):
        return self._scope()

    @property
    def locked(self):
        return self._locked

    def lock(self):
        with self._mutex:
            self._locked = True

    def _attempt_modify(self):
        if self._locked:
            raise UsageError(f"Registry of {scopestring(self.scope)} is locked for modifications")

    def register(self, record, make_hook=None):
        """Append a record. Records are never deduplicated.

        If make_hook is given and no hook exists yet for the record's name,
        it is called before the record is appended. If it raises, the
        registry is left unchanged.
        """
        if record.owner is not self.scope:
            raise UsageError(
                f"Cannot register an overload owned by {scopestring(record.owner)}"
                f" in the registry of {scopestring(self.scope)}"
            )
        with self._mutex:
            self._attempt_modify()
            if make_hook is not None:
                self._install_hook(record.name, make_hook)
            self._records = (*self._records, record)
        log.debug("Registered %r", record)
        return record

    def query(self, name):
        """Return the records for name, in insertion order."""
        return tuple(r for r in self._records if r.name == name)

    def names(self):
        return list(dict.fromkeys(r.name for r in self._records))

    def hook(self, name):
        return self._hooks.get(name)

    def _install_hook(self, name, make_hook):
        if name not in self._hooks:
            self._hooks[name] = make_hook()
        return self._hooks[name]

    def install_hook(self, name, make_hook):
        """Return the hook for name, calling make_hook() only the first time."""
        with self._mutex:
            return self._install_hook(name, make_hook)

    def __iter__(self):
        return iter(self._records)

    def __len__(self):
        return len(self._records)

    def __repr__(self):
        return f"<Registry {scopestring(self.scope)} ({len(self)} overloads)>"


# The registry lives in the scope's own namespace, so it is never inherited
# and it is collected along with the scope.
_REGISTRY_ATTR = "__letdispatch_registry__"
_provision_mutex = threading.Lock()


def _own_registry(scope):
    namespace = getattr(scope, "__dict__", None)
    if not isinstance(namespace, Mapping):
        return None
    return namespace.get(_REGISTRY_ATTR)


def provision(scope):
    """Return the registry owned by scope, creating an empty one if needed.

    Raises:
        UsageError: If scope cannot hold attributes (builtin classes, for
            instance).
    """
    with _provision_mutex:
        registry = _own_registry(scope)
        if registry is None:
            registry = Registry(scope)
            try:
                setattr(scope, _REGISTRY_ATTR, registry)
            except (TypeError, AttributeError):
                raise UsageError(f"{scopestring(scope)} cannot hold overloads") from None
            log.debug("Provisioned overload registry for %s", scopestring(scope))
    return registry


def has_registry(scope):
    return _own_registry(scope) is not None


def registry_of(scope):
    """Return the registry owned by scope.

    Raises:
        UsageError: If the scope never opted in to overloading.
    """
    registry = _own_registry(scope)
    if registry is None:
        raise UsageError(f"{scopestring(scope)} does not support overloading")
    return registry
