"""Call-time selection of an overload."""

import inspect
import logging

from .registry import has_registry, registry_of
from .signatures import TypeSignature, compatible
from .utils import OverloadNotImplemented, scopestring, sigstring

log = logging.getLogger(__name__)


def ancestor_chain(scope):
    """Return the scopes consulted when resolving a call on scope.

    For a class, this is its mro restricted to the classes that own a
    registry, most derived first. A module only consults itself.
    """
    if inspect.ismodule(scope):
        return [scope] if has_registry(scope) else []
    return [cls for cls in scope.__mro__ if has_registry(cls)]


class Dispatcher:
    """Resolve a method name and argument types to a single overload.

    Arguments:
        chain: Function that maps a scope to the ordered list of scopes whose
            registries are consulted. Defaults to ``ancestor_chain``.
    """

    def __init__(self, chain=ancestor_chain):
        self.chain = chain

    def resolve_all(self, name, scope, actual_types):
        """Return every compatible overload, closest scope first.

        Within one scope, overloads come in registration order.
        """
        actual_types = tuple(getattr(actual_types, "types", actual_types))
        return [
            record
            for ancestor in self.chain(scope)
            for record in registry_of(ancestor).query(name)
            if compatible(record.signature, actual_types)
        ]

    def resolve(self, name, scope, actual_types):
        """Select the overload to run.

        An overload declared directly on scope wins over inherited ones.
        Otherwise the first compatible overload in chain order is selected.

        Raises:
            OverloadNotImplemented: If no overload is compatible.
        """
        actual_types = tuple(getattr(actual_types, "types", actual_types))
        candidates = self.resolve_all(name, scope, actual_types)
        if not candidates:
            log.debug(
                "No overload of %s in %s for [%s]",
                name,
                scopestring(scope),
                sigstring(actual_types),
            )
            raise OverloadNotImplemented(name, scope, actual_types)
        for record in candidates:
            if record.owner is scope:
                break
        else:
            record = candidates[0]
        log.debug("Resolved %s in %s to %r", name, scopestring(scope), record)
        return record

    def resolve_for_values(self, name, scope, *args):
        return self.resolve(name, scope, TypeSignature.of_values(*args))

    def display_resolution(self, name, scope, *types):
        """Print every overload of name visible from scope.

        Compatible overloads are marked with ``+``, and the one that would be
        selected with ``#``.
        """
        try:
            selected = self.resolve(name, scope, types)
        except OverloadNotImplemented:
            selected = None
        print(f"Resolution of {name}({sigstring(types)}) in {scopestring(scope)}")
        for ancestor in self.chain(scope):
            for record in registry_of(ancestor).query(name):
                if record is selected:
                    mark = "#"
                elif compatible(record.signature, types):
                    mark = "+"
                else:
                    mark = " "
                print(f"{mark} {scopestring(ancestor)}.{name}{record.signature}")
        if selected is None:
            print("No compatible overload.")


default_dispatcher = Dispatcher()


def display_resolution(name, scope, *types):
    default_dispatcher.display_resolution(name, scope, *types)
