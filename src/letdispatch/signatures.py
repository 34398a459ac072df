"""Utilities to deal with type signatures."""

import typing
from dataclasses import dataclass

from .utils import Any, UsageError, sigstring


def normalize_marker(marker):
    """Return the canonical form of a type marker given to ``let``.

    ``typing.Any`` is folded into the ``Any`` wildcard. Only plain classes
    are accepted as concrete markers.
    """
    if marker is Any or marker is typing.Any:
        return Any
    if isinstance(marker, type) and typing.get_origin(marker) is None:
        return marker
    raise UsageError(f"{marker!r} cannot be used as a type marker; use a class or Any.")


def _markers_match(m1, m2):
    return m1 is Any or m2 is Any or m1 is m2


def compatible(declared, actual):
    """Check whether two type tuples accept each other.

    The tuples must have the same length, and at every position the markers
    must be identical or one of them must be ``Any``.
    """
    declared = getattr(declared, "types", declared)
    actual = getattr(actual, "types", actual)
    if len(declared) != len(actual):
        return False
    return all(_markers_match(d, a) for d, a in zip(declared, actual))


@dataclass(frozen=True)
class TypeSignature:
    types: tuple

    @classmethod
    def from_markers(cls, *markers):
        return cls(types=tuple(map(normalize_marker, markers)))

    @classmethod
    def of_values(cls, *args):
        return cls(types=tuple(map(type, args)))

    @property
    def arity(self):
        return len(self.types)

    def compatible(self, actual):
        return compatible(self, actual)

    def __len__(self):
        return len(self.types)

    def __iter__(self):
        return iter(self.types)

    def __str__(self):
        return f"({sigstring(self.types)})"
