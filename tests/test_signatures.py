import typing

import pytest

from letdispatch import Any, TypeSignature, UsageError, compatible, normalize_marker


class Animal:
    pass


class Mammal(Animal):
    pass


def test_compatible_exact():
    assert compatible((int, str), (int, str))
    assert not compatible((int,), (str,))
    assert not compatible((int, str), (str, int))


def test_compatible_length():
    assert not compatible((int,), (int, int))
    assert not compatible((int, int), (int,))
    assert not compatible((Any,), ())
    assert not compatible((), (Any,))


def test_compatible_empty():
    assert compatible((), ())
    assert not compatible((), (int,))


def test_compatible_any():
    assert compatible((Any,), (int,))
    assert compatible((Any,), (list,))
    assert compatible((Any, Any), (str, dict))
    assert compatible((int, Any), (int, float))
    assert not compatible((int, Any), (str, float))


def test_compatible_any_is_symmetric():
    assert compatible((int,), (Any,))
    assert compatible((Any,), (Any,))
    assert compatible((int, str), (Any, str))


def test_compatible_exact_class_only():
    assert not compatible((int,), (bool,))
    assert not compatible((Animal,), (Mammal,))
    assert not compatible((object,), (int,))
    assert compatible((Mammal,), (Mammal,))


def test_compatible_accepts_signatures():
    sig = TypeSignature.from_markers(int, Any)
    assert compatible(sig, TypeSignature.of_values(1, "x"))
    assert sig.compatible((int, float))
    assert not sig.compatible((float, float))


def test_normalize_marker():
    assert normalize_marker(int) is int
    assert normalize_marker(Animal) is Animal
    assert normalize_marker(Any) is Any
    assert normalize_marker(typing.Any) is Any


@pytest.mark.parametrize(
    "marker",
    [3, "int", None, typing.List[int], list[int], typing.Union[int, str]],
)
def test_normalize_marker_rejects(marker):
    with pytest.raises(UsageError, match="cannot be used as a type marker"):
        normalize_marker(marker)


def test_signature_from_markers():
    sig = TypeSignature.from_markers(int, typing.Any)
    assert sig.types == (int, Any)
    assert sig.arity == len(sig) == 2
    assert list(sig) == [int, Any]


def test_signature_of_values():
    assert TypeSignature.of_values(1, "a", [2]) == TypeSignature((int, str, list))
    assert TypeSignature.of_values() == TypeSignature(())
    assert TypeSignature.of_values(True).types == (bool,)


def test_signature_str():
    assert str(TypeSignature.from_markers(int, Any, Animal)) == "(int, *, Animal)"
    assert str(TypeSignature(())) == "()"


def test_signature_hashable():
    a = TypeSignature.from_markers(int, str)
    b = TypeSignature.from_markers(int, str)
    assert a == b
    assert len({a, b}) == 1
