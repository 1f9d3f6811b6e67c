"""Labeled predicate atoms and rule-building helpers.

An atom is a unary predicate carrying its own failure label. True means
the value is invalid, matching rule semantics::

    validate(value, unless("name", is_missing, non_string))
    # rules: {"name is missing": is_missing, "name is non-string": non_string}

Atom names follow the checks they perform on Python types:
"array" means ``list`` or ``tuple``, "object" means a mapping, and
``bool`` is never a number.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from valparse.domain.serialize import serialize


@dataclass(frozen=True)
class Atom:
    """A predicate with a human-readable failure label."""

    label: str
    check: Callable[[Any], bool]

    def __call__(self, value: Any) -> bool:
        return self.check(value)


def atom(label: str) -> Callable[[Callable[[Any], bool]], Atom]:
    """Decorator: turn a predicate function into an :class:`Atom`."""

    def decorator(check: Callable[[Any], bool]) -> Atom:
        return Atom(label, check)

    return decorator


def unless(*args: str | Atom) -> dict[str, Atom]:
    """Build a rule mapping from atoms, keyed by their labels.

    A leading string is a prefix: ``unless("x", is_missing)`` yields
    ``{"x is missing": is_missing}``. Prefixed labels are lower-cased;
    unprefixed labels keep their case.
    """
    prefix = ""
    atoms = list(args)
    if atoms and isinstance(atoms[0], str):
        prefix = f"{atoms.pop(0)} "
    rules: dict[str, Atom] = {}
    for item in atoms:
        if not isinstance(item, Atom):
            raise TypeError(f"unless() expects atoms after the prefix, got {item!r}")
        rules[prefix + item.label.lower() if prefix else item.label] = item
    return rules


def _same_value(left: Any, right: Any) -> bool:
    """Membership equality: bools never match numbers, and NaN matches NaN."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, float) and isinstance(right, float) and left != left and right != right:
        return True
    return bool(left == right)


def not_one_of(values: Iterable[Any] | Mapping[Any, Any]) -> Atom:
    """Atom failing for any value outside *values* (a mapping's values are used).

    ``True`` is not one of ``[1]`` and ``1`` is not one of ``[True]``.
    """
    allowed = list(values.values()) if isinstance(values, Mapping) else list(values)
    return Atom(
        f"is not one of {serialize(allowed)}",
        lambda value: not any(_same_value(value, item) for item in allowed),
    )


# ── Presence ─────────────────────────────────────────────────────────


@atom("is missing")
def is_missing(value: Any) -> bool:
    return value is None


@atom("is empty")
def is_empty(value: Any) -> bool:
    if isinstance(value, (Mapping, str, list, tuple)):
        return not value
    return True


# ── Types ────────────────────────────────────────────────────────────


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@atom("is non-string")
def non_string(value: Any) -> bool:
    return not isinstance(value, str)


@atom("is non-boolean")
def non_boolean(value: Any) -> bool:
    return not isinstance(value, bool)


@atom("is non-number")
def non_number(value: Any) -> bool:
    return isinstance(value, bool) or not isinstance(value, numbers.Real)


@atom("is non-integer")
def non_integer(value: Any) -> bool:
    return isinstance(value, bool) or not isinstance(value, int)


@atom("is non-object")
def non_object(value: Any) -> bool:
    return not isinstance(value, Mapping)


@atom("is non-function")
def non_function(value: Any) -> bool:
    return not callable(value)


@atom("is non-array")
def non_array(value: Any) -> bool:
    return not _is_array(value)


# ── Array arity ──────────────────────────────────────────────────────


def _arity(label: str, *lengths: int) -> Atom:
    return Atom(label, lambda value: not _is_array(value) or len(value) not in lengths)


non_single_array = _arity("is not array of length one", 1)
non_couple_array = _arity("is not array of length two", 2)
non_triple_array = _arity("is not array of length three", 3)
non_single_or_couple_array = _arity("is not array of length one or two", 1, 2)
non_single_or_couple_or_triple_array = _arity("is not array of length one, two, or three", 1, 2, 3)
non_couple_or_triple_array = _arity("is not array of length two or three", 2, 3)


# ── Array items ──────────────────────────────────────────────────────


def _items(label: str, item_check: Atom) -> Atom:
    return Atom(label, lambda value: not _is_array(value) or any(map(item_check, value)))


non_string_in_array = _items("contains non-string item", non_string)
non_boolean_in_array = _items("contains non-boolean item", non_boolean)
non_number_in_array = _items("contains non-number item", non_number)
non_integer_in_array = _items("contains non-integer item", non_integer)
non_array_in_array = _items("contains non-array item", non_array)
non_object_in_array = _items("contains non-object item", non_object)
non_function_in_array = _items("contains non-function item", non_function)


# ── Registry ─────────────────────────────────────────────────────────

ATOMS: dict[str, Atom] = {
    "is_missing": is_missing,
    "is_empty": is_empty,
    "non_string": non_string,
    "non_boolean": non_boolean,
    "non_number": non_number,
    "non_integer": non_integer,
    "non_object": non_object,
    "non_function": non_function,
    "non_array": non_array,
    "non_single_array": non_single_array,
    "non_couple_array": non_couple_array,
    "non_triple_array": non_triple_array,
    "non_single_or_couple_array": non_single_or_couple_array,
    "non_single_or_couple_or_triple_array": non_single_or_couple_or_triple_array,
    "non_couple_or_triple_array": non_couple_or_triple_array,
    "non_string_in_array": non_string_in_array,
    "non_boolean_in_array": non_boolean_in_array,
    "non_number_in_array": non_number_in_array,
    "non_integer_in_array": non_integer_in_array,
    "non_array_in_array": non_array_in_array,
    "non_object_in_array": non_object_in_array,
    "non_function_in_array": non_function_in_array,
}


def get_atom(name: str) -> Atom:
    """Look up a catalog atom by name (dashes are accepted for underscores)."""
    key = name.replace("-", "_")
    try:
        return ATOMS[key]
    except KeyError:
        known = ", ".join(sorted(ATOMS))
        raise KeyError(f"Unknown atom {name!r}; known atoms: {known}") from None
