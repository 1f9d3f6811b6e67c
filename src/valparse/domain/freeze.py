"""Shallow immutable snapshots of evaluation results.

Immutable values come back unchanged (same identity). Mutable builtin
containers cannot be frozen in place, so they are converted to their
read-only counterparts. Nested values are neither copied nor frozen.

Register further conversions with ``@freeze.register``.
"""

from __future__ import annotations

from functools import singledispatch
from types import MappingProxyType
from typing import Any


@singledispatch
def freeze(value: Any) -> Any:
    """Return a read-only view of *value* (shallow)."""
    return value


@freeze.register
def _(value: list) -> tuple[Any, ...]:  # type: ignore[type-arg]
    return tuple(value)


@freeze.register
def _(value: dict) -> MappingProxyType[Any, Any]:  # type: ignore[type-arg]
    return MappingProxyType(dict(value))


@freeze.register
def _(value: set) -> frozenset[Any]:  # type: ignore[type-arg]
    return frozenset(value)


@freeze.register
def _(value: bytearray) -> bytes:
    return bytes(value)
