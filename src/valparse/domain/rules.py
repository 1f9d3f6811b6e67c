"""Rule tags and rule-set compilation.

A rule configuration maps labels to expressions, in evaluation order.
Expressions are normalized once into a closed set of tags:

- ``Const``: a literal verdict (``True`` fails).
- ``Predicate``: a synchronous callable; a truthy return fails.
- ``AsyncPredicate``: a callable returning an awaitable verdict.
- ``AnyOf``: a list of the above; fails at the first truthy entry.

The reserved ``"parse"`` label holds the single transform step
(``Transform``, ``AsyncTransform``, or a literal ``Replace``).

INVARIANT: A compiled RuleSet is immutable and knows whether it needs
the asynchronous evaluator (``RuleSet.is_async``).
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from valparse.domain.errors import RuleConfigError

PARSE = "parse"

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def takes_value(func: Callable[..., Any]) -> bool:
    """Whether *func* accepts a positional argument.

    Nullary callables (closures over the input) are called without one.
    Callables without an introspectable signature are assumed unary.
    """
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return True
    return any(p.kind in _POSITIONAL for p in params)


# ── Tags ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Const:
    failed: bool

    is_async = False


@dataclass(frozen=True)
class _Step:
    """A wrapped callable, called with the current value if it takes one."""

    func: Callable[..., Any]
    unary: bool | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.unary is None:
            object.__setattr__(self, "unary", takes_value(self.func))

    def __call__(self, value: Any) -> Any:
        return self.func(value) if self.unary else self.func()


class Predicate(_Step):
    is_async = False


class AsyncPredicate(_Step):
    is_async = True


Leaf = Const | Predicate | AsyncPredicate


@dataclass(frozen=True)
class AnyOf:
    rules: tuple[Leaf, ...]

    @property
    def is_async(self) -> bool:
        return any(rule.is_async for rule in self.rules)


Rule = Leaf | AnyOf


class Transform(_Step):
    is_async = False


class AsyncTransform(_Step):
    is_async = True


@dataclass(frozen=True)
class Replace:
    value: Any

    is_async = False

    def __call__(self, _value: Any) -> Any:
        return self.value


Parser = Transform | AsyncTransform | Replace


# ── Normalization ────────────────────────────────────────────────────


def to_leaf(expr: Any) -> Leaf:
    """Normalize a single (non-list) rule expression."""
    if isinstance(expr, (Const, Predicate, AsyncPredicate)):
        return expr
    if isinstance(expr, (AnyOf, list, tuple)):
        raise RuleConfigError("Nested rule lists are not supported")
    if isinstance(expr, (Transform, AsyncTransform, Replace)):
        raise RuleConfigError("Parse steps are only allowed under the 'parse' label")
    if inspect.iscoroutinefunction(expr):
        return AsyncPredicate(expr)
    if callable(expr):
        return Predicate(expr)
    return Const(bool(expr))


def to_rule(expr: Any) -> Rule:
    """Normalize a rule expression into its tag."""
    if isinstance(expr, AnyOf):
        return expr
    if isinstance(expr, (list, tuple)):
        return AnyOf(tuple(to_leaf(item) for item in expr))
    return to_leaf(expr)


def to_parser(expr: Any) -> Parser:
    """Normalize a ``parse`` expression into its tag."""
    if isinstance(expr, (Transform, AsyncTransform, Replace)):
        return expr
    if isinstance(expr, (Predicate, AsyncPredicate)):
        return AsyncTransform(expr.func) if expr.is_async else Transform(expr.func)
    if inspect.iscoroutinefunction(expr):
        return AsyncTransform(expr)
    if callable(expr):
        return Transform(expr)
    return Replace(expr)


# ── RuleSet ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RuleEntry:
    label: str
    rule: Rule

    @property
    def is_async(self) -> bool:
        return self.rule.is_async


@dataclass(frozen=True)
class ParseEntry:
    parser: Parser

    label = PARSE

    @property
    def is_async(self) -> bool:
        return self.parser.is_async


Entry = RuleEntry | ParseEntry

RuleConfig = Mapping[str, Any] | Iterable[tuple[str, Any]]


@dataclass(frozen=True)
class RuleSet:
    """Ordered, compiled rule configuration."""

    entries: tuple[Entry, ...] = ()

    @property
    def is_async(self) -> bool:
        return any(entry.is_async for entry in self.entries)

    @property
    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]

    @classmethod
    def compile(cls, config: RuleConfig | RuleSet) -> RuleSet:
        """Compile a label mapping or a sequence of ``(label, expr)`` pairs.

        Raises:
            RuleConfigError: On a non-string label, a nested rule list, or
                more than one ``parse`` entry.
        """
        if isinstance(config, RuleSet):
            return config
        pairs = config.items() if isinstance(config, Mapping) else config

        entries: list[Entry] = []
        seen_parse = False
        for label, expr in pairs:
            if not isinstance(label, str):
                raise RuleConfigError(f"Rule labels must be strings, got {label!r}")
            if label == PARSE:
                if seen_parse:
                    raise RuleConfigError("Only one 'parse' entry is allowed per rule set")
                seen_parse = True
                entries.append(ParseEntry(to_parser(expr)))
            else:
                entries.append(RuleEntry(label, to_rule(expr)))
        return cls(tuple(entries))
