"""Rule evaluation: validate, optionally parse, and freeze a value.

Rules run one at a time in declaration order and stop at the first
failure. Rules declared before ``parse`` see the original input; rules
declared after it see the parsed value. On success the (parsed) value is
returned as a shallow immutable snapshot; on failure a single
:class:`ValidationError` names the rule and renders the original input.

Two entry points:
- :func:`validate` runs synchronously and rejects asynchronous rule sets.
- :func:`validate_async` awaits asynchronous rules and parsers in order.

:func:`evaluate` picks between them from the compiled tags.

Example::

    validate("ab", {
        "is not ab": lambda s: s != "ab",
        "parse": str.upper,
        "is not AB": lambda s: s != "AB",
    })  # -> "AB"
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

from valparse.domain.errors import (
    PARSE_FAULT_LABEL,
    Failure,
    FailureKind,
    RuleConfigError,
    ValidationError,
)
from valparse.domain.freeze import freeze
from valparse.domain.rules import (
    AnyOf,
    AsyncPredicate,
    Const,
    ParseEntry,
    Rule,
    RuleConfig,
    RuleSet,
)
from valparse.domain.serialize import serialize

logger = logging.getLogger(__name__)


@dataclass
class _Evaluation:
    """Transient state of one evaluation call."""

    data: Any
    value: Any = None
    parsed: bool = False

    @property
    def param(self) -> Any:
        return self.value if self.parsed else self.data

    def parsed_to(self, value: Any) -> None:
        self.value = value
        self.parsed = True

    def invalid(self, label: str) -> ValidationError:
        failure = Failure(label=label, kind=FailureKind.INVALID, rendered=serialize(self.data))
        logger.debug("Rule failed: %s", label)
        return ValidationError(failure, self.data)

    def fault(self, label: str, exc: Exception) -> ValidationError:
        failure = Failure(
            label=label,
            kind=FailureKind.FAULT,
            rendered=serialize(self.data),
            fault_type=type(exc).__name__,
            fault_message=str(exc),
        )
        logger.debug("Rule raised %s: %s", failure.fault_type, label)
        return ValidationError(failure, self.data, exc)


def _settled(result: Any, what: str) -> Any:
    """Reject an awaitable produced by a step tagged as synchronous."""
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        raise TypeError(f"Synchronous {what} returned an awaitable; use an async function")
    return result


def _check(rule: Rule, value: Any) -> bool:
    if isinstance(rule, Const):
        return rule.failed
    if isinstance(rule, AnyOf):
        return any(_check(leaf, value) for leaf in rule.rules)
    return bool(_settled(rule(value), "rule"))


async def _check_async(rule: Rule, value: Any) -> bool:
    if isinstance(rule, AnyOf):
        for leaf in rule.rules:
            if await _check_async(leaf, value):
                return True
        return False
    if isinstance(rule, AsyncPredicate):
        return bool(await rule(value))
    return _check(rule, value)


def validate(data: Any, config: RuleConfig | RuleSet) -> Any:
    """Validate *data* synchronously and return the frozen (parsed) value.

    Immutable values come back as the same object. Mutable containers come
    back as read-only shallow copies (list to tuple, dict to
    ``MappingProxyType``, set to frozenset), so ``validate(x, ...) is x``
    holds only when *x* is already immutable.

    Raises:
        ValidationError: A rule failed or raised, or the parse step raised.
        RuleConfigError: The configuration is malformed or asynchronous.
    """
    rules = RuleSet.compile(config)
    if rules.is_async:
        raise RuleConfigError("Rule set has asynchronous entries; use validate_async()")

    state = _Evaluation(data)
    for entry in rules.entries:
        if isinstance(entry, ParseEntry):
            try:
                state.parsed_to(_settled(entry.parser(data), "parse step"))
            except Exception as exc:
                raise state.fault(PARSE_FAULT_LABEL, exc) from exc
            continue
        try:
            failed = _check(entry.rule, state.param)
        except Exception as exc:
            raise state.fault(entry.label, exc) from exc
        if failed:
            raise state.invalid(entry.label)
    return freeze(state.param)


async def validate_async(data: Any, config: RuleConfig | RuleSet) -> Any:
    """Validate *data*, awaiting asynchronous rules and parsers one at a time."""
    rules = RuleSet.compile(config)

    state = _Evaluation(data)
    for entry in rules.entries:
        if isinstance(entry, ParseEntry):
            try:
                result = entry.parser(data)
                if entry.parser.is_async:
                    result = await result
                state.parsed_to(_settled(result, "parse step"))
            except Exception as exc:
                raise state.fault(PARSE_FAULT_LABEL, exc) from exc
            continue
        try:
            failed = await _check_async(entry.rule, state.param)
        except Exception as exc:
            raise state.fault(entry.label, exc) from exc
        if failed:
            raise state.invalid(entry.label)
    return freeze(state.param)


def evaluate(data: Any, config: RuleConfig | RuleSet) -> Any | Coroutine[Any, Any, Any]:
    """Validate synchronously, or return a coroutine if any entry is asynchronous."""
    rules = RuleSet.compile(config)
    if rules.is_async:
        return validate_async(data, rules)
    return validate(data, rules)
