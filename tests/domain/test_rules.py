"""Tests for rule normalization and RuleSet compilation."""

from __future__ import annotations

from typing import Any

import pytest

from valparse.domain.errors import RuleConfigError
from valparse.domain.rules import (
    PARSE,
    AnyOf,
    AsyncPredicate,
    AsyncTransform,
    Const,
    ParseEntry,
    Predicate,
    Replace,
    RuleEntry,
    RuleSet,
    Transform,
    takes_value,
    to_parser,
    to_rule,
)


async def _async_check(value: Any) -> bool:
    return False


class TestTakesValue:
    def test_unary(self) -> None:
        assert takes_value(lambda v: v) is True

    def test_nullary(self) -> None:
        assert takes_value(lambda: None) is False

    def test_varargs(self) -> None:
        assert takes_value(lambda *args: None) is True

    def test_keyword_only_is_nullary(self) -> None:
        assert takes_value(lambda *, v=1: None) is False

    def test_bound_method(self) -> None:
        assert takes_value("abc".startswith) is True


class TestToRule:
    @pytest.mark.parametrize(
        ("expr", "failed"), [(True, True), (False, False), (1, True), (None, False)]
    )
    def test_literals_become_const(self, expr: Any, failed: bool) -> None:
        assert to_rule(expr) == Const(failed)

    def test_callable_becomes_predicate(self) -> None:
        rule = to_rule(len)
        assert isinstance(rule, Predicate)
        assert rule.is_async is False

    def test_coroutine_function_becomes_async_predicate(self) -> None:
        rule = to_rule(_async_check)
        assert isinstance(rule, AsyncPredicate)
        assert rule.is_async is True

    def test_list_becomes_any_of(self) -> None:
        rule = to_rule([False, len, _async_check])
        assert isinstance(rule, AnyOf)
        assert [type(r) for r in rule.rules] == [Const, Predicate, AsyncPredicate]
        assert rule.is_async is True

    def test_sync_list_is_sync(self) -> None:
        assert to_rule([True, len]).is_async is False

    def test_nested_list_rejected(self) -> None:
        with pytest.raises(RuleConfigError, match="Nested"):
            to_rule([[True]])

    def test_parse_step_outside_parse_rejected(self) -> None:
        with pytest.raises(RuleConfigError):
            to_rule(Transform(str))

    def test_tags_pass_through(self) -> None:
        tag = AsyncPredicate(lambda v: None)
        assert to_rule(tag) is tag


class TestPredicateCalls:
    def test_unary_receives_value(self) -> None:
        assert Predicate(lambda v: v * 2)(4) == 8

    def test_nullary_called_without_value(self) -> None:
        assert Predicate(lambda: "closed")(4) == "closed"

    def test_explicit_arity(self) -> None:
        assert Predicate(lambda *args: len(args), unary=False)(4) == 0


class TestToParser:
    def test_callable_becomes_transform(self) -> None:
        assert isinstance(to_parser(str.upper), Transform)

    def test_coroutine_function_becomes_async_transform(self) -> None:
        assert isinstance(to_parser(_async_check), AsyncTransform)

    def test_literal_becomes_replace(self) -> None:
        parser = to_parser([1, 2])
        assert parser == Replace([1, 2])
        assert parser("ignored") == [1, 2]

    def test_predicate_tag_converted(self) -> None:
        assert isinstance(to_parser(AsyncPredicate(_async_check)), AsyncTransform)


class TestRuleSetCompile:
    def test_preserves_order(self) -> None:
        rules = RuleSet.compile({"b": False, PARSE: str, "a": False})
        assert rules.labels == ["b", "parse", "a"]
        assert isinstance(rules.entries[0], RuleEntry)
        assert isinstance(rules.entries[1], ParseEntry)

    def test_pairs(self) -> None:
        rules = RuleSet.compile([("one", True), ("two", len)])
        assert rules.labels == ["one", "two"]

    def test_empty(self) -> None:
        rules = RuleSet.compile({})
        assert rules.entries == ()
        assert rules.is_async is False

    def test_is_async_from_rule(self) -> None:
        assert RuleSet.compile({"x": [False, _async_check]}).is_async is True

    def test_is_async_from_parse(self) -> None:
        assert RuleSet.compile({PARSE: _async_check}).is_async is True

    def test_compiled_set_returned_as_is(self) -> None:
        rules = RuleSet.compile({"x": False})
        assert RuleSet.compile(rules) is rules

    def test_duplicate_parse_rejected(self) -> None:
        with pytest.raises(RuleConfigError, match="parse"):
            RuleSet.compile([(PARSE, str), (PARSE, int)])

    def test_non_string_label_rejected(self) -> None:
        with pytest.raises(RuleConfigError, match="strings"):
            RuleSet.compile({1: True})  # type: ignore[dict-item]

    def test_entries_are_immutable(self) -> None:
        rules = RuleSet.compile({"x": False})
        with pytest.raises(AttributeError):
            rules.entries = ()  # type: ignore[misc]
