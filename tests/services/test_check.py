"""Tests for CheckService: check, atoms, render."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from valparse.config.settings import VpSettings
from valparse.domain.atoms import ATOMS, Atom
from valparse.services.check import CheckService


@pytest.fixture
def service(isolated_dir: Path) -> CheckService:
    return CheckService(VpSettings.from_cli(cwd=isolated_dir))


def _service_with(isolated_dir: Path, **overrides: Any) -> CheckService:
    return CheckService(VpSettings.from_cli(cwd=isolated_dir, **overrides))


class TestCheck:
    def test_passing_document(self, service: CheckService) -> None:
        result = service.check('["a", "b"]', atoms=["non_array", "non_string_in_array"])
        assert result.ok
        assert result.op == "check"
        assert result.data == {
            "value": '["a","b"]',
            "rules": ["is non-array", "contains non-string item"],
        }
        assert result.warnings == []

    def test_invalid_document(self, service: CheckService) -> None:
        result = service.check("null", atoms=["is_missing"], prefix="name")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID"
        assert result.error.message == "name is missing: null"
        assert result.error.detail["label"] == "name is missing"
        assert result.error.detail["kind"] == "invalid"
        assert result.error.detail["data"] == "null"
        assert "fault_type" not in result.error.detail

    def test_first_failing_atom_reported(self, service: CheckService) -> None:
        result = service.check("5", atoms=["non_number", "non_string", "non_boolean"])
        assert result.error is not None
        assert result.error.message == "is non-string: 5"

    def test_fault_reported(self, service: CheckService, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(ATOMS, "explodes", Atom("explodes", lambda v: 1 / 0))
        result = service.check("1", atoms=["explodes"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FAULT"
        assert result.error.message == "explodes (ZeroDivisionError): 1\ndivision by zero"
        assert result.error.detail["fault_type"] == "ZeroDivisionError"
        assert result.error.detail["fault_message"] == "division by zero"

    def test_long_strings_truncated_in_message(self, service: CheckService) -> None:
        result = service.check('{"token": "abcdefghijklmnopqrstuvwxyz"}', atoms=["non_array"])
        assert result.error is not None
        assert result.error.message == 'is non-array: {token:"abcdefgh…stuvwxyz"}'

    def test_dashed_atom_names(self, service: CheckService) -> None:
        assert service.check('"x"', atoms=["non-string"]).ok

    def test_unknown_atom(self, service: CheckService) -> None:
        result = service.check('"x"', atoms=["non_thing"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_ATOM"
        assert "non_thing" in result.error.message

    def test_bad_json(self, service: CheckService) -> None:
        result = service.check("{not json", atoms=["is_missing"])
        assert result.error is not None
        assert result.error.code == "BAD_INPUT"
        assert result.error.message.startswith("Invalid JSON in document")

    def test_no_rules_warns(self, service: CheckService) -> None:
        result = service.check('{"a": 1}')
        assert result.ok
        assert result.data["rules"] == []
        assert result.warnings == ["No rules given; the document is accepted as-is"]


class TestOneOf:
    def test_allowed_value(self, service: CheckService) -> None:
        result = service.check('"red"', atoms=["non_string"], one_of='["red", "blue"]')
        assert result.ok
        assert result.data["rules"] == ["is non-string", 'is not one of ["red","blue"]']

    def test_disallowed_value(self, service: CheckService) -> None:
        result = service.check('"green"', one_of='["red", "blue"]', prefix="color")
        assert result.error is not None
        assert result.error.message == 'color is not one of ["red","blue"]: "green"'

    def test_object_uses_values(self, service: CheckService) -> None:
        assert service.check("2", one_of='{"low": 1, "high": 2}').ok

    def test_boolean_not_accepted_for_number(self, service: CheckService) -> None:
        result = service.check("true", one_of="[1, 0]")
        assert result.error is not None
        assert result.error.message == "is not one of [1,0]: true"

    def test_scalar_rejected(self, service: CheckService) -> None:
        result = service.check("1", one_of="1")
        assert result.error is not None
        assert result.error.code == "BAD_INPUT"

    def test_bad_json_rejected(self, service: CheckService) -> None:
        result = service.check("1", one_of="[1,")
        assert result.error is not None
        assert result.error.message.startswith("Invalid JSON in --one-of value")


class TestConfiguredDefaults:
    def test_default_atoms(self, isolated_dir: Path) -> None:
        service = _service_with(isolated_dir, check={"default_atoms": ["is_missing"]})
        result = service.check("null")
        assert result.error is not None
        assert result.error.message == "is missing: null"

    def test_explicit_atoms_override_defaults(self, isolated_dir: Path) -> None:
        service = _service_with(isolated_dir, check={"default_atoms": ["is_missing"]})
        assert service.check("null", atoms=["non_array"]).error is not None
        assert service.check("[]", atoms=["non_array"]).ok

    def test_configured_prefix(self, isolated_dir: Path) -> None:
        service = _service_with(isolated_dir, check={"prefix": "payload"})
        result = service.check("1", atoms=["non_object"])
        assert result.error is not None
        assert result.error.message == "payload is non-object: 1"

    def test_empty_prefix_overrides_configured(self, isolated_dir: Path) -> None:
        service = _service_with(isolated_dir, check={"prefix": "payload"})
        result = service.check("1", atoms=["non_object"], prefix="")
        assert result.error is not None
        assert result.error.message == "is non-object: 1"

    def test_toml_defaults(self, isolated_dir: Path) -> None:
        (isolated_dir / "valparse.toml").write_text(
            '[check]\ndefault_atoms = ["non_string"]\nprefix = "title"\n'
        )
        service = CheckService(VpSettings.from_cli(cwd=isolated_dir))
        result = service.check("3")
        assert result.error is not None
        assert result.error.message == "title is non-string: 3"


class TestAtoms:
    def test_lists_catalog(self, service: CheckService) -> None:
        result = service.atoms()
        assert result.ok
        assert result.data["count"] == len(ATOMS)
        assert {"name": "is_missing", "label": "is missing"} in result.data["items"]


class TestRender:
    def test_render(self, service: CheckService) -> None:
        result = service.render('{"name": "x", "two words": [true, null]}')
        assert result.ok
        assert result.data == {"rendered": '{name:"x","two words":[true,null]}'}

    def test_render_with_configured_limits(self, isolated_dir: Path) -> None:
        service = _service_with(isolated_dir, serialize={"max_length": 4, "keep": 2})
        assert service.render('"abcdefghij"').data["rendered"] == '"ab…ij"'

    def test_render_bad_json(self, service: CheckService) -> None:
        result = service.render("")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "BAD_INPUT"
