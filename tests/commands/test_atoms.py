"""Tests for the atoms CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from valparse.cli import cli
from valparse.domain.atoms import ATOMS


@pytest.mark.usefixtures("isolated_dir")
class TestAtomsCommand:
    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["atoms"])
        assert result.exit_code == 0
        assert "is_missing" in result.stdout
        assert "contains non-function item" in result.stdout

    def test_quiet_lists_names(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "atoms"])
        assert result.exit_code == 0
        assert result.stdout.split() == list(ATOMS)

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "atoms"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == len(ATOMS)

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["atoms", "--examples"])
        assert result.exit_code == 0
        assert "valparse -q atoms" in result.output
