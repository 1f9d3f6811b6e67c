"""Shared pytest fixtures and test helpers for valparse tests."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from valparse.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by the CLI under test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    vp = logging.getLogger("valparse")
    vp_level = vp.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    vp.setLevel(vp_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """CWD without any valparse.toml above it that the test did not write."""
    monkeypatch.delenv("VALPARSE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def slow(func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap *func* in a coroutine function that resolves after a short delay.

    The wrapper keeps *func*'s signature, so nullary closures stay nullary.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any) -> Any:
        await asyncio.sleep(0.001)
        return func(*args)

    return wrapper


def asyncify(config: dict[str, Any]) -> dict[str, Any]:
    """Replace every callable in a rule config (including list entries) with ``slow()``."""

    def convert(expr: Any) -> Any:
        if isinstance(expr, list):
            return [convert(item) for item in expr]
        return slow(expr) if callable(expr) else expr

    return {label: convert(expr) for label, expr in config.items()}
