"""Locate the valparse.toml that applies to an invocation.

Resolution order: ``--config``, then ``$VALPARSE_CONFIG``, then the
nearest ``valparse.toml`` in the start directory or one of its parents.
An override naming a missing file disables discovery.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "valparse.toml"
CONFIG_ENV_VAR = "VALPARSE_CONFIG"


def _existing(path: str | Path) -> Path | None:
    candidate = Path(path)
    return candidate if candidate.is_file() else None


def _ancestors(start: Path) -> Iterator[Path]:
    """Yield *start* and each parent up to the filesystem root."""
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Config from ``$VALPARSE_CONFIG``, else the nearest valparse.toml above *start*."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return _existing(override)
    for directory in _ancestors(start or Path.cwd()):
        found = _existing(directory / CONFIG_FILENAME)
        if found:
            return found
    return None


def locate_config(explicit: str | Path | None = None, start: Path | None = None) -> Path | None:
    """Resolve the config file for a CLI call; *explicit* is the ``--config`` value."""
    if explicit:
        return _existing(explicit)
    return find_config(start)
