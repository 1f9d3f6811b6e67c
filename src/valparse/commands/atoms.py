"""Command: list the atom catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valparse.commands import VpCommand

if TYPE_CHECKING:
    from valparse.commands._context import AppContext


@click.command(
    cls=VpCommand,
    examples="""\
  valparse atoms
  valparse -q atoms
  valparse --json atoms""",
)
@click.pass_obj
def atoms(app: AppContext) -> None:
    """List catalog atoms and their failure labels."""
    from valparse.services.check import CheckService

    app.emit(CheckService(app.settings).atoms())
