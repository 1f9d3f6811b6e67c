"""Command: show how a value renders in failure messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from valparse.commands import VpCommand

if TYPE_CHECKING:
    from valparse.commands._context import AppContext


@click.command(
    cls=VpCommand,
    examples="""\
  valparse render payload.json
  echo '{"token": "abcdefghijklmnopqrstuvwxyz"}' | valparse -q render -""",
)
@click.argument("document", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def render(app: AppContext, document: TextIO) -> None:
    """Render a JSON DOCUMENT (a path, or - for stdin) compactly."""
    from valparse.services.check import CheckService

    app.emit(CheckService(app.settings).render(document.read()))
