"""Command: validate a JSON document against catalog atoms."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from valparse.commands import VpCommand

if TYPE_CHECKING:
    from valparse.commands._context import AppContext


@click.command(
    cls=VpCommand,
    examples="""\
  valparse check config.json --atom non_object
  echo '"abc"' | valparse check - --atom is_missing --atom non_string
  valparse check name.json --prefix name --atom non-string
  valparse check level.json --one-of '["debug", "info", "warning"]'
  valparse --json check data.json --atom non_string_in_array""",
)
@click.argument("document", type=click.File("r", encoding="utf-8"))
@click.option(
    "-a",
    "--atom",
    "atom_names",
    multiple=True,
    help="Catalog atom to apply (repeatable; see 'valparse atoms').",
)
@click.option("-p", "--prefix", default=None, help="Prefix for rule labels, e.g. a field name.")
@click.option("--one-of", default=None, help="JSON array (or object) of allowed values.")
@click.pass_obj
def check(
    app: AppContext,
    document: TextIO,
    atom_names: tuple[str, ...],
    prefix: str | None,
    one_of: str | None,
) -> None:
    """Validate a JSON DOCUMENT (a path, or - for stdin) against atoms."""
    from valparse.services.check import CheckService

    svc = CheckService(app.settings)
    app.emit(svc.check(document.read(), atoms=atom_names, prefix=prefix, one_of=one_of))
