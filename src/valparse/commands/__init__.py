"""valparse subcommands and the command class they share.

Subcommand modules are imported inside register_commands(), so building
the root group stays cheap.
"""

from __future__ import annotations

from typing import Any

import click


class VpCommand(click.Command):
    """Command with an eager ``--examples`` flag printing *examples* and exiting."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


def register_commands(cli: click.Group) -> None:
    """Attach check, atoms and render to *cli*."""
    from valparse.commands.atoms import atoms
    from valparse.commands.check import check
    from valparse.commands.render import render

    for command in (check, atoms, render):
        cli.add_command(command)
