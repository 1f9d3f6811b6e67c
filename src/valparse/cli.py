"""``valparse`` console entry point.

Global flags are folded into :class:`VpSettings` once, before any
subcommand runs; subcommands read them back through ``AppContext``.
"""

from __future__ import annotations

import click

from valparse import __version__
from valparse.commands import register_commands
from valparse.commands._context import AppContext
from valparse.config.settings import VpSettings

_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=_CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="valparse")
@click.option("-c", "--config", "config_path", help="Read settings from this TOML file.")
@click.option("--json", "json_output", is_flag=True, help="Emit the result envelope as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the essential line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and per-step timings.")
@click.option("--log-json", is_flag=True, help="Write log lines to stderr as JSON.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """Check JSON documents against ordered validation rules.

    Run a subcommand with --examples to see typical invocations.
    """
    ctx.obj = AppContext(
        VpSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
