"""Per-invocation state handed to subcommands through ``@click.pass_obj``.

Building an AppContext installs logging (and span collection under
``--verbose``); :meth:`AppContext.emit` is the single place results reach
the terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valparse.config.logging import configure_logging
from valparse.output.formatters import OutputSettings, format_result
from valparse.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from valparse.config.settings import VpSettings
    from valparse.services.result import CommandResult


class AppContext:
    """Settings plus output routing for one ``valparse`` run."""

    def __init__(self, settings: VpSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    def emit(self, result: CommandResult) -> None:
        """Print *result*; exit with status 1 if it failed.

        Successful output goes to stdout and failures to stderr. Warnings
        go to stderr as ``WARNING:`` lines, except in JSON mode where the
        envelope already carries them.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
