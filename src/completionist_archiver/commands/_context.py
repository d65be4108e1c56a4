"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``. Owns logging setup and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from completionist_archiver.config.logging import configure_logging
from completionist_archiver.output.formatters import format_result

if TYPE_CHECKING:
    from completionist_archiver.config.settings import ArchiverSettings
    from completionist_archiver.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ArchiverSettings, *, trace: bool = False) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json, trace=trace)

    def emit(self, result: ServiceResult, *, err: bool = False) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout (stderr when *err*), returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        json_output = self.settings.json_output
        output = format_result(result, json_output=json_output)
        if result.ok:
            click.echo(output, err=err)
            # In JSON mode, warnings are already in the serialized payload.
            if not json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
