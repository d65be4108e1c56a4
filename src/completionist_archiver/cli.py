"""Root CLI group for completionist-archiver with global flags and command registration."""

from __future__ import annotations

import click

from completionist_archiver import __version__
from completionist_archiver.commands import register_commands
from completionist_archiver.commands._context import AppContext
from completionist_archiver.config.settings import ArchiverSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="completionist-archiver")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--trace", is_flag=True, help="Log every command read, including ignored ones.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    trace: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """completionist-archiver — export achievements and books from decoded game traffic."""
    settings = ArchiverSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings, trace=trace)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
