"""Command: export a recorded session in the optimizer's save format."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import click

from completionist_archiver.domain.export import ExportDocument
from completionist_archiver.services.archive import ArchiveService

if TYPE_CHECKING:
    from completionist_archiver.commands._context import AppContext


@click.command(
    epilog="""\b
Examples:
  completionist-archiver export session.jsonl -o archive.json
  completionist-archiver export session.jsonl --resources-dir ./StarRailData
  capture-tool | completionist-archiver export - --stop-when-ready > archive.json"""
)
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the export document here instead of stdout.",
)
@click.option(
    "--resources-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Read reference data from a local checkout instead of the network.",
)
@click.option(
    "--stop-when-ready",
    is_flag=True,
    help="Stop reading once uid, achievements, and books have all been seen.",
)
@click.pass_obj
def export(
    app: AppContext,
    input_file: TextIO,
    output: Path | None,
    resources_dir: Path | None,
    stop_when_ready: bool,
) -> None:
    """Replay decoded commands from INPUT_FILE (JSON Lines, '-' for stdin)."""
    settings = app.settings
    if resources_dir is not None:
        settings = settings.model_copy(
            update={"resources": settings.resources.model_copy(update={"local_dir": resources_dir})}
        )

    result = ArchiveService(settings).run(input_file, stop_when_ready=stop_when_ready)
    if not result.ok:
        app.emit(result)
        return

    document = ExportDocument.model_validate(result.data["document"])
    rendered = document.model_dump_json(indent=2)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
        app.emit(result)
    elif settings.json_output:
        app.emit(result)
    else:
        click.echo(rendered)
        app.emit(result, err=True)
