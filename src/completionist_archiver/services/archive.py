"""ArchiveService — reference bootstrap plus exporter run over a command stream.

The only place that turns bootstrap and stream exceptions into
ServiceResult errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from completionist_archiver.infrastructure.reference import (
    EncodingError,
    NetworkError,
    ReferenceDataError,
    ReferenceSnapshot,
    SchemaError,
    SourceUnavailableError,
    load_reference_snapshot,
    load_reference_snapshot_from_dir,
)
from completionist_archiver.infrastructure.stream import CommandStreamError, read_commands
from completionist_archiver.services.exporter import OptimizerExporter
from completionist_archiver.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    import requests

    from completionist_archiver.config.settings import ArchiverSettings
    from completionist_archiver.domain.commands import GameCommand

logger = logging.getLogger(__name__)

_ERROR_CODES: dict[type[ReferenceDataError], str] = {
    NetworkError: "NETWORK_ERROR",
    SourceUnavailableError: "SOURCE_UNAVAILABLE",
    SchemaError: "SCHEMA_ERROR",
    EncodingError: "ENCODING_ERROR",
}


class ArchiveService:
    """Builds the reference snapshot and drives an OptimizerExporter."""

    def __init__(self, settings: ArchiverSettings) -> None:
        self._settings = settings

    def load_snapshot(self, *, session: requests.Session | None = None) -> ReferenceSnapshot:
        """Build the snapshot from ``resources.local_dir`` or the remote endpoints.

        Raises:
            ReferenceDataError: any fetch, parse, or decode failure.
        """
        resources = self._settings.resources
        if resources.local_dir is not None:
            return load_reference_snapshot_from_dir(resources.local_dir)
        return load_reference_snapshot(resources, session=session)

    def archive(
        self,
        snapshot: ReferenceSnapshot,
        commands: Iterable[GameCommand],
        *,
        stop_when_ready: bool = False,
    ) -> ServiceResult:
        """Feed *commands* through a fresh exporter and finalize it."""
        exporter = OptimizerExporter(snapshot, self._settings.commands.to_command_ids())
        commands_read = 0
        try:
            for command in commands:
                exporter.feed(command)
                commands_read += 1
                if stop_when_ready and exporter.is_ready():
                    logger.info("all data recorded after %d commands", commands_read)
                    break
        except CommandStreamError as exc:
            return ServiceResult(
                ok=False,
                op="export_optimizer",
                error=ServiceError(
                    code="INVALID_STREAM",
                    message=str(exc),
                    detail={"line": exc.line_number, "commands_read": commands_read},
                ),
            )

        ready = exporter.is_ready()
        missing = exporter.missing()
        document = exporter.finalize()
        data: dict[str, Any] = {
            "document": document.model_dump(mode="json"),
            "ready": ready,
            "commands_read": commands_read,
        }
        return ServiceResult(
            ok=True,
            op="export_optimizer",
            data=data,
            warnings=[f"{gap} not recorded" for gap in missing],
        )

    def run(
        self,
        lines: Iterable[str],
        *,
        stop_when_ready: bool = False,
        session: requests.Session | None = None,
    ) -> ServiceResult:
        """Load reference data, then archive the recorded stream in *lines*."""
        try:
            snapshot = self.load_snapshot(session=session)
        except ReferenceDataError as exc:
            logger.error("reference data unavailable: %s", exc)
            return ServiceResult(
                ok=False,
                op="export_optimizer",
                error=ServiceError(
                    code=_ERROR_CODES.get(type(exc), "REFERENCE_DATA_ERROR"),
                    message=str(exc),
                    detail={"source": exc.source},
                ),
            )
        return self.archive(snapshot, read_commands(lines), stop_when_ready=stop_when_ready)
