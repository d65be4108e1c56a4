"""Exporter — abstract foundation for command-stream exporters.

Every exporter receives the reference snapshot and the protocol's command
ids at construction time, reads decoded commands one at a time, and turns
its accumulated state into a single export document exactly once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from completionist_archiver.domain.commands import CommandIds, GameCommand
    from completionist_archiver.infrastructure.reference import ReferenceSnapshot

_Export = TypeVar("_Export")


class ExporterPhase(StrEnum):
    """Exporter lifecycle. FINALIZED is terminal."""

    COLLECTING = "collecting"
    FINALIZED = "finalized"


class ExporterFinalizedError(RuntimeError):
    """Raised when an exporter is used after :meth:`Exporter.finalize`."""


class Exporter(ABC, Generic[_Export]):
    """Abstract base for exporters.

    Usage::

        exporter = OptimizerExporter(snapshot, command_ids)
        for command in commands:
            exporter.feed(command)
            if exporter.is_ready():
                break
        document = exporter.finalize()
    """

    def __init__(self, snapshot: ReferenceSnapshot, command_ids: CommandIds) -> None:
        self._snapshot = snapshot
        self._command_ids = command_ids
        self._phase = ExporterPhase.COLLECTING

    @property
    def phase(self) -> ExporterPhase:
        return self._phase

    def feed(self, command: GameCommand) -> None:
        """Read one decoded command."""
        self._require_collecting("feed")
        self._read_command(command)

    def finalize(self) -> _Export:
        """Produce the export document and move to the terminal phase."""
        self._require_collecting("finalize")
        document = self._export()
        self._phase = ExporterPhase.FINALIZED
        return document

    @abstractmethod
    def is_ready(self) -> bool:
        """Whether every data category has been observed at least once."""

    @abstractmethod
    def _read_command(self, command: GameCommand) -> None: ...

    @abstractmethod
    def _export(self) -> _Export: ...

    def _require_collecting(self, operation: str) -> None:
        if self._phase is ExporterPhase.FINALIZED:
            raise ExporterFinalizedError(f"cannot {operation}: exporter already finalized")
