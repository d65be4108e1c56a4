"""OptimizerExporter — collects uid, achievements, and books for the optimizer.

Reads three server responses:
- ``PlayerGetTokenScRsp`` — account uid
- ``GetBagScRsp`` — inventory; materials that are known books
- ``GetQuestDataScRsp`` — quests; closed/finished ones that are known achievements

INVARIANT: accepted ids are appended as-is. Seeing the same id twice (the
server resends snapshots on relog) records it twice; the optimizer dedups
on import.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

from completionist_archiver.config.logging import TRACE
from completionist_archiver.domain.commands import CommandKind, SchemaMismatch
from completionist_archiver.domain.export import ExportDocument, ExportMetadata
from completionist_archiver.domain.protocol import (
    GetBagScRsp,
    GetQuestDataScRsp,
    PlayerGetTokenScRsp,
)
from completionist_archiver.services.base import Exporter
from completionist_archiver.services.validators import validate_achievement, validate_book

if TYPE_CHECKING:
    from completionist_archiver.domain.commands import CommandIds, GameCommand
    from completionist_archiver.infrastructure.reference import ReferenceSnapshot

logger = logging.getLogger(__name__)


class OptimizerExporter(Exporter[ExportDocument]):
    """Accumulates accepted ids across a session and emits an ExportDocument."""

    def __init__(self, snapshot: ReferenceSnapshot, command_ids: CommandIds) -> None:
        super().__init__(snapshot, command_ids)
        self._uid: int | None = None
        self._achievements: list[int] = []
        self._books: list[int] = []

    @property
    def uid(self) -> int | None:
        return self._uid

    @property
    def achievements(self) -> tuple[int, ...]:
        return tuple(self._achievements)

    @property
    def books(self) -> tuple[int, ...]:
        return tuple(self._books)

    def set_account_id(self, uid: int) -> None:
        """Record the account uid. Last writer wins."""
        self._require_collecting("set_account_id")
        self._uid = uid

    def add_inventory(self, bag: GetBagScRsp) -> None:
        self._require_collecting("add_inventory")
        books = [
            book
            for material in bag.material_list
            if (book := validate_book(self._snapshot, material)) is not None
        ]
        logger.info("found %d books", len(books))
        self._books.extend(book.id for book in books)

    def add_achievements(self, quests: GetQuestDataScRsp) -> None:
        self._require_collecting("add_achievements")
        achievements = [
            achievement
            for quest in quests.quest_list
            if (achievement := validate_achievement(self._snapshot, quest)) is not None
        ]
        logger.info("found %d achievements", len(achievements))
        self._achievements.extend(achievement.id for achievement in achievements)

    def is_ready(self) -> bool:
        return self._uid is not None and bool(self._achievements) and bool(self._books)

    def _read_command(self, command: GameCommand) -> None:
        with structlog.contextvars.bound_contextvars(
            command_id=command.command_id, command=command.name
        ):
            match self._command_ids.kind_of(command.command_id):
                case CommandKind.TOKEN:
                    logger.debug("detected uid")
                    try:
                        token = command.parse_proto(PlayerGetTokenScRsp)
                    except SchemaMismatch as exc:
                        logger.warning("could not parse token command: %s", exc)
                        return
                    self.set_account_id(token.uid)
                case CommandKind.INVENTORY:
                    logger.debug("detected inventory packet")
                    try:
                        bag = command.parse_proto(GetBagScRsp)
                    except SchemaMismatch as exc:
                        logger.warning("could not parse inventory data command: %s", exc)
                        return
                    self.add_inventory(bag)
                case CommandKind.QUEST:
                    logger.debug("detected quest packet")
                    try:
                        quests = command.parse_proto(GetQuestDataScRsp)
                    except SchemaMismatch as exc:
                        logger.warning("could not parse quest data command: %s", exc)
                        return
                    self.add_achievements(quests)
                case _:
                    logger.log(TRACE, "ignored %s (%d)", command.name, command.command_id)

    def _export(self) -> ExportDocument:
        logger.info("exporting collected data")
        for gap in self.missing():
            logger.warning("%s not recorded", gap)

        return ExportDocument(
            metadata=ExportMetadata(uid=self._uid),
            achievements=list(self._achievements),
            books=list(self._books),
        )

    def missing(self) -> list[str]:
        """Names of the data categories not yet observed."""
        gaps: list[str] = []
        if self._uid is None:
            gaps.append("uid")
        if not self._achievements:
            gaps.append("achievements")
        if not self._books:
            gaps.append("books")
        return gaps
