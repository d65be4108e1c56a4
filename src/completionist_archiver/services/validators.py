"""Per-entry validation of decoded quests and materials.

Both validators are pure: they only read the shared snapshot and return
an accepted record or None.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

from completionist_archiver.config.logging import TRACE
from completionist_archiver.domain.export import Achievement, Book
from completionist_archiver.domain.protocol import TERMINAL_QUEST_STATUSES, Material, Quest

if TYPE_CHECKING:
    from completionist_archiver.infrastructure.reference import ReferenceSnapshot

logger = logging.getLogger(__name__)


def validate_achievement(snapshot: ReferenceSnapshot, quest: Quest) -> Achievement | None:
    """Accept *quest* iff it is closed or finished and a known achievement."""
    with structlog.contextvars.bound_contextvars(achievement_id=quest.id):
        if quest.status not in TERMINAL_QUEST_STATUSES:
            logger.log(TRACE, "achievement rejected: status %d", quest.status)
            return None
        if quest.id not in snapshot.achievement_ids:
            logger.log(TRACE, "achievement rejected: unknown id")
            return None
        logger.log(TRACE, "achievement accepted")
        return Achievement(id=quest.id)


def validate_book(snapshot: ReferenceSnapshot, material: Material) -> Book | None:
    """Accept *material* iff its item type is a known book."""
    with structlog.contextvars.bound_contextvars(book_id=material.tid):
        if material.tid not in snapshot.book_ids:
            logger.log(TRACE, "material is not a book")
            return None
        logger.log(TRACE, "book accepted")
        return Book(id=material.tid)
