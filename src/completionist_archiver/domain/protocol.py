"""Typed payload schemas for the server responses the exporter reads.

Only the fields the exporter consumes are modeled. Unknown fields in a
decoded payload are ignored so newer protocol revisions still validate.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field


class QuestStatus(IntEnum):
    """Server-side quest progress. Achievements are quests in this protocol."""

    QUEST_NONE = 0
    QUEST_DOING = 1
    QUEST_FINISH = 2
    QUEST_CLOSE = 3
    QUEST_DELETE = 4


TERMINAL_QUEST_STATUSES: frozenset[int] = frozenset(
    {QuestStatus.QUEST_CLOSE, QuestStatus.QUEST_FINISH}
)


class ProtoMessage(BaseModel):
    """Base for decoded protocol messages (frozen, extra fields ignored)."""

    model_config = {"frozen": True, "extra": "ignore"}


class Quest(ProtoMessage):
    id: int
    # Raw enum value. Protobuf enums are open, so values outside QuestStatus
    # must still parse; they are simply never terminal.
    status: int = QuestStatus.QUEST_NONE


class Material(ProtoMessage):
    tid: int
    num: int = 0


class PlayerGetTokenScRsp(ProtoMessage):
    """Login token response; carries the account uid."""

    uid: int


class GetBagScRsp(ProtoMessage):
    """Inventory snapshot. Books arrive as materials."""

    material_list: list[Material] = Field(default_factory=list)


class GetQuestDataScRsp(ProtoMessage):
    """Quest snapshot. Completed achievements arrive as closed/finished quests."""

    quest_list: list[Quest] = Field(default_factory=list)
