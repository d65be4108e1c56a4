"""Decoded command envelopes and command-kind classification.

The network capture and protobuf decoding happen outside this package.
Anything that exposes a numeric command id, a readable name, and a
``parse_proto`` method satisfies :class:`GameCommand`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

_M = TypeVar("_M", bound=BaseModel)


class SchemaMismatch(Exception):
    """Raised when a command payload does not conform to the requested schema."""

    def __init__(self, schema: type[BaseModel], command_id: int, reason: str) -> None:
        self.schema = schema
        self.command_id = command_id
        self.reason = reason
        super().__init__(f"command {command_id} is not a valid {schema.__name__}: {reason}")


class CommandKind(StrEnum):
    """Command kinds the exporter reacts to."""

    TOKEN = "token"
    INVENTORY = "inventory"
    QUEST = "quest"


@runtime_checkable
class GameCommand(Protocol):
    """Interface required from the external decoding collaborator."""

    @property
    def command_id(self) -> int: ...

    @property
    def name(self) -> str: ...

    def parse_proto(self, schema: type[_M]) -> _M:
        """Decode the payload as *schema*, raising :class:`SchemaMismatch` on failure."""
        ...


@dataclass(frozen=True)
class DecodedCommand:
    """A command whose payload has already been decoded into plain data.

    Used to replay recorded sessions (see
    :mod:`completionist_archiver.infrastructure.stream`) and in tests.
    """

    command_id: int
    payload: dict[str, Any] = field(default_factory=dict)
    name: str = ""

    def parse_proto(self, schema: type[_M]) -> _M:
        try:
            return schema.model_validate(self.payload)
        except ValidationError as exc:
            raise SchemaMismatch(
                schema, self.command_id, f"{exc.error_count()} validation error(s)"
            ) from exc


@dataclass(frozen=True)
class CommandIds:
    """Numeric ids of the commands the exporter reads.

    Ids are assigned per protocol revision; override them through the
    ``[commands]`` config section when the game updates.
    """

    player_get_token_sc_rsp: int
    get_bag_sc_rsp: int
    get_quest_data_sc_rsp: int

    def kind_of(self, command_id: int) -> CommandKind | None:
        """Classify *command_id*, or return None for commands the exporter ignores."""
        if command_id == self.player_get_token_sc_rsp:
            return CommandKind.TOKEN
        if command_id == self.get_bag_sc_rsp:
            return CommandKind.INVENTORY
        if command_id == self.get_quest_data_sc_rsp:
            return CommandKind.QUEST
        return None
