"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, completionist_archiver.toml only
contains overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from completionist_archiver.domain.commands import CommandIds

DEFAULT_BASE_RESOURCE_URL = "https://raw.githubusercontent.com/Dimbreath/StarRailData/master"
DEFAULT_KEYS_URL = "https://raw.githubusercontent.com/tamilpp25/Iridium-SR/main/data/Keys.json"


class ResourcesConfig(BaseModel):
    """[resources] section."""

    model_config = {"frozen": True}

    base_url: str = DEFAULT_BASE_RESOURCE_URL
    keys_url: str = DEFAULT_KEYS_URL
    # Seconds; None leaves the transport default in place.
    timeout: float | None = None
    # Local checkout used instead of the remote endpoints when set.
    local_dir: Path | None = None

    @property
    def achievements_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/ExcelOutput/AchievementData.json"

    @property
    def books_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/ExcelOutput/LocalbookConfig.json"


class CommandsConfig(BaseModel):
    """[commands] section — protocol-revision specific command ids."""

    model_config = {"frozen": True}

    player_get_token_sc_rsp: int = 39
    get_bag_sc_rsp: int = 545
    get_quest_data_sc_rsp: int = 927

    def to_command_ids(self) -> CommandIds:
        return CommandIds(
            player_get_token_sc_rsp=self.player_get_token_sc_rsp,
            get_bag_sc_rsp=self.get_bag_sc_rsp,
            get_quest_data_sc_rsp=self.get_quest_data_sc_rsp,
        )
