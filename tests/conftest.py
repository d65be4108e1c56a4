"""Shared pytest fixtures and test helpers for completionist-archiver tests."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from completionist_archiver.config.models import CommandsConfig
from completionist_archiver.domain.commands import CommandIds, DecodedCommand
from completionist_archiver.infrastructure.reference import ReferenceSnapshot
from completionist_archiver.services.exporter import OptimizerExporter

COMMAND_IDS: CommandIds = CommandsConfig().to_command_ids()
ACCOUNT_KEY = b"\x01\x02\x03\x04secret"


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("completionist_archiver")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings resolution."""
    monkeypatch.delenv("COMPLETIONIST_ARCHIVER_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def snapshot() -> ReferenceSnapshot:
    """Reference data with achievements {100, 200} and book {55}."""
    return ReferenceSnapshot(
        achievement_ids=frozenset({100, 200}),
        book_ids=frozenset({55}),
        keys={123456: ACCOUNT_KEY},
    )


@pytest.fixture
def exporter(snapshot: ReferenceSnapshot) -> OptimizerExporter:
    return OptimizerExporter(snapshot, COMMAND_IDS)


@pytest.fixture
def reference_dir(tmp_path: Path) -> Path:
    """Local checkout layout matching the remote reference sources."""
    root = tmp_path / "StarRailData"
    write_reference_dir(root)
    return root


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def achievement_table(*ids: int) -> dict[str, Any]:
    return {str(i): {"AchievementID": i, "SeriesID": 1} for i in ids}


def book_table(*ids: int) -> dict[str, Any]:
    return {str(i): {"BookID": i, "BookSeriesID": 3} for i in ids}


def key_table(keys: dict[int, bytes]) -> dict[str, str]:
    return {str(uid): base64.b64encode(key).decode("ascii") for uid, key in keys.items()}


def write_reference_dir(root: Path) -> None:
    (root / "ExcelOutput").mkdir(parents=True)
    (root / "ExcelOutput" / "AchievementData.json").write_text(
        json.dumps(achievement_table(100, 200)), encoding="utf-8"
    )
    (root / "ExcelOutput" / "LocalbookConfig.json").write_text(
        json.dumps(book_table(55)), encoding="utf-8"
    )
    (root / "Keys.json").write_text(
        json.dumps(key_table({123456: ACCOUNT_KEY})), encoding="utf-8"
    )


def token_command(uid: int) -> DecodedCommand:
    return DecodedCommand(
        COMMAND_IDS.player_get_token_sc_rsp, {"uid": uid}, name="PlayerGetTokenScRsp"
    )


def bag_command(*tids: int) -> DecodedCommand:
    return DecodedCommand(
        COMMAND_IDS.get_bag_sc_rsp,
        {"material_list": [{"tid": tid, "num": 1} for tid in tids]},
        name="GetBagScRsp",
    )


def quest_command(*quests: tuple[int, int]) -> DecodedCommand:
    """Build a quest response from ``(id, status)`` pairs."""
    return DecodedCommand(
        COMMAND_IDS.get_quest_data_sc_rsp,
        {"quest_list": [{"id": qid, "status": status} for qid, status in quests]},
        name="GetQuestDataScRsp",
    )


def command_line(command: DecodedCommand) -> str:
    """Serialize *command* as one line of a recorded stream."""
    return json.dumps(
        {"command_id": command.command_id, "name": command.name, "payload": command.payload}
    )
