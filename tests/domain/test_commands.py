"""Tests for decoded command envelopes and command-kind classification."""

from __future__ import annotations

import pytest

from completionist_archiver.domain.commands import (
    CommandIds,
    CommandKind,
    DecodedCommand,
    GameCommand,
    SchemaMismatch,
)
from completionist_archiver.domain.protocol import GetBagScRsp, PlayerGetTokenScRsp

IDS = CommandIds(player_get_token_sc_rsp=1, get_bag_sc_rsp=2, get_quest_data_sc_rsp=3)


class TestCommandIds:
    def test_kind_of_recognized(self) -> None:
        assert IDS.kind_of(1) is CommandKind.TOKEN
        assert IDS.kind_of(2) is CommandKind.INVENTORY
        assert IDS.kind_of(3) is CommandKind.QUEST

    @pytest.mark.parametrize("command_id", [0, 4, 999, -1])
    def test_kind_of_unrecognized(self, command_id: int) -> None:
        assert IDS.kind_of(command_id) is None


class TestDecodedCommand:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(DecodedCommand(1, {"uid": 5}), GameCommand)

    def test_parse_proto(self) -> None:
        cmd = DecodedCommand(1, {"uid": 123456}, name="PlayerGetTokenScRsp")
        token = cmd.parse_proto(PlayerGetTokenScRsp)
        assert token.uid == 123456

    def test_parse_proto_ignores_unknown_fields(self) -> None:
        cmd = DecodedCommand(1, {"uid": 7, "secret_key_seed": 99})
        assert cmd.parse_proto(PlayerGetTokenScRsp).uid == 7

    def test_schema_mismatch(self) -> None:
        cmd = DecodedCommand(2, {"material_list": "not a list"})
        with pytest.raises(SchemaMismatch) as excinfo:
            cmd.parse_proto(GetBagScRsp)
        assert excinfo.value.schema is GetBagScRsp
        assert excinfo.value.command_id == 2
        assert "GetBagScRsp" in str(excinfo.value)

    def test_missing_required_field(self) -> None:
        with pytest.raises(SchemaMismatch):
            DecodedCommand(1, {}).parse_proto(PlayerGetTokenScRsp)
