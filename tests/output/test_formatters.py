"""Tests for ServiceResult formatting."""

from __future__ import annotations

import json

from completionist_archiver.domain.export import ExportDocument, ExportMetadata
from completionist_archiver.output.formatters import format_result
from completionist_archiver.services.result import ServiceError, ServiceResult


def _ok_result() -> ServiceResult:
    document = ExportDocument(metadata=ExportMetadata(uid=7), achievements=[1, 2], books=[3])
    return ServiceResult(
        ok=True,
        op="export_optimizer",
        data={"document": document.model_dump(mode="json"), "ready": True, "commands_read": 9},
    )


class TestFormatResult:
    def test_json(self) -> None:
        parsed = json.loads(format_result(_ok_result(), json_output=True))
        assert parsed["op"] == "export_optimizer"
        assert parsed["data"]["document"]["books"] == [3]

    def test_human_summarizes_document(self) -> None:
        output = format_result(_ok_result())
        assert output.startswith("OK: export_optimizer")
        assert "uid: 7" in output
        assert "achievements: 2" in output
        assert "books: 1" in output
        assert "commands_read: 9" in output
        assert "document" not in output

    def test_human_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="export_optimizer",
            error=ServiceError(code="NETWORK_ERROR", message="https://x.test: [Errno 111]"),
        )
        assert format_result(result) == (
            "ERROR: export_optimizer (NETWORK_ERROR) https://x.test: [Errno 111]"
        )
