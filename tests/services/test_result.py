"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from completionist_archiver.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="export_optimizer", data={"ready": True})
        assert result.ok is True
        assert result.data == {"ready": True}
        assert result.warnings == []
        assert result.error is None

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=False,
            op="export_optimizer",
            error=ServiceError(code="NETWORK_ERROR", message="down", detail={"source": "u"}),
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "NETWORK_ERROR"
        assert parsed["error"]["detail"] == {"source": "u"}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
