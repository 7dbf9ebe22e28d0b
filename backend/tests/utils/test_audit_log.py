import json
from typing import Any, List

import pytest
from app.utils import audit_log
from app.utils.request_id import set_request_id


def test_emit_audit_log_outputs_json(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    set_request_id("req-123")
    try:
        audit_log.emit_audit_log(
            action="booking.created",
            booking_id="abc123",
            date="2025-03-01",
            time="14:00",
            guests=None,
        )
    finally:
        set_request_id(None)
    assert len(messages) == 1
    payload = json.loads(messages[0])
    assert payload["action"] == "booking.created"
    assert payload["request_id"] == "req-123"
    assert payload["booking_id"] == "abc123"
    assert payload["time"] == "14:00"
    assert "guests" not in payload
    assert "timestamp" in payload


def test_emit_audit_log_raises_on_logger_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    class DummyLogger:
        def info(self, _: Any) -> None:
            raise ValueError("fail")

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    with pytest.raises(RuntimeError):
        audit_log.emit_audit_log(
            action="booking.deleted",
            booking_id="abc123",
            date="2025-03-01",
            time="14:00",
            guests=2,
        )
