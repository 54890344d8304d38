from __future__ import annotations

import logging

from services.logging_service import RingBufferHandler


def _record(name: str, message: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, message, None, None)


def test_ring_buffer_keeps_most_recent_records() -> None:
    handler = RingBufferHandler(maxlen=2)
    for i in range(3):
        handler.emit(_record("pipelines.wkt.pipeline", f"message {i}"))
    assert [r["message"] for r in handler.get_recent(10)] == ["message 1", "message 2"]


def test_ring_buffer_filters_by_logger_prefix() -> None:
    handler = RingBufferHandler()
    handler.emit(_record("pipelines.wkt.pipeline", "parsed"))
    handler.emit(_record("api.endpoints.wkt", "request", logging.WARNING))
    recent = handler.get_recent(10, name_prefix="api.")
    assert len(recent) == 1
    assert recent[0]["level"] == "WARNING"


def test_ring_buffer_zero_limit_returns_everything() -> None:
    handler = RingBufferHandler()
    for i in range(5):
        handler.emit(_record("x", str(i)))
    assert len(handler.get_recent(0)) == 5
