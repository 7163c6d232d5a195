# tests/core/test_logging.py
import io
import json
import logging

import pytest
import structlog

from flyer_api.logging_config import configure_logging


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    configure_logging(stream=stream)
    try:
        yield stream
    finally:
        structlog.contextvars.clear_contextvars()
        configure_logging()


def _lines(stream: io.StringIO):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


class TestConfigureLogging:

    def test_structlog_events_render_as_json(self, log_stream):
        structlog.contextvars.bind_contextvars(request_id="req-1")

        structlog.get_logger("flyer_api.checks").info("thing_happened", count=2)

        (entry,) = _lines(log_stream)
        assert entry["event"] == "thing_happened"
        assert entry["count"] == 2
        assert entry["level"] == "info"
        assert entry["logger"] == "flyer_api.checks"
        assert entry["request_id"] == "req-1"
        assert entry["trace_id"] is None
        assert "timestamp" in entry

    def test_stdlib_records_share_the_same_format(self, log_stream):
        structlog.contextvars.bind_contextvars(request_id="req-2")

        logging.getLogger("uvicorn.error").warning("server %s", "up")

        (entry,) = _lines(log_stream)
        assert entry["event"] == "server up"
        assert entry["level"] == "warning"
        assert entry["logger"] == "uvicorn.error"
        assert entry["request_id"] == "req-2"

    def test_records_below_the_level_are_dropped(self, log_stream):
        logging.getLogger("flyer_api.checks").debug("noise")
        structlog.get_logger("flyer_api.checks").debug("more_noise")

        assert _lines(log_stream) == []

    def test_reconfiguring_replaces_the_handler(self, log_stream):
        configure_logging(stream=log_stream)

        logging.getLogger("flyer_api.checks").info("once")

        assert len(_lines(log_stream)) == 1
