from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from lifecal_core.logging_setup import JsonFormatter, _log_crash, configure_logging, get_logger


def test_json_formatter_includes_event() -> None:
    record = logging.LogRecord("lifecal.render", logging.INFO, __file__, 1, "rendered %s", ("year",), None)
    record.event = "render"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "rendered year"
    assert payload["event"] == "render"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "lifecal.render"


def test_json_formatter_keeps_extra_fields() -> None:
    record = logging.LogRecord("lifecal", logging.INFO, __file__, 1, "app shutdown", (), None)
    record.event = "shutdown"
    record.exit_code = 3
    record.crash_id = "abc123"
    record.log_dir = Path("/tmp/logs")
    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "shutdown"
    assert payload["exit_code"] == 3
    assert payload["crash_id"] == "abc123"
    assert payload["log_dir"] == str(Path("/tmp/logs"))
    assert "args" not in payload
    assert "levelno" not in payload


def test_render_log_carries_dimensions() -> None:
    record = logging.makeLogRecord(
        {"name": "lifecal.render", "msg": "rendered", "event": "render", "kind": "life", "width": 750, "height": 1334}
    )
    payload = json.loads(JsonFormatter().format(record))
    assert (payload["kind"], payload["width"], payload["height"]) == ("life", 750, 1334)


def test_get_logger_namespaces() -> None:
    assert get_logger().name == "lifecal"
    assert get_logger("endpoint").name == "lifecal.endpoint"


def test_configure_logging_writes_file(tmp_path) -> None:
    logger = logging.getLogger("lifecal")
    saved = list(logger.handlers)
    for handler in saved:
        logger.removeHandler(handler)
    try:
        configure_logging(keep_files=3, console=False, directory=tmp_path)
        get_logger("test").info("hello", extra={"event": "hello"})
        for handler in logger.handlers:
            handler.flush()
        lines = (tmp_path / "lifecal.log").read_text(encoding="utf-8").splitlines()
        events = [json.loads(line).get("event") for line in lines]
        assert "logging_configured" in events
        assert "hello" in events
        configured = next(json.loads(line) for line in lines if json.loads(line).get("event") == "logging_configured")
        assert configured["keep_files"] == 3
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        for handler in saved:
            logger.addHandler(handler)


def test_crash_records_carry_crash_id(caplog) -> None:
    logger = get_logger("crash")
    with caplog.at_level(logging.CRITICAL, logger="lifecal"):
        crash_id = _log_crash(logger, "thread_exception", (ValueError, ValueError("boom"), None))
    record = caplog.records[-1]
    payload = json.loads(JsonFormatter().format(record))
    assert payload["crash_id"] == crash_id
    assert payload["event"] == "thread_exception"
    assert "boom" in payload["exc"]
