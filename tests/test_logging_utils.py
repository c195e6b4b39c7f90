from __future__ import annotations

import json
import logging

from src.shift_scheduler.shift_scheduler.logging_utils import JsonFormatter, TextFormatter


def _record(**extra) -> logging.LogRecord:
    logger = logging.getLogger("shift_scheduler.test")
    return logger.makeRecord(logger.name, logging.INFO, __file__, 1, "shift created", (), None, extra=extra)


def test_text_line_carries_extra_fields_once():
    line = TextFormatter().format(_record(shift_id=7))

    assert line.endswith("INFO [shift_scheduler.test] shift created shift_id=7")
    assert "asctime=" not in line


def test_json_line_carries_extra_fields():
    record = _record(request_id=3)
    TextFormatter().format(record)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "shift created"
    assert payload["request_id"] == 3
    assert "asctime" not in payload
