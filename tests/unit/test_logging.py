from __future__ import annotations

import json
import logging

from tablepeek.utils.logging import _json_formatter, configure_logging

EXPECTED_ROWS = 10


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.rows = EXPECTED_ROWS
    record.table = "Notes"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["rows"] == EXPECTED_ROWS
    assert payload["table"] == "Notes"
    assert "lineno" not in payload
    assert "pathname" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"statement": "SHOW TABLES"}

    payload = json.loads(_json_formatter(record))

    assert payload["statement"] == "SHOW TABLES"
    assert "extra" not in payload


def test_json_formatter_stringifies_unserializable_extras() -> None:
    record = _record()
    record.tables = ("Notes",)
    record.target = object()

    payload = json.loads(_json_formatter(record))

    assert payload["tables"] == ["Notes"]
    assert isinstance(payload["target"], str)


def test_configure_logging_writes_to_stderr(capsys) -> None:
    configure_logging(level="debug")
    logging.getLogger("tablepeek.test").info("to stderr")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "to stderr" in captured.err
