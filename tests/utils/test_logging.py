import json
import logging

import pytest
import structlog

from record_prep.config import LoggingSettings
from record_prep.utils.logging import JsonFormatter, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_sets_level():
    configure_logging(level=logging.DEBUG)
    logger = get_logger("test")
    assert logger.name == "test"
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_from_settings(capsys):
    configure_logging(settings=LoggingSettings(level="WARNING"))
    logger = structlog.get_logger("record_prep.test")

    logger.info("suppressed")
    logger.warning("admission.example", limit=40)

    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["event"] == "admission.example"
    assert event["limit"] == 40
    assert event["level"] == "warning"


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("ingest", logging.INFO, __file__, 1, "processed", None, None)
    record.detail = "ok"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "processed"
    assert payload["logger"] == "ingest"
    assert payload["detail"] == "ok"
