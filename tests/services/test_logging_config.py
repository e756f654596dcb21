"""
Tests for the structured log output.
"""

import io
import json
import logging
from datetime import date
from decimal import Decimal

from solar_ledger.logging_config import (
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


def test_extra_fields_are_merged_into_the_payload():
    record = logging.LogRecord(
        "solar_ledger.test", logging.INFO, __file__, 1,
        "Card batch expanded", (), None,
    )
    record.total = Decimal("100.02")
    record.due = date(2024, 4, 10)

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["message"] == "Card batch expanded"
    assert payload["level"] == "INFO"
    assert payload["total"] == "100.02"
    assert payload["due"] == "2024-04-10"


def test_loggers_live_under_the_package_namespace():
    assert get_logger("grouping").name == "solar_ledger.grouping"
    assert get_logger("solar_ledger.api").name == "solar_ledger.api"


def test_configure_logging_writes_json_lines():
    reset_logging()
    stream = io.StringIO()
    try:
        configure_logging(level="INFO", stream=stream)
        # A second call must not add another handler.
        configure_logging(level="INFO", stream=stream)
        get_logger("test").info("hello", extra={"entries": 3})

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["entries"] == 3
    finally:
        reset_logging()
