"""Logging setup and helper tests."""

import io
import logging

import pytest

from nouns.app.config import NounsConfig
from nouns.utils.logging import (
    LOG_FILENAME,
    NounsFormatter,
    get_logger,
    log_error,
    log_operation,
    setup_logging,
)


@pytest.fixture
def stream():
    buffer = io.StringIO()
    setup_logging("INFO", stream=buffer)
    yield buffer
    setup_logging()


def test_get_logger_namespace():
    assert get_logger("catalog.loader").name == "nouns.catalog.loader"
    assert get_logger("nouns.schema").name == "nouns.schema"


def test_formatter_shows_catalog_context():
    record = logging.LogRecord("nouns.catalog.loader", logging.INFO, __file__, 1, "Loaded catalog", None, None)
    record.category = "finance"
    record.path = "finance.yaml"

    line = NounsFormatter().format(record)
    assert line == "INFO     [catalog.loader] Loaded catalog (category=finance, path=finance.yaml)"


def test_formatter_timestamp():
    record = logging.LogRecord("nouns.x", logging.WARNING, __file__, 1, "Careful", None, None)
    assert NounsFormatter(with_time=True).format(record).startswith("[")


def test_log_operation_splits_context(stream):
    log_operation(get_logger("test"), "Exported catalog", category="form", format="yaml", noun=None)
    assert stream.getvalue().strip() == "INFO     [test] Exported catalog: format=yaml (category=form)"


def test_log_error_without_traceback_below_debug(stream):
    try:
        raise OSError("disk full")
    except OSError as e:
        log_error(get_logger("test"), "Export", e, path="out.json")

    text = stream.getvalue()
    assert "Export failed: OSError: disk full (path=out.json)" in text
    assert "Traceback" not in text


def test_level_filters(stream):
    get_logger("test").debug("hidden")
    assert stream.getvalue() == ""


def test_config_drives_file_logging(tmp_path):
    config = NounsConfig(log_level="DEBUG", log_dir=tmp_path / "logs")
    try:
        config.configure_logging()
        get_logger("test").debug("to file", extra={"noun": "finance.Invoice"})
        for handler in logging.getLogger("nouns").handlers:
            handler.flush()
        text = (tmp_path / "logs" / LOG_FILENAME).read_text(encoding="utf-8")
    finally:
        setup_logging()

    assert "[test] to file (noun=finance.Invoice)" in text


def test_setup_replaces_handlers():
    try:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())
        assert len(logging.getLogger("nouns").handlers) == 1
    finally:
        setup_logging()
