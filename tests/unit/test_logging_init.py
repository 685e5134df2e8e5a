from __future__ import annotations

import logging
from io import StringIO

import fieldmeta.logging.init as log_init
from fieldmeta.logging.init import (
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_log_level,
    setup_logging,
)


def _capture(logger: logging.Logger) -> StringIO:
    captured = StringIO()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    return captured


def test_setup_logging_creates_logger_with_single_handler():
    logger = setup_logging()
    assert logger.name == "fieldmeta"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_labeled_prefixes():
    logger = setup_logging()
    captured = _capture(logger)

    logger.info("Reading: fields.csv")
    logger.warning("duplicate entry replaced")
    logger.error("on FieldName=X: Unsupported field type: Widget")
    logger.log(SUMMARY_LEVEL, "rows=1")

    assert captured.getvalue().strip().split("\n") == [
        "INFO Reading: fields.csv",
        "WARN duplicate entry replaced",
        "ERROR on FieldName=X: Unsupported field type: Widget",
        "SUMMARY rows=1",
    ]


def test_module_loggers_propagate_to_app_logger():
    logger = setup_logging()
    captured = _capture(logger)
    logging.getLogger("fieldmeta.services.orchestrator").info("Added: x")
    assert captured.getvalue() == "INFO Added: x\n"


def test_log_summary_uses_summary_level():
    logger = setup_logging()
    captured = _capture(logger)
    log_summary("rows=3 created=3")
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"
    assert captured.getvalue() == "SUMMARY rows=3 created=3\n"


def test_set_log_level_applies_to_handlers():
    logger = setup_logging()
    set_log_level(logging.DEBUG)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_reset_logging_clears_global():
    setup_logging()
    log_init.reset_logging()
    assert log_init._logger is None


def test_setup_logging_with_level():
    logger = setup_logging(logging.WARNING)
    assert logger.level == logging.WARNING
    assert logger.handlers[0].level == logging.WARNING


def test_multiline_message_labels_every_line():
    logger = setup_logging()
    captured = _capture(logger)
    logger.error("read: line one\nline two")
    assert captured.getvalue() == "ERROR read: line one\nERROR line two\n"


def test_reset_logging_removes_handler():
    logger = setup_logging()
    log_init.reset_logging()
    assert logger.handlers == []
    assert len(setup_logging().handlers) == 1
