from __future__ import annotations

import logging
from io import StringIO

from xlsx_acset.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_configures_package_logger():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    assert setup_logging() is setup_logging()
    assert get_logger() is setup_logging()
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


def test_labeled_prefixes():
    stream = StringIO()
    logger = logging.getLogger("test_xlsx_acset_labels")
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    try:
        logger.info("info message")
        logger.warning("warn message")
        logger.error("error message")
        logger.log(SUMMARY_LEVEL, "obs=2")
    finally:
        logger.removeHandler(handler)
    assert stream.getvalue().splitlines() == [
        "INFO info message",
        "WARN warn message",
        "ERROR error message",
        "SUMMARY obs=2",
    ]


def test_module_loggers_reach_package_handler(capsys):
    setup_logging()
    logging.getLogger(f"{LOGGER_NAME}.services.importer").warning("skipping owner")
    log_summary("obs=1")
    out = capsys.readouterr().out
    assert "WARN skipping owner" in out
    assert "SUMMARY obs=1" in out


def test_set_debug_lowers_levels(capsys):
    logger = setup_logging()
    set_debug(logger)
    logger.debug("details")
    assert "DEBUG details" in capsys.readouterr().out


def test_reset_logging_restores_propagation():
    setup_logging()
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    assert logger.handlers == []
    assert logger.propagate is True
