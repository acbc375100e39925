import logging
import sys

from bm11.logging_config import setup_logging


def test_console_handler_writes_to_stderr():
    logger = setup_logging(logging.DEBUG)

    assert logger.name == "bm11"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr


def test_repeated_setup_replaces_handlers(tmp_path):
    log_file = tmp_path / "bm11.log"
    setup_logging(logging.INFO)
    logger = setup_logging(logging.INFO, str(log_file))

    assert len(logger.handlers) == 2
    logging.getLogger("bm11.model").info("evaluated")
    for handler in logger.handlers:
        handler.flush()

    assert "bm11.model - INFO - evaluated" in log_file.read_text()
    setup_logging(logging.WARNING)
    assert len(logging.getLogger("bm11").handlers) == 1
