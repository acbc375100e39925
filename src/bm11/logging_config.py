"""
Logging setup for the bm11 command line tool.

Library modules only create `logging.getLogger(__name__)` loggers under the
`bm11` namespace; handlers are attached here, once, by the CLI.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the 'bm11' logger.

    Calling this again replaces the handlers from the previous call, so
    repeated `main()` invocations in one process do not double every line.

    Args:
        level: Logging level for the logger and all its handlers
        log_file: Optional path; the file is truncated on each run

    Returns:
        The configured 'bm11' logger
    """
    logger = logging.getLogger("bm11")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    # stdout carries the report and sweep CSV
    console = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [console]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging at %s%s", logging.getLevelName(level),
                 f", also to {log_file}" if log_file else "")
    return logger
