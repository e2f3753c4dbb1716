"""
Logging Configuration
Sets up the `elasticbending` logger for the solver and the command line interface.

Diagnostics recorded during a solve are forwarded to this logger, so the
console level decides which of them show up next to the CLI summary:
WARNING shows errors and warnings, INFO adds remarks, DEBUG adds the solver
internals (chosen pair, roots, bisection iterations).
"""
import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "elasticbending"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures the package logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file. The file always records DEBUG.
        fmt: Record format shared by all handlers.
        stream: Console stream, stderr by default so stdout stays free for results.

    Returns:
        The configured `elasticbending` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else level)

    # Reconfiguring replaces the previous handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized (console level {logging.getLevelName(level)}).")
    return logger
