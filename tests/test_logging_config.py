import io
import logging

import pytest

from elasticbending.logging_config import LOGGER_NAME, setup_logging
from elasticbending.model.diagnostics import DiagnosticLog


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def test_returns_package_logger_with_console_handler():
    stream = io.StringIO()
    logger = setup_logging(level=logging.WARNING, stream=stream)
    assert logger is logging.getLogger(LOGGER_NAME)
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is stream


def test_reconfiguring_does_not_duplicate_handlers():
    setup_logging(stream=io.StringIO())
    logger = setup_logging(stream=io.StringIO())
    assert len(logger.handlers) == 1


def test_diagnostics_reach_console_by_level():
    stream = io.StringIO()
    setup_logging(level=logging.WARNING, fmt="%(levelname)s:%(message)s", stream=stream)
    log = DiagnosticLog()
    log.remark("accuracy note")
    log.warning("redundant input")
    assert stream.getvalue().splitlines() == ["WARNING:redundant input"]


def test_log_file_records_debug(tmp_path):
    path = tmp_path / "solve.log"
    logger = setup_logging(level=logging.WARNING, log_file=str(path), stream=io.StringIO())
    logging.getLogger("elasticbending.solvers.solver").debug("internal detail")
    for handler in logger.handlers:
        handler.flush()
    assert "internal detail" in path.read_text(encoding="utf-8")
