import logging

import pytest

from conference_portal.core.logging import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_console_only_by_default(root_logger):
    setup_logging("WARNING")

    assert root_logger.level == logging.WARNING
    assert [type(h) for h in root_logger.handlers] == [logging.StreamHandler]


def test_log_file_receives_records(root_logger, tmp_path):
    log_file = tmp_path / "portal.log"
    setup_logging("INFO", str(log_file))

    logging.getLogger("conference_portal.test").info("registration stored")
    for handler in root_logger.handlers:
        handler.flush()

    assert len(root_logger.handlers) == 2
    assert "conference_portal.test - INFO - registration stored" in log_file.read_text()
    assert logging.getLogger("uvicorn").level == logging.WARNING


def test_unwritable_log_file_falls_back_to_console(root_logger, tmp_path):
    setup_logging("INFO", str(tmp_path / "missing-dir" / "portal.log"))
    assert len(root_logger.handlers) == 1
