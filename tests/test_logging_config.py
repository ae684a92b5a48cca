import logging

import pytest

from qa_forum.utils.logging_config import setup_access_logging, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_is_repeatable(tmp_path, restore_root_logger):
    setup_logging("DEBUG", log_dir=tmp_path)
    setup_logging("DEBUG", log_dir=tmp_path)

    assert len(restore_root_logger.handlers) == 3
    logging.getLogger("qa_forum.test").error("disk full")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "disk full" in (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "disk full" in (tmp_path / "error.log").read_text(encoding="utf-8")


def test_access_log_does_not_propagate(tmp_path):
    access_logger = setup_access_logging(log_dir=tmp_path)
    access_logger.info("GET /api/ping")
    access_logger.handlers[0].flush()

    assert access_logger.propagate is False
    assert len(access_logger.handlers) == 1
    assert "GET /api/ping" in (tmp_path / "access.log").read_text(encoding="utf-8")
