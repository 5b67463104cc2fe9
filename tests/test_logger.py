import logging

import pytest

from app.core.logger import APP_LOGGER, configure_file_logging, set_log_level


@pytest.fixture
def restore_logger():
    level = APP_LOGGER.level
    handlers = list(APP_LOGGER.handlers)
    yield
    for h in list(APP_LOGGER.handlers):
        if h not in handlers:
            APP_LOGGER.removeHandler(h)
            h.close()
    APP_LOGGER.setLevel(level)


def test_file_logging_writes_messages(tmp_path, restore_logger):
    log_path = configure_file_logging(tmp_path / "logs" / "drawboy.log")
    APP_LOGGER.warning("pedal unplugged")
    for h in APP_LOGGER.handlers:
        h.flush()
    text = log_path.read_text(encoding="utf-8")
    assert "WARNING: pedal unplugged" in text


def test_file_logging_replaces_previous_file(tmp_path, restore_logger):
    configure_file_logging(tmp_path / "first.log")
    configure_file_logging(tmp_path / "second.log")
    files = [h for h in APP_LOGGER.handlers if isinstance(h, logging.FileHandler)]
    assert len(files) == 1
    assert files[0].baseFilename.endswith("second.log")


def test_set_log_level(restore_logger):
    assert set_log_level("debug") == logging.DEBUG
    assert APP_LOGGER.level == logging.DEBUG
    with pytest.raises(ValueError):
        set_log_level("chatty")
