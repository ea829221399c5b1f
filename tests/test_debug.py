###########EXTERNAL IMPORTS############

import logging
import pytest
from pathlib import Path

#######################################

#############LOCAL IMPORTS#############

from medianwindow.util.debug import LoggerManager

#######################################


@pytest.fixture(autouse=True)
def reset_logger_manager():

    LoggerManager.reset()
    yield
    LoggerManager.reset()


def test_init_is_idempotent():
    LoggerManager.init()
    LoggerManager.init(level=logging.DEBUG)
    root = logging.getLogger(LoggerManager.ROOT_LOGGER_NAME)
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_init_with_log_file(tmp_path: Path):
    log_file = tmp_path / "window.log"
    LoggerManager.init(log_file=str(log_file))
    LoggerManager.get_logger("medianwindow.tests").info("window resized")
    for handler in logging.getLogger(LoggerManager.ROOT_LOGGER_NAME).handlers:
        handler.flush()
    assert "window resized" in log_file.read_text()


def test_static_class_cannot_be_instantiated():
    with pytest.raises(TypeError):
        LoggerManager()
