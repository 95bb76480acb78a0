import logging
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import LoggingConfig
from core.logging_config import set_log_level, setup_logging, setup_logging_from_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers; put the originals back afterwards."""
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


def test_setup_logging_console_only():
    setup_logging(level='WARNING')

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)


def test_setup_logging_unknown_level_falls_back_to_info():
    setup_logging(level='chatty')
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_writes_file(tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging(level='DEBUG', log_file='alignment.log', log_dir=str(log_dir))

    logging.debug("phase finished")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = (log_dir / "alignment.log").read_text()
    assert "phase finished" in content
    assert " - DEBUG - " in content


def test_setup_logging_from_config(tmp_path):
    config = LoggingConfig(level='ERROR', log_file='app.log', log_dir=str(tmp_path), format_string='%(message)s')
    setup_logging_from_config(config)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR
    assert len(root_logger.handlers) == 2
    assert root_logger.handlers[1].formatter._fmt == '%(message)s'


def test_set_log_level_updates_handlers():
    setup_logging(level='INFO')
    set_log_level('debug')

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert all(handler.level == logging.DEBUG for handler in root_logger.handlers)
