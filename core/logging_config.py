"""
Logging configuration for Smart Column Alignment.

The alignment modules log through the root logger; this module decides
where those records go. Call ``setup_logging_from_config`` once at
application start-up with the ``[logging]`` section of ``config.toml``.
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def _file_handler(log_file: str, log_dir: str, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path / log_file)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Replace the root logger's handlers with a console handler and,
    optionally, a file handler.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: File name for a log file inside ``log_dir`` (optional)
        log_dir: Directory for the log file (defaults to 'logs')
        format_string: Custom format string (optional)
    """
    numeric_level = _resolve_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = _file_handler(log_file, log_dir or 'logs', numeric_level, formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {file_handler.baseFilename}")

    logging.info(f"Logging configured with level: {level}")


def setup_logging_from_config(logging_config) -> None:
    """Apply a LoggingConfig section to the root logger."""
    setup_logging(
        level=logging_config.level,
        log_file=logging_config.log_file,
        log_dir=logging_config.log_dir,
        format_string=logging_config.format_string,
    )


def set_log_level(level: str) -> None:
    """
    Change the level of the root logger and all of its handlers.

    Useful for turning on the per-phase debug output of the matching
    engine without reconfiguring handlers.
    """
    numeric_level = _resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)

    logging.info(f"Log level set to: {level}")
