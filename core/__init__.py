"""
Core infrastructure module for Smart Column Alignment.

This module provides the foundational components including configuration
management, logging setup, and custom exceptions.
"""

from .config import AlignmentConfig, ReviewConfig, LoggingConfig, Config
from .exceptions import AlignmentError, ConfigurationError, ValidationError
from .logging_config import set_log_level, setup_logging, setup_logging_from_config

__all__ = [
    # Configuration
    'AlignmentConfig',
    'ReviewConfig',
    'LoggingConfig',
    'Config',

    # Exceptions
    'AlignmentError',
    'ConfigurationError',
    'ValidationError',

    # Logging
    'setup_logging',
    'setup_logging_from_config',
    'set_log_level',
]

# Version info
__version__ = "1.0.0"
