"""
Configuration management for Smart Column Alignment.

This module provides a split configuration system that separates the
matching engine, the review workflow and logging into focused
configuration classes, persisted together in a single TOML file.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import List, Optional

import toml

from .exceptions import ConfigurationError


@dataclass
class AlignmentConfig:
    """Thresholds, weights and sample sizes for the matching engine."""

    # Phase acceptance thresholds
    similar_match_threshold: float = 0.8
    pattern_match_threshold: float = 0.6
    semantic_match_threshold: float = 0.7

    # Fixed scores assigned by the exact and semantic phases
    exact_match_confidence: float = 1.0
    semantic_match_score: float = 0.8

    # Sampling
    sample_rows: int = 100
    pattern_sample_size: int = 20

    # Pattern-similarity weights
    type_weight: float = 0.4
    pattern_weight: float = 0.3
    value_weight: float = 0.3

    def validate(self) -> List[str]:
        """Validate the alignment configuration and return any errors."""
        errors = []

        for name in ('similar_match_threshold', 'pattern_match_threshold',
                     'semantic_match_threshold', 'exact_match_confidence',
                     'semantic_match_score'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                errors.append(f"{name} must be between 0 and 1")

        if self.sample_rows <= 0:
            errors.append("sample_rows must be positive")

        if self.pattern_sample_size <= 0:
            errors.append("pattern_sample_size must be positive")

        for name in ('type_weight', 'pattern_weight', 'value_weight'):
            if getattr(self, name) < 0:
                errors.append(f"{name} cannot be negative")

        return errors


@dataclass
class ReviewConfig:
    """Configuration for the alignment review workflow."""

    auto_accept_high_confidence: bool = True
    high_confidence_threshold: float = 0.9
    medium_confidence_threshold: float = 0.7

    def validate(self) -> List[str]:
        """Validate the review configuration and return any errors."""
        errors = []

        if not 0.0 <= self.high_confidence_threshold <= 1.0:
            errors.append("high_confidence_threshold must be between 0 and 1")

        if not 0.0 <= self.medium_confidence_threshold <= 1.0:
            errors.append("medium_confidence_threshold must be between 0 and 1")

        if self.medium_confidence_threshold > self.high_confidence_threshold:
            errors.append("medium_confidence_threshold cannot exceed high_confidence_threshold")

        return errors


@dataclass
class LoggingConfig:
    """Configuration for application logging."""

    level: str = 'INFO'
    log_file: Optional[str] = None
    log_dir: str = 'logs'
    format_string: Optional[str] = None

    def validate(self) -> List[str]:
        """Validate the logging configuration and return any errors."""
        errors = []

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.level.upper() not in valid_levels:
            errors.append(f"level must be one of {valid_levels}")

        return errors


def _apply_section(section, values: dict, section_name: str, config_file: str) -> None:
    """Copy known keys from a TOML table onto a config section."""
    known = {f.name for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            logging.warning(f"Ignoring unknown key '{key}' in [{section_name}] of {config_file}")
            continue
        setattr(section, key, value)


@dataclass
class Config:
    """Main configuration class that combines all configuration sections."""

    config_file_path: str = "config.toml"

    alignment: AlignmentConfig = field(default_factory=AlignmentConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    logging_config: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Load configuration when an instance is created."""
        self.load_config()

    def to_dict(self) -> dict:
        """Convert the configuration sections to a TOML-ready dictionary."""
        config_data = {
            'alignment': asdict(self.alignment),
            'review': asdict(self.review),
            'logging': asdict(self.logging_config),
        }
        # TOML has no null; unset optionals are omitted
        for section in config_data.values():
            for key in [k for k, v in section.items() if v is None]:
                del section[key]
        return config_data

    def save_config(self) -> None:
        """Save current configuration to TOML file."""
        try:
            with open(self.config_file_path, 'w') as f:
                toml.dump(self.to_dict(), f)
            logging.info(f"Configuration saved to {self.config_file_path}")
        except OSError as e:
            error_msg = f"Error saving configuration: {e}"
            logging.error(error_msg)
            raise ConfigurationError(error_msg, config_file=self.config_file_path)

    def load_config(self) -> None:
        """Load configuration from TOML file."""
        try:
            with open(self.config_file_path) as f:
                config_data = toml.load(f)

            if 'alignment' in config_data:
                _apply_section(self.alignment, config_data['alignment'], 'alignment', self.config_file_path)

            if 'review' in config_data:
                _apply_section(self.review, config_data['review'], 'review', self.config_file_path)

            if 'logging' in config_data:
                _apply_section(self.logging_config, config_data['logging'], 'logging', self.config_file_path)

            logging.info(f"Configuration loaded from {self.config_file_path}")

        except FileNotFoundError:
            logging.info(f"{self.config_file_path} not found. Creating with default values.")
            self.save_config()
        except toml.TomlDecodeError as e:
            error_msg = f"Error decoding {self.config_file_path}: {e}"
            logging.error(error_msg)
            raise ConfigurationError(error_msg, config_file=self.config_file_path)

        errors = self.validate()
        if errors:
            error_msg = f"Invalid configuration in {self.config_file_path}: {'; '.join(errors)}"
            logging.error(error_msg)
            raise ConfigurationError(error_msg, config_file=self.config_file_path)

    def validate(self) -> List[str]:
        """Validate all configuration sections and return any errors."""
        errors = []
        errors.extend(self.alignment.validate())
        errors.extend(self.review.validate())
        errors.extend(self.logging_config.validate())
        return errors
