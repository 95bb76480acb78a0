import os
import sys
from pathlib import Path

import pytest
import toml

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config_manager
from core.config import AlignmentConfig, Config, LoggingConfig, ReviewConfig
from core.exceptions import ConfigurationError


@pytest.fixture
def config_path(tmp_path):
    """Path to a not-yet-existing TOML file inside tmp_path."""
    return tmp_path / "test_config.toml"


@pytest.fixture
def fresh_config_manager(tmp_path, monkeypatch):
    """Run config_manager against a clean working directory and reset its singleton."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_manager, "_config_instance", None)
    yield tmp_path


# --- Test Cases for Config.load_config() ---

def test_load_config_not_exists(config_path):
    assert not config_path.exists()

    config = Config(config_file_path=str(config_path))

    assert config_path.exists()
    assert config.alignment == AlignmentConfig()
    assert config.review == ReviewConfig()

    with open(config_path) as f:
        content = toml.load(f)
    assert content["alignment"]["similar_match_threshold"] == 0.8
    assert content["alignment"]["sample_rows"] == 100
    assert content["review"]["auto_accept_high_confidence"] is True
    assert content["logging"]["level"] == "INFO"
    # TOML has no null, so unset optionals are left out
    assert "log_file" not in content["logging"]


def test_load_config_exists_and_valid(config_path):
    custom_values = {
        "alignment": {
            "similar_match_threshold": 0.75,
            "pattern_match_threshold": 0.5,
            "sample_rows": 50,
        },
        "review": {"auto_accept_high_confidence": False},
        "logging": {"level": "DEBUG", "log_file": "alignment.log"},
    }
    with open(config_path, "w") as f:
        toml.dump(custom_values, f)

    config = Config(config_file_path=str(config_path))

    assert config.alignment.similar_match_threshold == 0.75
    assert config.alignment.pattern_match_threshold == 0.5
    assert config.alignment.sample_rows == 50
    assert config.review.auto_accept_high_confidence is False
    assert config.logging_config.level == "DEBUG"
    assert config.logging_config.log_file == "alignment.log"


def test_load_config_handles_partial_toml(config_path):
    with open(config_path, "w") as f:
        toml.dump({"alignment": {"semantic_match_threshold": 0.75}}, f)

    config = Config(config_file_path=str(config_path))

    assert config.alignment.semantic_match_threshold == 0.75
    assert config.alignment.similar_match_threshold == AlignmentConfig.similar_match_threshold
    assert config.review == ReviewConfig()
    assert config.logging_config == LoggingConfig()


def test_load_config_ignores_unknown_keys(config_path):
    with open(config_path, "w") as f:
        toml.dump({"alignment": {"fuzzy_mode": "aggressive", "sample_rows": 10}}, f)

    config = Config(config_file_path=str(config_path))

    assert config.alignment.sample_rows == 10
    assert not hasattr(config.alignment, "fuzzy_mode")


def test_load_config_invalid_toml(config_path):
    with open(config_path, "w") as f:
        f.write("this is not valid toml content {")

    with pytest.raises(ConfigurationError) as exc_info:
        Config(config_file_path=str(config_path))
    assert exc_info.value.context["config_file"] == str(config_path)


def test_load_config_rejects_invalid_values(config_path):
    with open(config_path, "w") as f:
        toml.dump({"alignment": {"similar_match_threshold": 1.5}}, f)

    with pytest.raises(ConfigurationError, match="similar_match_threshold must be between 0 and 1"):
        Config(config_file_path=str(config_path))


def test_save_config_round_trip(config_path):
    config = Config(config_file_path=str(config_path))
    config.alignment.pattern_sample_size = 10
    config.review.high_confidence_threshold = 0.95
    config.save_config()

    reloaded = Config(config_file_path=str(config_path))
    assert reloaded.alignment.pattern_sample_size == 10
    assert reloaded.review.high_confidence_threshold == 0.95


# --- Section validation ---

def test_alignment_config_validation():
    assert AlignmentConfig().validate() == []

    errors = AlignmentConfig(sample_rows=0, pattern_sample_size=-1, type_weight=-0.1).validate()
    assert "sample_rows must be positive" in errors
    assert "pattern_sample_size must be positive" in errors
    assert "type_weight cannot be negative" in errors


def test_review_config_validation():
    assert ReviewConfig().validate() == []

    errors = ReviewConfig(high_confidence_threshold=0.6, medium_confidence_threshold=0.7).validate()
    assert errors == ["medium_confidence_threshold cannot exceed high_confidence_threshold"]


def test_logging_config_validation():
    assert LoggingConfig(level="debug").validate() == []
    assert LoggingConfig(level="VERBOSE").validate()


def test_configuration_error_message_includes_context():
    error = ConfigurationError("bad value", config_file="config.toml", field="sample_rows")
    assert str(error) == "bad value (Context: config_file=config.toml, field=sample_rows)"


# --- Test Cases for config_manager ---

def test_get_config_is_cached(fresh_config_manager):
    first = config_manager.get_config()
    assert config_manager.get_config() is first
    assert Path(fresh_config_manager, "config.toml").exists()


def test_refresh_config_reloads(fresh_config_manager):
    first = config_manager.get_config()
    with open(Path(fresh_config_manager, "config.toml"), "w") as f:
        toml.dump({"alignment": {"sample_rows": 25}}, f)

    refreshed = config_manager.refresh_config()

    assert refreshed is not first
    assert refreshed.alignment.sample_rows == 25


def test_get_alignment_engine_uses_loaded_settings(fresh_config_manager):
    with open(Path(fresh_config_manager, "config.toml"), "w") as f:
        toml.dump({"alignment": {"similar_match_threshold": 0.5}}, f)

    engine = config_manager.get_alignment_engine()

    assert engine.config.similar_match_threshold == 0.5
    assert engine.analyze(["Emial"], ["Email"]).pairs == (("Emial", "Email"),)


def test_get_review_config(fresh_config_manager):
    assert config_manager.get_review_config() == ReviewConfig()
