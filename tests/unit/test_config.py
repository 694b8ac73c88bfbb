"""
Unit tests for validator configuration.

Tests configuration loading, saving, defaults, environment overrides and
validation.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from menu_validator.config import (
    DEFAULT_API_URL,
    ConfigError,
    ConfigValidationError,
    ValidatorConfig,
    get_default_config_path,
)


class TestValidatorConfig:
    """Tests for ValidatorConfig class."""

    def test_default_config_values(self, temp_config_dir, clean_environment):
        """Defaults apply when no file exists."""
        config = ValidatorConfig(config_dir=temp_config_dir)

        assert config.api_url == DEFAULT_API_URL
        assert config.timeout_seconds == 30.0
        assert config.log_level == "INFO"
        assert config.per_branch_validity is False

    def test_load_config_from_file(self, validator_config_file, validator_config, clean_environment):
        """Values are read from the YAML file."""
        config = ValidatorConfig(config_path=validator_config_file)

        assert config.api_url == validator_config["api_url"]
        assert config.timeout_seconds == 5.0
        assert config.log_level == "DEBUG"
        assert config.per_branch_validity is True

    def test_environment_overrides_file(self, validator_config_file, monkeypatch):
        """Environment variables take precedence over the file."""
        monkeypatch.setenv("MENU_VALIDATOR_API_URL", "http://env-server:8000/menus.json")
        monkeypatch.setenv("MENU_VALIDATOR_LOG_LEVEL", "WARNING")

        config = ValidatorConfig(config_path=validator_config_file)

        assert config.api_url == "http://env-server:8000/menus.json"
        assert config.log_level == "WARNING"

    def test_config_path_from_environment(self, validator_config_file, monkeypatch, clean_environment):
        """MENU_VALIDATOR_CONFIG_PATH selects the file."""
        monkeypatch.setenv("MENU_VALIDATOR_CONFIG_PATH", str(validator_config_file))

        config = ValidatorConfig()

        assert config.config_path == validator_config_file
        assert config.log_level == "DEBUG"

    def test_default_config_path(self, clean_environment):
        """The default path lives in the platform config directory."""
        with patch("menu_validator.config.user_config_dir", return_value="/tmp/menu-validator-cfg"):
            assert get_default_config_path() == Path("/tmp/menu-validator-cfg/validator-config.yaml")

    def test_save_config_to_file(self, temp_config_dir, clean_environment):
        """save() writes every key."""
        config_path = temp_config_dir / "nested" / "validator-config.yaml"
        config = ValidatorConfig(config_path=config_path)
        config.api_url = "http://example.com:8000/challenges.json?id=2"
        config.timeout_seconds = 12
        config.per_branch_validity = True
        config.save()

        with open(config_path) as f:
            saved = yaml.safe_load(f)

        assert saved["api_url"] == "http://example.com:8000/challenges.json?id=2"
        assert saved["timeout_seconds"] == 12.0
        assert saved["per_branch_validity"] is True

        reloaded = ValidatorConfig(config_path=config_path)
        assert reloaded.api_url == config.api_url

    def test_invalid_yaml(self, temp_config_dir):
        """Unparseable YAML raises ConfigError."""
        config_path = temp_config_dir / "validator-config.yaml"
        config_path.write_text("api_url: [unclosed")

        with pytest.raises(ConfigError):
            ValidatorConfig(config_path=config_path)

    def test_non_mapping_yaml(self, temp_config_dir):
        """A YAML list is not a configuration."""
        config_path = temp_config_dir / "validator-config.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            ValidatorConfig(config_path=config_path)

    @pytest.mark.parametrize("content", ["api_url: null\n", "api_url: ''\n", "api_url: 42\n"])
    def test_api_url_must_be_a_string(self, temp_config_dir, clean_environment, content):
        """Non-string and empty api_url values are rejected on load."""
        config_path = temp_config_dir / "validator-config.yaml"
        config_path.write_text(content)

        with pytest.raises(ConfigError, match="api_url"):
            ValidatorConfig(config_path=config_path)


class TestConfigValidation:
    """Tests for validate() and set_value()."""

    @pytest.fixture
    def config(self, temp_config_dir, clean_environment):
        return ValidatorConfig(config_dir=temp_config_dir)

    def test_defaults_are_valid(self, config):
        """The default configuration passes validation."""
        config.validate()

    def test_invalid_url(self, config):
        """Non-HTTP URLs are rejected."""
        config.api_url = "ftp://example.com/menus"

        with pytest.raises(ConfigValidationError):
            config.validate()

    def test_non_positive_timeout(self, config):
        """The timeout must be positive."""
        config.timeout_seconds = 0

        with pytest.raises(ConfigValidationError):
            config.validate()

    def test_unknown_log_level(self, config):
        """Unknown log levels are rejected."""
        config.log_level = "chatty"

        with pytest.raises(ConfigValidationError):
            config.validate()

    def test_set_value_parses_strings(self, config):
        """String values from the CLI are converted."""
        config.set_value("timeout_seconds", "2.5")
        config.set_value("per_branch_validity", "yes")
        config.set_value("log_level", "debug")

        assert config.timeout_seconds == 2.5
        assert config.per_branch_validity is True
        assert config.log_level == "DEBUG"

    def test_set_value_unknown_key(self, config):
        """Only known keys can be set."""
        with pytest.raises(ConfigValidationError):
            config.set_value("colour", "blue")

    def test_set_value_bad_boolean(self, config):
        """Unparseable booleans are rejected."""
        with pytest.raises(ConfigValidationError):
            config.set_value("per_branch_validity", "maybe")

    def test_set_value_bad_number(self, config):
        """Unparseable numbers are rejected."""
        with pytest.raises(ConfigValidationError):
            config.set_value("timeout_seconds", "soon")
