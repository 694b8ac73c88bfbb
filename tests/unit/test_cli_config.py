"""
Unit tests for the config CLI commands.
"""

import json

import pytest
import yaml
from click.testing import CliRunner


class TestConfigCommands:
    """Tests for 'menu-validator config'."""

    @pytest.fixture
    def cli_runner(self):
        """Create a Click CLI runner."""
        return CliRunner()

    def test_show(self, cli_runner, validator_config_file, clean_environment):
        """show prints every effective value."""
        from menu_validator.cli.main import cli

        result = cli_runner.invoke(cli, ["config", "--config", str(validator_config_file), "show"])

        assert result.exit_code == 0
        assert "api_url: http://localhost:8000/challenges.json?id=1" in result.output
        assert "per_branch_validity: True" in result.output

    def test_show_json(self, cli_runner, validator_config_file, clean_environment):
        """show --json prints a JSON document."""
        from menu_validator.cli.main import cli

        result = cli_runner.invoke(cli, ["config", "--config", str(validator_config_file), "show", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["log_level"] == "DEBUG"
        assert data["config_path"] == str(validator_config_file)

    def test_set_saves_value(self, cli_runner, temp_config_dir, clean_environment):
        """set validates and saves the new value."""
        from menu_validator.cli.main import cli

        config_path = temp_config_dir / "validator-config.yaml"

        result = cli_runner.invoke(cli, [
            "config", "--config", str(config_path),
            "set", "api_url", "https://example.com/challenges.json?id=2",
        ])

        assert result.exit_code == 0
        with open(config_path) as f:
            saved = yaml.safe_load(f)
        assert saved["api_url"] == "https://example.com/challenges.json?id=2"

    def test_set_rejects_invalid_value(self, cli_runner, temp_config_dir, clean_environment):
        """Invalid values are not saved."""
        from menu_validator.cli.main import cli

        config_path = temp_config_dir / "validator-config.yaml"

        result = cli_runner.invoke(cli, [
            "config", "--config", str(config_path), "set", "timeout_seconds", "0",
        ])

        assert result.exit_code == 1
        assert not config_path.exists()

    def test_set_rejects_unknown_key(self, cli_runner, temp_config_dir, clean_environment):
        """Unknown keys exit with status 1."""
        from menu_validator.cli.main import cli

        config_path = temp_config_dir / "validator-config.yaml"

        result = cli_runner.invoke(cli, [
            "config", "--config", str(config_path), "set", "colour", "blue",
        ])

        assert result.exit_code == 1
        assert "Unknown config key" in result.output
