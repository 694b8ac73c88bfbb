"""
Validator configuration module.

Manages the menu endpoint URL, request timeout, log level and validation
options. Configuration can be loaded from a YAML file or environment
variables.
"""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from platformdirs import user_config_dir


# ============================================================================
# Constants
# ============================================================================

APP_NAME = "menu-validator"
APP_AUTHOR = "MenuValidator"
CONFIG_FILENAME = "validator-config.yaml"

# Environment variable names
ENV_API_URL = "MENU_VALIDATOR_API_URL"
ENV_LOG_LEVEL = "MENU_VALIDATOR_LOG_LEVEL"
ENV_CONFIG_PATH = "MENU_VALIDATOR_CONFIG_PATH"

# Default values
DEFAULT_API_URL = "https://backend-challenge-summer-2018.herokuapp.com/challenges.json?id=1"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PER_BRANCH_VALIDITY = False

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# URL validation regex
URL_PATTERN = re.compile(
    r"^https?://"  # http:// or https://
    r"(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|"  # domain
    r"localhost|"  # localhost
    r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"  # ...or ip
    r"(?::\d+)?"  # optional port
    r"(?:/?|[/?]\S+)$",
    re.IGNORECASE,
)

# Keys accepted by `config set`
SETTABLE_KEYS = ("api_url", "timeout_seconds", "log_level", "per_branch_validity")


# ============================================================================
# Exceptions
# ============================================================================


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""

    pass


# ============================================================================
# Helper Functions
# ============================================================================


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory for the current platform.

    Returns:
        Path to the platform-appropriate config directory
    """
    return Path(user_config_dir(APP_NAME, APP_AUTHOR))


def get_default_config_path() -> Path:
    """
    Get the default configuration file path.

    Returns:
        Path to the default config file
    """
    return get_default_config_dir() / CONFIG_FILENAME


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigValidationError(f"Expected a boolean, got: {value!r}")


# ============================================================================
# ValidatorConfig Class
# ============================================================================


class ValidatorConfig:
    """
    Validator configuration manager.

    Configuration sources (in priority order):
    1. Environment variables
    2. Configuration file
    3. Default values

    Attributes:
        api_url: Menu endpoint URL
        timeout_seconds: HTTP request timeout
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        per_branch_validity: Scope invalidation to a single branch
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config_dir: Optional[Path] = None,
    ):
        """
        Initialize validator configuration.

        Args:
            config_path: Explicit path to config file (takes precedence)
            config_dir: Directory containing config file
        """
        if config_path:
            self._config_path = Path(config_path)
            self._config_dir = self._config_path.parent
        elif config_dir:
            self._config_dir = Path(config_dir)
            self._config_path = self._config_dir / CONFIG_FILENAME
        else:
            env_path = os.environ.get(ENV_CONFIG_PATH)
            if env_path:
                self._config_path = Path(env_path)
                self._config_dir = self._config_path.parent
            else:
                self._config_dir = get_default_config_dir()
                self._config_path = self._config_dir / CONFIG_FILENAME

        # Initialize with defaults
        self._api_url: str = DEFAULT_API_URL
        self._timeout_seconds: float = DEFAULT_TIMEOUT
        self._log_level: str = DEFAULT_LOG_LEVEL
        self._per_branch_validity: bool = DEFAULT_PER_BRANCH_VALIDITY

        self._load()

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self._config_path

    # -------------------------------------------------------------------------
    # Configuration Properties
    # -------------------------------------------------------------------------

    @property
    def api_url(self) -> str:
        """Get the menu endpoint URL."""
        return os.environ.get(ENV_API_URL, self._api_url)

    @api_url.setter
    def api_url(self, value: str) -> None:
        self._api_url = value

    @property
    def timeout_seconds(self) -> float:
        """Get the request timeout in seconds."""
        return self._timeout_seconds

    @timeout_seconds.setter
    def timeout_seconds(self, value: float) -> None:
        self._timeout_seconds = float(value)

    @property
    def log_level(self) -> str:
        """Get the log level."""
        return os.environ.get(ENV_LOG_LEVEL, self._log_level)

    @log_level.setter
    def log_level(self, value: str) -> None:
        self._log_level = value.upper()

    @property
    def per_branch_validity(self) -> bool:
        """Whether an invalid branch leaves its later siblings untouched."""
        return self._per_branch_validity

    @per_branch_validity.setter
    def per_branch_validity(self, value: Any) -> None:
        self._per_branch_validity = _parse_bool(value)

    # -------------------------------------------------------------------------
    # Configuration Management
    # -------------------------------------------------------------------------

    def _load(self) -> None:
        """Load configuration from file."""
        if not self._config_path.exists():
            return

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {self._config_path}")

        api_url = data.get("api_url", DEFAULT_API_URL)
        if not isinstance(api_url, str) or not api_url.strip():
            raise ConfigError(f"api_url must be a non-empty string, got: {api_url!r}")
        self._api_url = api_url
        try:
            self._timeout_seconds = float(data.get("timeout_seconds", DEFAULT_TIMEOUT))
        except (TypeError, ValueError):
            raise ConfigError(f"timeout_seconds must be a number, got: {data.get('timeout_seconds')!r}")
        self._log_level = str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper()
        self._per_branch_validity = _parse_bool(
            data.get("per_branch_validity", DEFAULT_PER_BRANCH_VALIDITY)
        )

    def to_dict(self) -> dict:
        """Effective configuration values."""
        return {
            "api_url": self.api_url,
            "timeout_seconds": self.timeout_seconds,
            "log_level": self.log_level,
            "per_branch_validity": self.per_branch_validity,
        }

    def save(self) -> None:
        """Save configuration to file."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "api_url": self._api_url,
            "timeout_seconds": self._timeout_seconds,
            "log_level": self._log_level,
            "per_branch_validity": self._per_branch_validity,
        }

        with open(self._config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def set_value(self, key: str, value: str) -> None:
        """
        Set a configuration value from its string form.

        Raises:
            ConfigValidationError: If the key is unknown or the value invalid
        """
        if key not in SETTABLE_KEYS:
            raise ConfigValidationError(
                f"Unknown config key: {key} (expected one of: {', '.join(SETTABLE_KEYS)})"
            )
        if key == "timeout_seconds":
            try:
                self.timeout_seconds = float(value)
            except ValueError:
                raise ConfigValidationError(f"timeout_seconds must be a number, got: {value!r}")
        else:
            setattr(self, key, value)

    def validate(self) -> None:
        """
        Validate the current configuration.

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        if not self.api_url or not URL_PATTERN.match(self.api_url):
            raise ConfigValidationError(f"Invalid api_url format: {self.api_url}")

        if self.timeout_seconds <= 0:
            raise ConfigValidationError(
                f"timeout_seconds must be positive, got: {self.timeout_seconds}"
            )

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {self.log_level}"
            )
