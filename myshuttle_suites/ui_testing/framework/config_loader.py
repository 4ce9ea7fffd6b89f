"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/config.yaml)
    - Environment variable override (APP_BASE_URL overrides app.base_url)
    - Dot notation path access with default values
    - Conversion into an immutable AppConfig value that is passed explicitly
      to sessions and factories (no process-wide singleton)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class UnsupportedBrowserKindError(ConfigurationError):
    """Raised when the configured browser kind is not supported."""
    pass


class BrowserKind(str, Enum):
    """Browser engines a session can be opened with."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def parse(cls, value: Any) -> "BrowserKind":
        """
        Resolve a browser kind from config/CLI input.

        Accepts the canonical names plus the common aliases ``chrome`` and
        ``msedge``. Matching is case-insensitive.

        Raises:
            UnsupportedBrowserKindError: for anything else
        """
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        normalized = _BROWSER_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            supported = ", ".join(kind.value for kind in cls)
            raise UnsupportedBrowserKindError(
                f"Browser '{value}' is not supported. Use one of: {supported}"
            ) from None


_BROWSER_ALIASES: Dict[str, str] = {
    "chrome": "chromium",
    "msedge": "edge",
}


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used once per session at login time."""

    username: str = "fred"
    password: str = field(default="fredpassword", repr=False)

    @property
    def masked_password(self) -> str:
        return "*" * len(self.password)


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable configuration for one test run.

    Attributes:
        base_url: Application entry URL (login page)
        browser_kind: Browser engine to launch
        headless: Launch without a visible window
        viewport_width: Browser viewport width in pixels
        viewport_height: Browser viewport height in pixels
        default_timeout: Ceiling for element waits, in seconds
        short_timeout: Wait used for transient messages, in seconds
        poll_interval: Polling interval for wait_until, in seconds
        fare_history_path: Path of the fare history page relative to base_url
        credentials: Default login credentials
    """

    base_url: str
    browser_kind: BrowserKind = BrowserKind.CHROMIUM
    headless: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080
    default_timeout: float = 30.0
    short_timeout: float = 5.0
    poll_interval: float = 0.25
    fare_history_path: str = "home.jsp"
    credentials: Credentials = field(default_factory=Credentials)

    def validate(self) -> "AppConfig":
        """
        Fail fast on values that would make a session unusable.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: on an empty base URL or non-positive timeouts
        """
        if not self.base_url or not str(self.base_url).strip():
            raise ConfigurationError("app.base_url is not set")
        if self.default_timeout <= 0 or self.short_timeout <= 0:
            raise ConfigurationError("timeouts must be positive")
        if self.poll_interval <= 0:
            raise ConfigurationError("timeouts.poll_interval must be positive")
        return self

    def with_overrides(self, **changes: Any) -> "AppConfig":
        """Return a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "browser_kind" in changes:
            changes["browser_kind"] = BrowserKind.parse(changes["browser_kind"])
        return replace(self, **changes)


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (APP_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("app.base_url", "http://localhost:8080/myshuttledev/")
        'http://localhost:8080/myshuttledev/'

        >>> config.get("timeouts.default", 30)
        30

    Environment Variable Mapping:
        - app.base_url -> APP_BASE_URL
        - browser.kind -> BROWSER_KIND
        - browser.headless -> BROWSER_HEADLESS
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(self._config, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {self._config_path}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "app.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section (empty dict if missing)."""
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    def to_app_config(self) -> AppConfig:
        """Build an AppConfig from the loaded values (not yet validated)."""
        defaults = AppConfig(base_url="")
        try:
            return AppConfig(
                base_url=str(self.get("app.base_url", "") or ""),
                browser_kind=BrowserKind.parse(
                    self.get("browser.kind", defaults.browser_kind.value)
                ),
                headless=bool(self.get("browser.headless", defaults.headless)),
                viewport_width=int(self.get("browser.viewport_width", defaults.viewport_width)),
                viewport_height=int(self.get("browser.viewport_height", defaults.viewport_height)),
                default_timeout=float(self.get("timeouts.default", defaults.default_timeout)),
                short_timeout=float(self.get("timeouts.short", defaults.short_timeout)),
                poll_interval=float(self.get("timeouts.poll_interval", defaults.poll_interval)),
                fare_history_path=str(
                    self.get("app.fare_history_path", defaults.fare_history_path)
                ),
                credentials=Credentials(
                    username=str(self.get("credentials.username", defaults.credentials.username)),
                    password=str(self.get("credentials.password", defaults.credentials.password)),
                ),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e


def load_app_config(
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> AppConfig:
    """
    Load, override and validate the run configuration.

    Args:
        config_path: YAML file to read (DEFAULT_CONFIG_PATH when omitted)
        **overrides: AppConfig fields to replace (None values are ignored),
            typically coming from CLI options

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: when a value is missing or malformed
    """
    config = ConfigLoader(config_path).to_app_config().with_overrides(**overrides)
    config.validate()
    logger.debug(
        f"Run configuration: base_url={config.base_url} "
        f"browser={config.browser_kind.value} headless={config.headless}"
    )
    return config


__all__ = [
    "AppConfig",
    "BrowserKind",
    "ConfigLoader",
    "ConfigurationError",
    "Credentials",
    "UnsupportedBrowserKindError",
    "load_app_config",
]
