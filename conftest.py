"""
Repository-level pytest configuration.

Responsibilities:
  - Command line options that override config/config.yaml for a run
  - Loading the run configuration once per session (explicit value, passed
    to fixtures; nothing global)
  - Loguru initialization from the `logging` section

Credentials in config/config.yaml are the demo account of the sample
application. Real environments should inject them via CREDENTIALS_USERNAME /
CREDENTIALS_PASSWORD.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from myshuttle_suites.ui_testing.framework.config_loader import (
    AppConfig,
    ConfigLoader,
    load_app_config,
)
from myshuttle_tools.common.logging_setup import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("myshuttle", "MyShuttle UI automation")
    group.addoption(
        "--browser-kind",
        action="store",
        default=None,
        choices=["chromium", "chrome", "firefox", "edge", "msedge"],
        help="Browser engine for UI tests (overrides browser.kind)",
    )
    group.addoption(
        "--show-browser",
        action="store_true",
        default=False,
        help="Run UI tests with a visible browser window",
    )
    group.addoption(
        "--app-base-url",
        action="store",
        default=None,
        help="Application entry URL (overrides app.base_url)",
    )
    group.addoption(
        "--myshuttle-config",
        action="store",
        default=None,
        help="Alternative YAML configuration file",
    )


def pytest_configure(config):
    """Initialize logging before collection starts."""
    config_file = config.getoption("--myshuttle-config")
    loader = ConfigLoader(Path(config_file) if config_file else None)
    logging_section = loader.get_section("logging")
    init_logger(
        level=str(loader.get("logging.level", "INFO")),
        format_str=logging_section.get("format"),
        log_file=logging_section.get("file"),
        rotation=logging_section.get("rotation", "10 MB"),
        retention=logging_section.get("retention", "7 days"),
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def app_config(request) -> AppConfig:
    """
    Validated run configuration.

    CLI options win over environment variables, which win over the YAML file.
    """
    config_file = request.config.getoption("--myshuttle-config")
    return load_app_config(
        Path(config_file) if config_file else None,
        base_url=request.config.getoption("--app-base-url"),
        browser_kind=request.config.getoption("--browser-kind"),
        headless=False if request.config.getoption("--show-browser") else None,
    )
