"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the MyShuttle application.

Components:
    - config_loader: YAML/env configuration and the AppConfig run value
    - locator: Tagged locator values rendered to Playwright selectors
    - browser_session: Browser lifecycle and element lookup
    - page_base: Base page object and capability mixins
    - session_factory: Login/navigation workflow producing page objects
      (import it from its module; it depends on the pages package)

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import (
    AppConfig,
    BrowserKind,
    ConfigLoader,
    ConfigurationError,
    Credentials,
    UnsupportedBrowserKindError,
    load_app_config,
)
from .locator import ElementNotFoundError, Locator, Strategy
from .browser_session import BrowserSession, SessionClosedError
from .page_base import BasePage, NavigableBack, Visible

__all__ = [
    "AppConfig",
    "BasePage",
    "BrowserKind",
    "BrowserSession",
    "ConfigLoader",
    "ConfigurationError",
    "Credentials",
    "ElementNotFoundError",
    "Locator",
    "NavigableBack",
    "SessionClosedError",
    "Strategy",
    "UnsupportedBrowserKindError",
    "Visible",
    "load_app_config",
]
