"""
================================================================================
Base Page Object
================================================================================

Foundation classes for the Page Object Model implementation.

Provides:
    - BasePage: session ownership, text/visibility helpers, disposal
    - Visible: capability for pages that can report whether they are shown
    - NavigableBack: capability for pages that support browser back navigation

Page objects hold no state besides their session; every query re-reads the
live DOM.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger

from .browser_session import BrowserSession, Element
from .locator import Locator


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            USERNAME_INPUT = Locator.id("email", name="username input")

            def enter_username(self, username: str) -> None:
                self._fill(self.USERNAME_INPUT, username)
    """

    PAGE_NAME: str = "page"

    def __init__(self, session: BrowserSession):
        """
        Initialize page object.

        Args:
            session: Open BrowserSession this page reads from
        """
        self.session = session

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Dispose of the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def url(self) -> str:
        """Current page URL."""
        return self.session.current_url()

    # =========================================================================
    # Query Helpers
    # =========================================================================

    def _check_timeout(self, timeout: Optional[float]) -> float:
        return self.session.short_timeout if timeout is None else timeout

    def _is_displayed(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """Visibility check; waits at most the short timeout by default."""
        return self.session.is_displayed(locator, self._check_timeout(timeout))

    def _is_enabled(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        element = self.session.find_element(locator, self._check_timeout(timeout))
        return bool(element is not None and element.is_enabled())

    def _text(self, locator: Locator, timeout: Optional[float] = None) -> str:
        """Visible text of the element, or "" when it is absent."""
        return self.session.text_of(self.session.find_element(locator, timeout))

    def _texts(self, locator: Locator) -> List[str]:
        """Trimmed texts of all elements currently matching `locator`."""
        return [self.session.text_of(element).strip() for element in self.session.find_elements(locator)]

    def _url_contains(self, fragment: str) -> bool:
        return fragment.lower() in self.session.current_url_or_empty().lower()

    # =========================================================================
    # Action Helpers
    # =========================================================================

    def _fill(self, locator: Locator, value: str, masked: bool = False) -> None:
        """Clear the field, then type `value` into it."""
        shown = "*" * len(value) if masked else value
        with allure.step(f"Fill {locator.description}: {shown}"):
            field: Element = self.session.require(locator)
            field.clear()
            field.fill(value)
            logger.debug(f"Filled {locator.description} with '{shown}'")

    def _click(self, locator: Locator, wait_for_load: bool = True) -> None:
        """Click the element and optionally wait for the resulting page load."""
        with allure.step(f"Click {locator.description}"):
            self.session.require(locator).click()
            logger.debug(f"Clicked {locator.description}")
            if wait_for_load:
                self.session.wait_for_load()


class Visible:
    """Capability: the page can tell whether it is currently shown."""

    def is_page_visible(self) -> bool:
        raise NotImplementedError


class NavigableBack:
    """Capability: the page can return to the previous page in history."""

    session: BrowserSession

    def navigate_back(self) -> None:
        with allure.step("Navigate back"):
            self.session.navigate_back()


__all__ = [
    "BasePage",
    "NavigableBack",
    "Visible",
]
