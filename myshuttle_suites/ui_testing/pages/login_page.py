"""
================================================================================
Login Page Object
================================================================================

Login screen of the MyShuttle application (application entry URL).

Covers:
  - logo / form / login button checks
  - credential entry and submission
  - post-submit success check and error message extraction

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from myshuttle_suites.ui_testing.framework.config_loader import Credentials
from myshuttle_suites.ui_testing.framework.locator import Locator
from myshuttle_suites.ui_testing.framework.page_base import BasePage, Visible


class LoginPage(BasePage, Visible):
    """Login page object."""

    PAGE_NAME = "Login"

    LOGO = Locator.css("img[src*='logologin.png']", name="login logo")
    LOGIN_FORM = Locator.css("form[action='login'][method='post']", name="login form")
    USERNAME_INPUT = Locator.id("email", name="username input")
    PASSWORD_INPUT = Locator.id("password", name="password input")
    LOGIN_BUTTON = Locator.css("input[type='submit'][value='Log in']", name="login button")
    ERROR_HEADING = Locator.css(".jumbotron h2", name="error heading")
    ERROR_DETAIL = Locator.css(".jumbotron p", name="error detail")

    # =========================================================================
    # Visibility Checks
    # =========================================================================

    def is_logo_visible(self) -> bool:
        return self._is_displayed(self.LOGO)

    def is_form_visible(self) -> bool:
        return self._is_displayed(self.LOGIN_FORM)

    def is_login_button_enabled(self) -> bool:
        return self._is_enabled(self.LOGIN_BUTTON)

    def is_page_visible(self) -> bool:
        return self.is_form_visible()

    # =========================================================================
    # Actions
    # =========================================================================

    def enter_username(self, username: str) -> None:
        self._fill(self.USERNAME_INPUT, username)

    def enter_password(self, password: str) -> None:
        self._fill(self.PASSWORD_INPUT, password, masked=True)

    def click_login(self) -> None:
        """Submit the form; waits for the resulting navigation to settle."""
        self._click(self.LOGIN_BUTTON)

    def login(self, credentials: Credentials) -> None:
        """Enter both credentials and submit."""
        with allure.step(f"Login (username={credentials.username})"):
            logger.info(f"Logging in as '{credentials.username}'")
            self.enter_username(credentials.username)
            self.enter_password(credentials.password)
            self.click_login()

    # =========================================================================
    # Verification
    # =========================================================================

    def is_login_successful(self) -> bool:
        """
        True once the submitted form has been replaced by the signed-in page.

        A valid POST is answered from the `login` route itself. Success means
        the form and the error jumbotron are both absent (checked immediately).
        """
        if not self.session.current_url_or_empty():
            return False
        if self.session.element_exists(self.LOGIN_FORM, timeout=0):
            return False
        return not self.session.element_exists(self.ERROR_HEADING, timeout=0)

    def get_error_message(self) -> str:
        """
        Error heading and detail joined by a space.

        Waits up to the short timeout for the heading; returns "" when either
        part is missing.
        """
        heading = self.session.find_element(self.ERROR_HEADING, timeout=self.session.short_timeout)
        if heading is None:
            return ""
        detail = self.session.find_element(self.ERROR_DETAIL, timeout=0)
        if detail is None:
            return ""
        return f"{heading.inner_text()} {detail.inner_text()}".strip()
