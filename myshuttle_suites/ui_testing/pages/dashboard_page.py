"""
================================================================================
Dashboard Page Object
================================================================================

Landing page shown after a successful login.

Highlights:
  - dashboard heading and "Internal Use Only" label checks
  - URL based logged-in check
  - navigation to fare history and sign out

================================================================================
"""

from __future__ import annotations

from typing import Tuple

from myshuttle_suites.ui_testing.framework.locator import Locator
from myshuttle_suites.ui_testing.framework.page_base import BasePage, Visible


class DashboardPage(BasePage, Visible):
    """Dashboard page object."""

    PAGE_NAME = "Dashboard"

    DASHBOARD_TITLE = Locator.xpath("//h2[text()='Dashboard']", name="dashboard title")
    FARE_HISTORY_LINK = Locator.link_text("Access Your Fare History", name="fare history link")
    SIGN_OUT_LINK = Locator.attribute("href", "logout.jsp", tag="a", name="sign out link")
    INTERNAL_USE_LABEL = Locator.xpath(
        "//h5[contains(text(),'Internal Use Only')]", name="internal use only label"
    )

    # URL fragments treated as the authenticated area
    AUTHENTICATED_URL_FRAGMENTS: Tuple[str, ...] = ("dashboard", "login", "home.jsp")

    # =========================================================================
    # Visibility Checks
    # =========================================================================

    def is_dashboard_visible(self) -> bool:
        return self._is_displayed(self.DASHBOARD_TITLE)

    def is_page_visible(self) -> bool:
        return self.is_dashboard_visible()

    def is_user_logged_in(self) -> bool:
        current_url = self.session.current_url_or_empty().lower()
        return any(fragment in current_url for fragment in self.AUTHENTICATED_URL_FRAGMENTS)

    def is_internal_use_only_label_visible(self) -> bool:
        return self._is_displayed(self.INTERNAL_USE_LABEL)

    # =========================================================================
    # Navigation
    # =========================================================================

    def click_fare_history(self) -> None:
        self._click(self.FARE_HISTORY_LINK)

    def click_sign_out(self) -> None:
        """Sign out; callers re-check `is_user_logged_in()` afterwards."""
        self._click(self.SIGN_OUT_LINK)
