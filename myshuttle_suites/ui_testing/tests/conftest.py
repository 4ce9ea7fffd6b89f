"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the live MyShuttle UI suites.

Key Features:
- Reachability check: the whole UI suite is skipped when the application at
  the configured base URL does not answer
- Page Object fixtures built through SessionFactory; every session is closed
  on teardown, whether the test passed or not
- Screenshot + URL capture on failure

================================================================================
"""

from pathlib import Path
from typing import Generator

import httpx
import pytest
from loguru import logger

from myshuttle_suites.ui_testing.framework.config_loader import (
    AppConfig,
    ConfigLoader,
    Credentials,
)
from myshuttle_suites.ui_testing.framework.session_factory import SessionFactory
from myshuttle_suites.ui_testing.pages.dashboard_page import DashboardPage
from myshuttle_suites.ui_testing.pages.fare_history_page import FareHistoryPage
from myshuttle_suites.ui_testing.pages.login_page import LoginPage
from myshuttle_tools.report_tools.allure_utils import attach_page_state


# ================================================================================
# Environment Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def live_app(app_config: AppConfig) -> AppConfig:
    """
    Session-scoped reachability check of the application under test.

    Skips every dependent test when the base URL cannot be reached, so the
    suite can be collected on machines without a running MyShuttle instance.
    """
    try:
        response = httpx.get(app_config.base_url, timeout=5.0, follow_redirects=True)
    except httpx.HTTPError as e:
        pytest.skip(f"MyShuttle is not reachable at {app_config.base_url}: {e}")
    logger.info(f"Application reachable: {app_config.base_url} (HTTP {response.status_code})")
    return app_config


@pytest.fixture(scope="session")
def session_factory(live_app: AppConfig) -> SessionFactory:
    """Factory producing page objects backed by fresh browser sessions."""
    return SessionFactory(live_app)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(session_factory: SessionFactory) -> Generator[LoginPage, None, None]:
    """Login page at the application entry URL."""
    with session_factory.create_login_page() as page:
        yield page


@pytest.fixture
def dashboard_page(session_factory: SessionFactory) -> Generator[DashboardPage, None, None]:
    """Dashboard reached by logging in with the configured credentials."""
    with session_factory.create_dashboard_page() as page:
        yield page


@pytest.fixture
def fare_history_page(session_factory: SessionFactory) -> Generator[FareHistoryPage, None, None]:
    """Fare history page reached through the dashboard link."""
    with session_factory.create_fare_history_page() as page:
        yield page


# ================================================================================
# Test Data
# ================================================================================

@pytest.fixture
def test_data(request, app_config: AppConfig):
    """
    Provides common test data for UI tests.

    `no_fares_user` is None unless credentials.no_fares_username is configured
    (or CREDENTIALS_NO_FARES_USERNAME is set).
    """
    config_file = request.config.getoption("--myshuttle-config")
    loader = ConfigLoader(Path(config_file) if config_file else None)
    no_fares_username = loader.get("credentials.no_fares_username")
    no_fares_user = None
    if no_fares_username:
        no_fares_user = Credentials(
            username=str(no_fares_username),
            password=str(loader.get("credentials.no_fares_password", "")),
        )

    return {
        "no_fares_user": no_fares_user,
        "valid_user": app_config.credentials,
        "invalid_user": Credentials(username="free", password="freepassword"),
        "error_phrases": (
            "Sorry, please back up and try again",
            "We couldn't find your email and password.",
        ),
        "no_record_message": "No records found",
        "heading_prefix": "Employee Fares for",
    }


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

_PAGE_FIXTURES = ("login_page", "dashboard_page", "fare_history_page")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach a screenshot and the current URL to the Allure report when a UI
    test fails.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    funcargs = getattr(item, "funcargs", {})
    for name in _PAGE_FIXTURES:
        page = funcargs.get(name)
        if page is not None:
            attach_page_state(page.session, name=f"{name}_failure")
            break
