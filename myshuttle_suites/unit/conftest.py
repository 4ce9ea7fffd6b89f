"""Fixtures for framework unit tests (no browser, no network)."""

import pytest

from myshuttle_suites.ui_testing.framework.browser_session import BrowserSession
from myshuttle_suites.unit.fakes import FakePage, make_session


BASE_URL = "http://localhost:8080/myshuttledev/"


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage(url=BASE_URL)


@pytest.fixture
def session(fake_page: FakePage) -> BrowserSession:
    session = make_session(fake_page, base_url=BASE_URL)
    yield session
    session.close()
