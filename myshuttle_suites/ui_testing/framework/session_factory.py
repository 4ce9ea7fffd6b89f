"""
================================================================================
Session Factory
================================================================================

Builds ready-to-use page objects by composing the cross-page workflow:

    NOT_STARTED -> SESSION_OPEN -> LOGGED_IN -> ON_FARE_HISTORY

Transitions are strictly forward. Disposal (closing the session) is terminal
from any state; if a step fails after the browser was opened, the session is
closed before the error propagates.

Usage:
    factory = SessionFactory(load_app_config())

    with factory.create_dashboard_page() as dashboard:
        assert dashboard.is_dashboard_visible()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, List, Optional, TypeVar

import allure
from loguru import logger

from myshuttle_suites.ui_testing.framework.browser_session import BrowserSession
from myshuttle_suites.ui_testing.framework.config_loader import AppConfig, Credentials
from myshuttle_suites.ui_testing.pages.dashboard_page import DashboardPage
from myshuttle_suites.ui_testing.pages.fare_history_page import FareHistoryPage
from myshuttle_suites.ui_testing.pages.login_page import LoginPage


T = TypeVar("T")


class WorkflowError(RuntimeError):
    """Raised on a backward or repeated workflow transition."""
    pass


class WorkflowState(IntEnum):
    NOT_STARTED = 0
    SESSION_OPEN = 1
    LOGGED_IN = 2
    ON_FARE_HISTORY = 3


class LoginWorkflow:
    """
    Forward-only state tracker for one factory call.

    Attributes:
        state: Current workflow state
        history: States visited, in order
    """

    def __init__(self) -> None:
        self.state = WorkflowState.NOT_STARTED
        self.history: List[WorkflowState] = [self.state]

    def advance(self, target: WorkflowState) -> None:
        if target <= self.state:
            raise WorkflowError(
                f"Cannot move from {self.state.name} to {target.name}"
            )
        logger.debug(f"Workflow: {self.state.name} -> {target.name}")
        self.state = target
        self.history.append(target)


class SessionFactory:
    """
    Creates page objects, each backed by its own freshly opened session.

    The caller owns the returned page object and must close it (directly or
    through the context-manager protocol).
    """

    def __init__(
        self,
        config: AppConfig,
        session_opener: Optional[Callable[..., BrowserSession]] = None,
    ):
        """
        Args:
            config: Validated run configuration
            session_opener: Callable with the signature of
                `BrowserSession.open`; defaults to it
        """
        self.config = config
        self._open_session = session_opener or BrowserSession.open
        self.last_workflow: Optional[LoginWorkflow] = None

    # =========================================================================
    # Page Factories
    # =========================================================================

    def create_login_page(self, headless: Optional[bool] = None) -> LoginPage:
        """Open a session and return the login page at the base URL."""
        with allure.step("Create login page"):
            return self._build(headless, lambda session, workflow: LoginPage(session))

    def create_dashboard_page(
        self,
        headless: Optional[bool] = None,
        credentials: Optional[Credentials] = None,
    ) -> DashboardPage:
        """Open a session, log in and return the dashboard page."""
        def build(session: BrowserSession, workflow: LoginWorkflow) -> DashboardPage:
            self._perform_login(session, workflow, credentials)
            return DashboardPage(session)

        with allure.step("Create dashboard page"):
            return self._build(headless, build)

    def create_fare_history_page(
        self,
        headless: Optional[bool] = None,
        credentials: Optional[Credentials] = None,
    ) -> FareHistoryPage:
        """Open a session, log in, click through to fare history and return it."""
        def build(session: BrowserSession, workflow: LoginWorkflow) -> FareHistoryPage:
            self._perform_login(session, workflow, credentials)
            DashboardPage(session).click_fare_history()
            workflow.advance(WorkflowState.ON_FARE_HISTORY)
            return FareHistoryPage(session, fare_history_path=self.config.fare_history_path)

        with allure.step("Create fare history page"):
            return self._build(headless, build)

    # =========================================================================
    # Workflow Steps
    # =========================================================================

    def _build(
        self,
        headless: Optional[bool],
        build: Callable[[BrowserSession, LoginWorkflow], T],
    ) -> T:
        workflow = LoginWorkflow()
        self.last_workflow = workflow

        session = self._open_session(self.config, headless=headless)
        workflow.advance(WorkflowState.SESSION_OPEN)
        try:
            return build(session, workflow)
        except BaseException:
            logger.warning(
                f"Page creation failed in state {workflow.state.name}; closing session"
            )
            session.close()
            raise

    def _perform_login(
        self,
        session: BrowserSession,
        workflow: LoginWorkflow,
        credentials: Optional[Credentials],
    ) -> None:
        LoginPage(session).login(credentials or self.config.credentials)
        workflow.advance(WorkflowState.LOGGED_IN)


__all__ = [
    "LoginWorkflow",
    "SessionFactory",
    "WorkflowError",
    "WorkflowState",
]
