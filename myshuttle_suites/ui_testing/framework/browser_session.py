"""
================================================================================
Browser Session
================================================================================

Browser lifecycle management for UI automation.

A BrowserSession owns one Playwright handle chain
(playwright -> browser -> context -> page) pointed at the MyShuttle
application and is the only place that talks to the driver.

Features:
    - Browser kind selection (chromium, firefox, edge)
    - Fail-fast validation before any browser process is spawned
    - Element lookup that returns None instead of raising
    - Bounded waits (element appearance, visibility, arbitrary predicates)
    - Idempotent disposal and context-manager support

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import urljoin

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Locator as Element,
    Page,
    Playwright,
    sync_playwright,
)

from .config_loader import AppConfig, BrowserKind, ConfigurationError
from .locator import ElementNotFoundError, Locator


class SessionClosedError(RuntimeError):
    """Raised when a session (or a page object over it) is used after close()."""
    pass


class BrowserSession:
    """
    A running browser pointed at the target application.

    Lookup failures are never raised from `find_element`; they come back as
    None so page objects can implement "is X visible" checks without
    exception-based control flow. Timeouts are expressed in seconds.

    Usage:
        with BrowserSession.open("http://localhost:8080/myshuttledev/") as session:
            element = session.find_element(Locator.id("email"))
            if element is not None:
                element.fill("fred")

        # Or from a run configuration
        session = BrowserSession.open(app_config)
    """

    # Launch arguments per engine (headless flags are passed separately)
    LAUNCH_ARGS: Dict[BrowserKind, List[str]] = {
        BrowserKind.CHROMIUM: ["--disable-gpu", "--ignore-certificate-errors"],
        BrowserKind.FIREFOX: [],
        BrowserKind.EDGE: ["--disable-gpu", "--ignore-certificate-errors"],
    }

    def __init__(
        self,
        page: Page,
        base_url: str,
        default_timeout: float = 30.0,
        short_timeout: float = 5.0,
        poll_interval: float = 0.25,
        browser_kind: BrowserKind = BrowserKind.CHROMIUM,
        context: Optional[BrowserContext] = None,
        browser: Optional[Browser] = None,
        playwright: Optional[Playwright] = None,
    ):
        """
        Wrap an already started page.

        Use `BrowserSession.open()` to launch a browser; the constructor is
        for callers that manage the driver themselves.

        Args:
            page: Playwright page the session drives
            base_url: Application base URL (relative paths resolve against it)
            default_timeout: Ceiling for element waits in seconds
            short_timeout: Wait for transient elements (messages) in seconds
            poll_interval: Interval between `wait_until` checks in seconds
            browser_kind: Engine the page belongs to (informational)
            context: Owning browser context, closed with the session
            browser: Owning browser, closed with the session
            playwright: Playwright driver, stopped with the session
        """
        self.page = page
        self.base_url = base_url
        self.default_timeout = default_timeout
        self.short_timeout = short_timeout
        self.poll_interval = poll_interval
        self.browser_kind = browser_kind

        self._context = context
        self._browser = browser
        self._playwright = playwright
        self._closed = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @classmethod
    def open(
        cls,
        target: Union[AppConfig, str, None],
        browser_kind: Union[BrowserKind, str, None] = None,
        headless: Optional[bool] = None,
    ) -> "BrowserSession":
        """
        Start a browser of the requested kind and navigate to the base URL.

        Args:
            target: AppConfig, or the base URL as a string
            browser_kind: Engine to launch (overrides the config value)
            headless: Run without a visible window (overrides the config value)

        Returns:
            Open BrowserSession positioned at the base URL

        Raises:
            ConfigurationError: base URL empty or missing
            UnsupportedBrowserKindError: unknown browser kind
        """
        if isinstance(target, AppConfig):
            config = target
        else:
            config = AppConfig(base_url=(target or "").strip())

        # Validation happens before any driver process is started
        config = config.with_overrides(browser_kind=browser_kind, headless=headless)
        if not config.base_url or not config.base_url.strip():
            raise ConfigurationError("BaseUrl is not set")
        config.validate()

        playwright = sync_playwright().start()
        browser: Optional[Browser] = None
        try:
            browser = cls._launch(playwright, config.browser_kind, config.headless)
            context = browser.new_context(
                viewport={
                    "width": config.viewport_width,
                    "height": config.viewport_height,
                },
                ignore_https_errors=True,
            )
            # Bounds Playwright's own auto-waits (inner_text, click, ...)
            context.set_default_timeout(config.default_timeout * 1000)
            page = context.new_page()
        except BaseException:
            if browser is not None:
                browser.close()
            playwright.stop()
            raise

        logger.debug(
            f"Browser started: {config.browser_kind.value} "
            f"(headless={config.headless})"
        )

        session = cls(
            page,
            base_url=config.base_url,
            default_timeout=config.default_timeout,
            short_timeout=config.short_timeout,
            poll_interval=config.poll_interval,
            browser_kind=config.browser_kind,
            context=context,
            browser=browser,
            playwright=playwright,
        )
        try:
            session.navigate(config.base_url)
        except BaseException:
            session.close()
            raise
        return session

    @classmethod
    def _launch(
        cls,
        playwright: Playwright,
        kind: BrowserKind,
        headless: bool,
    ) -> Browser:
        """Launch the engine matching `kind`."""
        args = list(cls.LAUNCH_ARGS.get(kind, []))
        if kind is BrowserKind.FIREFOX:
            return playwright.firefox.launch(headless=headless, args=args)
        if kind is BrowserKind.EDGE:
            return playwright.chromium.launch(channel="msedge", headless=headless, args=args)
        return playwright.chromium.launch(headless=headless, args=args)

    def close(self) -> None:
        """Close page, context and browser, then stop Playwright. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        for name, closer in (
            ("page", getattr(self.page, "close", None)),
            ("context", getattr(self._context, "close", None)),
            ("browser", getattr(self._browser, "close", None)),
            ("playwright", getattr(self._playwright, "stop", None)),
        ):
            if closer is None:
                continue
            try:
                closer()
            except PlaywrightError as e:
                logger.debug(f"Ignoring error while closing {name}: {e}")

        self._context = None
        self._browser = None
        self._playwright = None
        logger.debug("Browser closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Browser session has been closed")

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Element Lookup
    # =========================================================================

    def find_element(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> Optional[Element]:
        """
        Resolve a locator against the current DOM.

        Args:
            locator: Element to find
            timeout: Seconds to wait for the element to be attached.
                None uses the session default; <= 0 does a single
                immediate lookup.

        Returns:
            The first matching element, or None when absent
        """
        self._ensure_open()
        timeout = self.default_timeout if timeout is None else timeout
        return self._resolve(self.page.locator(locator.selector).first, locator, timeout)

    def _resolve(self, target: Element, locator: Locator, timeout: float) -> Optional[Element]:
        try:
            if timeout <= 0:
                return target if target.count() > 0 else None
            target.wait_for(state="attached", timeout=timeout * 1000)
            return target
        except PlaywrightError as e:
            logger.debug(f"Element '{locator}' not found within {timeout}s: {str(e)[:80]}")
            return None

    def find_elements(self, locator: Locator) -> List[Element]:
        """Return all elements currently matching `locator` (may be empty)."""
        self._ensure_open()
        try:
            return self.page.locator(locator.selector).all()
        except PlaywrightError as e:
            logger.debug(f"Lookup of '{locator}' failed: {str(e)[:80]}")
            return []

    def find_in(
        self,
        parent: Element,
        locator: Locator,
        timeout: float = 0,
    ) -> Optional[Element]:
        """
        Resolve `locator` inside an element returned by an earlier lookup.

        Same contract as `find_element`, but the default is an immediate
        lookup: the parent is already on the page.
        """
        self._ensure_open()
        try:
            target = parent.locator(locator.selector).first
        except PlaywrightError as e:
            logger.debug(f"Lookup of '{locator}' in parent failed: {str(e)[:80]}")
            return None
        return self._resolve(target, locator, timeout)

    def find_all_in(self, parent: Element, locator: Locator) -> List[Element]:
        """All matches of `locator` inside `parent` (may be empty)."""
        self._ensure_open()
        try:
            return parent.locator(locator.selector).all()
        except PlaywrightError as e:
            logger.debug(f"Lookup of '{locator}' in parent failed: {str(e)[:80]}")
            return []

    def text_of(self, element: Optional[Element]) -> str:
        """Rendered text of `element`; "" when it is None or has gone stale."""
        self._ensure_open()
        if element is None:
            return ""
        try:
            return element.inner_text()
        except PlaywrightError as e:
            logger.debug(f"Could not read element text: {str(e)[:80]}")
            return ""

    def element_exists(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """True iff `find_element` resolves."""
        return self.find_element(locator, timeout) is not None

    def require(self, locator: Locator, timeout: Optional[float] = None) -> Element:
        """
        Resolve an element an action depends on.

        Raises:
            ElementNotFoundError: when the element does not appear in time
        """
        element = self.find_element(locator, timeout)
        if element is None:
            message = f"Element '{locator}' not found ({locator.selector})"
            logger.error(message)
            raise ElementNotFoundError(message)
        return element

    def is_displayed(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """True iff the element resolves and is visible."""
        element = self.find_element(locator, timeout)
        if element is None:
            return False
        try:
            return element.is_visible()
        except PlaywrightError:
            return False

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    def wait_until_visible(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """Wait for the element to become visible. Returns False on timeout."""
        self._ensure_open()
        timeout = self.default_timeout if timeout is None else timeout
        try:
            self.page.locator(locator.selector).first.wait_for(
                state="visible", timeout=max(timeout, 0) * 1000
            )
            return True
        except PlaywrightError:
            logger.debug(f"Element '{locator}' not visible within {timeout}s")
            return False

    def wait_until(
        self,
        predicate: Callable[["BrowserSession"], Any],
        timeout: Optional[float] = None,
        message: str = "condition",
    ) -> bool:
        """
        Poll `predicate(session)` until it is truthy or the timeout elapses.

        Returns:
            True if the predicate held within the timeout
        """
        self._ensure_open()
        timeout = self.default_timeout if timeout is None else timeout
        deadline = time.monotonic() + timeout

        while True:
            if predicate(self):
                return True
            if time.monotonic() >= deadline:
                logger.debug(f"Timed out after {timeout}s waiting for {message}")
                return False
            time.sleep(self.poll_interval)

    def wait_for_load(self, state: str = "load", timeout: Optional[float] = None) -> None:
        """Wait (bounded, non-fatal) for the page to reach a load state."""
        self._ensure_open()
        timeout = self.default_timeout if timeout is None else timeout
        try:
            self.page.wait_for_load_state(state, timeout=timeout * 1000)
        except PlaywrightError as e:
            logger.debug(f"Load state '{state}' not reached: {str(e)[:80]}")

    # =========================================================================
    # Navigation
    # =========================================================================

    def current_url(self) -> str:
        self._ensure_open()
        return self.page.url

    def current_url_or_empty(self) -> str:
        """Current URL, or "" when the driver cannot report it."""
        self._ensure_open()
        try:
            return self.page.url
        except PlaywrightError as e:
            logger.warning(f"Could not read current URL: {e}")
            return ""

    def url_for(self, path: str) -> str:
        """Absolute URL for `path` relative to the base URL."""
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return urljoin(base, path)

    def navigate(self, url_or_path: str) -> None:
        """Go to an absolute URL or a path relative to the base URL."""
        self._ensure_open()
        url = url_or_path if "://" in url_or_path else self.url_for(url_or_path)
        logger.debug(f"Navigating to: {url}")
        self.page.goto(url, wait_until="load")

    def navigate_back(self) -> None:
        self._ensure_open()
        logger.debug("Navigating back")
        self.page.go_back(wait_until="load")

    # =========================================================================
    # Debug Utilities
    # =========================================================================

    def screenshot(self, full_page: bool = True) -> bytes:
        """Capture the current viewport (or full page) as PNG bytes."""
        self._ensure_open()
        return self.page.screenshot(full_page=full_page)


__all__ = [
    "BrowserSession",
    "Element",
    "SessionClosedError",
]
