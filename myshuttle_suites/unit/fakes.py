"""
================================================================================
In-Memory Playwright Fakes
================================================================================

Minimal stand-ins for the parts of the Playwright sync API the framework
touches (Page, Locator). The DOM is a dict keyed by the exact selector string
a Locator renders to, so tests describe pages in the same terms the page
objects query them.

Usage:
    page = FakePage(
        url="http://app/login",
        dom={LoginPage.LOGO.selector: [FakeElement()]},
    )
    session = make_session(page)

================================================================================
"""

from typing import Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from myshuttle_suites.ui_testing.framework.browser_session import BrowserSession


class FakeElement:
    """One DOM node: text, visibility, enabled state and nested matches."""

    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        enabled: bool = True,
        children: Optional[Dict[str, List["FakeElement"]]] = None,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.children = children or {}
        self.on_click = on_click
        self.value = ""
        self.actions: List[str] = []

    def click(self) -> None:
        self.actions.append("click")
        if self.on_click is not None:
            self.on_click()

    def fill(self, value: str) -> None:
        self.actions.append("fill")
        self.value = value

    def clear(self) -> None:
        self.actions.append("clear")
        self.value = ""


class FakeLocator:
    """Locator over a fixed list of FakeElements."""

    def __init__(self, selector: str, matches: List[FakeElement]):
        self.selector = selector
        self.matches = matches

    def _single(self) -> FakeElement:
        if not self.matches:
            raise PlaywrightTimeoutError(f"Timeout waiting for {self.selector}")
        return self.matches[0]

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.selector, self.matches[:1])

    def count(self) -> int:
        return len(self.matches)

    def all(self) -> List["FakeLocator"]:
        return [FakeLocator(self.selector, [element]) for element in self.matches]

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(selector, self._single().children.get(selector, []))

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        if state == "attached" and self.matches:
            return
        if state == "visible" and any(element.visible for element in self.matches):
            return
        raise PlaywrightTimeoutError(
            f"Timeout {timeout}ms waiting for {self.selector} to be {state}"
        )

    def is_visible(self) -> bool:
        return bool(self.matches) and self.matches[0].visible

    def is_enabled(self) -> bool:
        return self._single().enabled

    def inner_text(self) -> str:
        return self._single().text

    def click(self) -> None:
        self._single().click()

    def fill(self, value: str) -> None:
        self._single().fill(value)

    def clear(self) -> None:
        self._single().clear()


class FakePage:
    """Page with a mutable URL, a navigation history and a selector-keyed DOM."""

    def __init__(self, url: str = "about:blank", dom: Optional[Dict[str, List[FakeElement]]] = None):
        self.url = url
        self.dom: Dict[str, List[FakeElement]] = dom or {}
        self.history: List[str] = []
        self.load_waits: List[str] = []
        self.closed = False

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(selector, self.dom.get(selector, []))

    def goto(self, url: str, wait_until: str = "load") -> None:
        self.history.append(self.url)
        self.url = url

    def go_back(self, wait_until: str = "load") -> None:
        if self.history:
            self.url = self.history.pop()

    def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.load_waits.append(state)

    def screenshot(self, full_page: bool = False) -> bytes:
        return b"\x89PNG fake"

    def close(self) -> None:
        self.closed = True


class DetachedPage(FakePage):
    """Page whose URL can no longer be read, as after the target crashed."""

    @property
    def url(self) -> str:
        raise PlaywrightError("Target page, context or browser has been closed")

    @url.setter
    def url(self, value: str) -> None:
        pass


def make_session(page: FakePage, base_url: str = "http://localhost:8080/myshuttledev/") -> BrowserSession:
    """BrowserSession over a fake page with short timeouts for fast tests."""
    return BrowserSession(
        page,
        base_url=base_url,
        default_timeout=0.2,
        short_timeout=0.1,
        poll_interval=0.01,
    )


def fare_row(
    row_id: str = "1",
    pickup: str = "2016-01-01 10:00:00",
    dropoff: str = "2016-01-01 10:30:00",
    fare: str = "$25.00",
    driver: str = "Jane",
    passenger_rating: str = "5",
    driver_rating: str = "4",
) -> FakeElement:
    """A fare table row whose nine cells answer the nth-child and td lookups."""
    values = [
        row_id, pickup, "Seattle", dropoff, "Redmond",
        fare, driver, passenger_rating, driver_rating,
    ]
    cells = [FakeElement(text=f" {value} ") for value in values]
    children: Dict[str, List[FakeElement]] = {"css=td": cells}
    for position, cell in enumerate(cells, start=1):
        children[f"css=td:nth-child({position})"] = [cell]
    return FakeElement(text="\t".join(values), children=children)
