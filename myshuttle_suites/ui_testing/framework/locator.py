"""
================================================================================
Locator
================================================================================

Tagged locator values for the MyShuttle page objects.

A Locator pairs a lookup strategy with a value and renders itself to a
Playwright selector string. Page objects declare their elements as Locator
constants and resolve them through BrowserSession, so they never build raw
driver selectors themselves.

Strategies:
    - css:       plain CSS selector
    - xpath:     XPath expression
    - id:        element id attribute
    - link_text: anchor whose normalized visible text equals the value
    - attribute: element whose attribute contains the value

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ElementNotFoundError(Exception):
    """Raised when an action targets an element that could not be located."""
    pass


class Strategy(str, Enum):
    """Lookup strategy of a Locator."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    LINK_TEXT = "link_text"
    ATTRIBUTE = "attribute"


def _quote(value: str) -> str:
    """Quote a literal for use inside a CSS attribute selector."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _xpath_literal(value: str) -> str:
    """Quote a literal for XPath 1.0, which has no escape sequences."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


@dataclass(frozen=True)
class Locator:
    """
    Strategy + value pair identifying a DOM element.

    Attributes:
        strategy: How `value` is interpreted
        value: Selector, id, link text or attribute fragment
        attribute_name: Attribute name (ATTRIBUTE strategy only)
        tag: Restrict ATTRIBUTE matches to this tag name ("*" for any)
        name: Human-readable element name for logs and reports

    Usage:
        >>> Locator.id("email").selector
        'css=[id="email"]'
        >>> Locator.attribute("href", "logout.jsp", tag="a").selector
        'css=a[href*="logout.jsp"]'
    """

    strategy: Strategy
    value: str
    attribute_name: str = ""
    tag: str = "*"
    name: str = ""

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def css(cls, selector: str, name: str = "") -> "Locator":
        return cls(Strategy.CSS, selector, name=name)

    @classmethod
    def xpath(cls, expression: str, name: str = "") -> "Locator":
        return cls(Strategy.XPATH, expression, name=name)

    @classmethod
    def id(cls, element_id: str, name: str = "") -> "Locator":
        return cls(Strategy.ID, element_id, name=name)

    @classmethod
    def link_text(cls, text: str, name: str = "") -> "Locator":
        return cls(Strategy.LINK_TEXT, text, name=name)

    @classmethod
    def attribute(
        cls,
        attribute: str,
        fragment: str,
        tag: str = "*",
        name: str = "",
    ) -> "Locator":
        return cls(Strategy.ATTRIBUTE, fragment, attribute_name=attribute, tag=tag, name=name)

    # =========================================================================
    # Rendering
    # =========================================================================

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        if self.strategy is Strategy.CSS:
            return f"css={self.value}"
        if self.strategy is Strategy.XPATH:
            return f"xpath={self.value}"
        if self.strategy is Strategy.ID:
            return f"css=[id={_quote(self.value)}]"
        if self.strategy is Strategy.LINK_TEXT:
            return f"xpath=//a[normalize-space(.)={_xpath_literal(self.value)}]"
        if self.strategy is Strategy.ATTRIBUTE:
            if not self.attribute_name:
                raise ValueError("attribute locator requires an attribute name")
            tag = "" if self.tag == "*" else self.tag
            return f"css={tag}[{self.attribute_name}*={_quote(self.value)}]"
        raise ValueError(f"Unknown locator strategy: {self.strategy}")

    @property
    def description(self) -> str:
        """Name used in logs: explicit name, else strategy and value."""
        return self.name or f"{self.strategy.value}={self.value}"

    def __str__(self) -> str:
        return self.description


__all__ = [
    "ElementNotFoundError",
    "Locator",
    "Strategy",
]
