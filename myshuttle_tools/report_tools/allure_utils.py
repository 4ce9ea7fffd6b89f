"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the UI suites when a test fails.

Features:
- Text / JSON attachments
- Screenshot attachment
- Page state snapshot (URL + screenshot) taken from a browser session

================================================================================
"""

import json
from typing import Any

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_screenshot(png: bytes, name: str = "Screenshot"):
    """
    Attach a PNG screenshot to Allure report.

    Args:
        png: Screenshot bytes
        name: Attachment name
    """
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_page_state(session: Any, name: str = "failure") -> bool:
    """
    Attach the current URL and a full-page screenshot of a browser session.

    Works with any object exposing `closed`, `current_url()` and
    `screenshot()` (BrowserSession). Closed sessions are skipped.

    Returns:
        True if anything was attached
    """
    if session is None or getattr(session, "closed", True):
        return False

    try:
        attach_text(session.current_url(), name=f"{name}_url")
        attach_screenshot(session.screenshot(), name=f"{name}_screenshot")
    except Exception as e:
        # Capture problems are logged, the test failure stays the reported error
        logger.warning(f"Failed to capture page state: {e}")
        return False
    return True
