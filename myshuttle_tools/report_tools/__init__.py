"""Allure reporting helpers."""

from .allure_utils import attach_json, attach_page_state, attach_screenshot, attach_text

__all__ = [
    "attach_json",
    "attach_page_state",
    "attach_screenshot",
    "attach_text",
]
