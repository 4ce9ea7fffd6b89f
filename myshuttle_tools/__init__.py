"""
================================================================================
MyShuttle Automation Tools
================================================================================

Support utilities shared by the test suites and the test runner.

Modules:
    - common.logging_setup: Centralized Loguru configuration
    - report_tools.allure_utils: Allure attachment helpers

Author: Automation Team
License: MIT
================================================================================
"""

from myshuttle_tools.common.logging_setup import get_logger, init_logger

__all__ = [
    "get_logger",
    "init_logger",
]
