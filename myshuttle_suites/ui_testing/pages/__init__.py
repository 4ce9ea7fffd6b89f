"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the MyShuttle application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .dashboard_page import DashboardPage
from .fare_history_page import FareHistoryPage, FareRecord

__all__ = [
    "DashboardPage",
    "FareHistoryPage",
    "FareRecord",
    "LoginPage",
]
