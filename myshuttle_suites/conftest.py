"""
================================================================================
Suite-Level Pytest Configuration
================================================================================

Registers the project-wide markers and tags collected tests by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Tests driving a real browser against the application"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests running against in-memory fakes"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "login: Tests related to the login page"
    )
    config.addinivalue_line(
        "markers", "dashboard: Tests related to the dashboard"
    )
    config.addinivalue_line(
        "markers", "fare_history: Tests related to the fare history table"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add domain markers based on the test location."""
    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "MyShuttle UI Automation Suite",
        "=" * 60,
        "",
    ]
