"""
Test suites package.

Kept importable to support:
  - IDE navigation
  - the programmatic runner (`run_tests.py`)
  - page objects and the session factory being reused outside pytest
"""
