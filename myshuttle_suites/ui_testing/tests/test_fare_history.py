"""
================================================================================
Fare History UI Tests
================================================================================

Scenarios for the "Employee Fares for <user>" table:
  - heading, labels and table structure
  - per-row access and bounds
  - column value sanity (dates, fares, ratings)
  - ordering helpers and back navigation
  - empty-table message (needs an account without fares)

================================================================================
"""

from dataclasses import asdict

import allure
import pytest

from myshuttle_suites.ui_testing.framework.session_factory import SessionFactory
from myshuttle_suites.ui_testing.pages.fare_history_page import (
    EXPECTED_COLUMN_HEADERS,
    FareHistoryPage,
)
from myshuttle_tools.report_tools.allure_utils import attach_json


@allure.epic("UI Testing")
@allure.feature("Fare History")
@pytest.mark.fare_history
class TestFareHistoryPage:
    """Fare history page UI test suite."""

    # =========================================================================
    # Page Layout
    # =========================================================================

    @allure.story("Page Layout")
    @allure.title("Heading starts with 'Employee Fares for'")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.smoke
    def test_page_heading(self, fare_history_page: FareHistoryPage, test_data):
        assert fare_history_page.get_page_heading().startswith(test_data["heading_prefix"])

    @allure.story("Page Layout")
    @allure.title("Heading contains the logged-in user name")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_page_heading_contains_user_name(self, fare_history_page: FareHistoryPage):
        user_name = fare_history_page.get_logged_in_user_name()

        assert user_name
        assert user_name in fare_history_page.get_page_heading(), \
            "Page heading should contain the logged-in username."

    @allure.story("Page Layout")
    @allure.title("Fare table is visible")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_fare_table_visible(self, fare_history_page: FareHistoryPage):
        assert fare_history_page.is_fare_table_visible()
        assert fare_history_page.is_page_visible()

    @allure.story("Page Layout")
    @allure.title("Internal Use Only label is visible")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    def test_internal_use_only_label_visible(self, fare_history_page: FareHistoryPage):
        assert fare_history_page.is_internal_use_only_label_visible()

    # =========================================================================
    # Table Structure
    # =========================================================================

    @allure.story("Table Structure")
    @allure.title("Column headers match the nine-column layout")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.smoke
    def test_column_headers(self, fare_history_page: FareHistoryPage):
        headers = fare_history_page.get_all_column_headers()

        assert len(headers) == 9, "Fare table should have 9 columns"
        assert headers == list(EXPECTED_COLUMN_HEADERS)

    @allure.story("Table Structure")
    @allure.title("has_column recognises every header and rejects unknown ones")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_has_column(self, fare_history_page: FareHistoryPage):
        for column in EXPECTED_COLUMN_HEADERS:
            assert fare_history_page.has_column(column), f"Missing column {column}"
        assert not fare_history_page.has_column("NonExistent")

    @allure.story("Table Structure")
    @allure.title("Every fare row has nine cells")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_row_cell_count(self, fare_history_page: FareHistoryPage):
        for i in range(fare_history_page.get_fare_row_count()):
            cells = fare_history_page.get_fare_cells_by_row(i)
            assert len(cells) == 9, f"Row {i} should have 9 cells"

    @allure.story("Table Structure")
    @allure.title("Fare table has at least one record")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.smoke
    def test_has_records(self, fare_history_page: FareHistoryPage):
        assert fare_history_page.get_number_of_fare_records() > 0

    @allure.story("Row Access")
    @allure.title("Every valid row index returns non-empty text")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_fare_details_by_row(self, fare_history_page: FareHistoryPage):
        count = fare_history_page.get_fare_row_count()

        for i in range(count):
            assert fare_history_page.get_fare_details_by_row(i).strip()
        assert len(list(fare_history_page.get_all_fare_details())) == count

    @allure.story("Row Access")
    @allure.title("Out-of-range row index raises IndexError")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_fare_details_by_row_out_of_range(self, fare_history_page: FareHistoryPage):
        count = fare_history_page.get_fare_row_count()

        with pytest.raises(IndexError):
            fare_history_page.get_fare_details_by_row(-1)
        with pytest.raises(IndexError):
            fare_history_page.get_fare_details_by_row(count)
        with pytest.raises(IndexError):
            fare_history_page.get_fare_details_by_row(999)

    # =========================================================================
    # Column Values
    # =========================================================================

    @allure.story("Column Values")
    @allure.title("Every trip is picked up before it is dropped off")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_trip_dates(self, fare_history_page: FareHistoryPage):
        for pickup, dropoff in fare_history_page.get_trip_dates():
            assert pickup < dropoff, f"Pickup {pickup} is not before dropoff {dropoff}"

    @allure.story("Column Values")
    @allure.title("Fare amounts are positive")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_fare_amounts_positive(self, fare_history_page: FareHistoryPage):
        fares = fare_history_page.get_fare_amounts()

        assert fares
        assert all(fare > 0 for fare in fares)

    @allure.story("Column Values")
    @allure.title("Passenger and driver ratings are between 1 and 5")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    def test_ratings_in_range(self, fare_history_page: FareHistoryPage):
        for rating in fare_history_page.get_passenger_ratings():
            assert 1 <= rating <= 5, "Passenger rating must be between 1 and 5"
        for rating in fare_history_page.get_driver_ratings():
            assert 1 <= rating <= 5, "Driver rating must be between 1 and 5"

    @allure.story("Column Values")
    @allure.title("Rows parse into complete fare records")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    def test_fare_records(self, fare_history_page: FareHistoryPage):
        records = list(fare_history_page.get_fare_records())
        attach_json([asdict(record) for record in records], name="fare records")

        assert len(records) == fare_history_page.get_fare_row_count()
        assert [record.fare for record in records] == fare_history_page.get_fare_amounts()

    # =========================================================================
    # Sorting
    # =========================================================================

    @allure.story("Sorting")
    @allure.title("sort_by_fare returns the fares in ascending order")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_sort_by_fare(self, fare_history_page: FareHistoryPage):
        fares = fare_history_page.get_fare_amounts()
        ordered = fare_history_page.sort_by_fare()

        assert sorted(fares) == ordered
        assert all(a <= b for a, b in zip(ordered, ordered[1:]))

    @allure.story("Sorting")
    @allure.title("sort_by_driver returns the drivers alphabetically")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_sort_by_driver(self, fare_history_page: FareHistoryPage):
        drivers = fare_history_page.get_drivers()
        ordered = fare_history_page.sort_by_driver()

        assert sorted(drivers) == ordered
        assert all(a <= b for a, b in zip(ordered, ordered[1:]))

    # =========================================================================
    # Navigation
    # =========================================================================

    @allure.story("Navigation")
    @allure.title("Back navigation returns to the dashboard")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_back_to_dashboard(self, fare_history_page: FareHistoryPage):
        fare_history_page.click_back_to_dashboard()

        assert fare_history_page.is_dashboard_visible()

    @allure.story("Navigation")
    @allure.title("Direct navigation reloads the fare table")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    def test_navigate_to(self, fare_history_page: FareHistoryPage):
        fare_history_page.navigate_to()

        assert fare_history_page.is_fare_table_visible()


@allure.epic("UI Testing")
@allure.feature("Fare History")
@pytest.mark.fare_history
class TestFareHistoryEmpty:
    """Fare history for an account without any trips."""

    @allure.story("Messages")
    @allure.title("Empty fare table shows 'No records found'")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_no_record_message(self, session_factory: SessionFactory, test_data):
        user = test_data["no_fares_user"]
        if user is None:
            pytest.skip("credentials.no_fares_username is not configured")

        with session_factory.create_fare_history_page(credentials=user) as page:
            assert page.get_number_of_fare_records() == 0
            assert page.get_no_record_message() == test_data["no_record_message"]
