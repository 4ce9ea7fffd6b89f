"""
================================================================================
Fare History Page Object
================================================================================

"Employee Fares for <user>" page reached from the dashboard.

The page renders one striped table; every accessor below re-queries the live
table, nothing is cached between calls.

Column layout (1-based, as rendered):
    1 ID | 2 Start | 3 Pickup | 4 End | 5 Dropoff | 6 Fare | 7 Driver |
    8 Pass Rtg | 9 Drvr Rtg

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterator, List, Tuple

import allure
from loguru import logger

from myshuttle_suites.ui_testing.framework.browser_session import BrowserSession, Element
from myshuttle_suites.ui_testing.framework.locator import Locator
from myshuttle_suites.ui_testing.framework.page_base import BasePage, NavigableBack, Visible


EXPECTED_COLUMN_HEADERS: Tuple[str, ...] = (
    "ID", "Start", "Pickup", "End", "Dropoff",
    "Fare", "Driver", "Pass Rtg", "Drvr Rtg",
)

# 1-based column positions
PICKUP_COLUMN = 2
DROPOFF_COLUMN = 4
FARE_COLUMN = 6
DRIVER_COLUMN = 7
PASSENGER_RATING_COLUMN = 8
DRIVER_RATING_COLUMN = 9

CENT = Decimal("0.01")

# Formats tried after ISO 8601 when parsing trip timestamps
TIMESTAMP_FORMATS: Tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%b %d, %Y %I:%M:%S %p",
    "%b %d, %Y %I:%M %p",
)


def parse_fare(text: str) -> Decimal:
    """Parse a currency cell ("$12.50") into a 2-place Decimal."""
    cleaned = text.replace("$", "").replace(",", "").strip()
    try:
        return Decimal(cleaned).quantize(CENT)
    except InvalidOperation:
        raise ValueError(f"Not a fare amount: {text!r}") from None


def parse_timestamp(text: str) -> datetime:
    """Parse a trip timestamp cell."""
    cleaned = text.strip()
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        pass
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
    raise ValueError(f"Not a timestamp: {text!r}")


@dataclass(frozen=True)
class FareRecord:
    """One row of the fare table."""

    id: str
    start: str
    pickup: str
    end: str
    dropoff: str
    fare: Decimal
    driver: str
    passenger_rating: int
    driver_rating: int

    @classmethod
    def from_cells(cls, cells: List[str]) -> "FareRecord":
        if len(cells) < len(EXPECTED_COLUMN_HEADERS):
            raise ValueError(f"Expected {len(EXPECTED_COLUMN_HEADERS)} cells, got {len(cells)}")
        return cls(
            id=cells[0],
            start=cells[1],
            pickup=cells[2],
            end=cells[3],
            dropoff=cells[4],
            fare=parse_fare(cells[FARE_COLUMN - 1]),
            driver=cells[DRIVER_COLUMN - 1],
            passenger_rating=int(cells[PASSENGER_RATING_COLUMN - 1]),
            driver_rating=int(cells[DRIVER_RATING_COLUMN - 1]),
        )


class FareHistoryPage(BasePage, Visible, NavigableBack):
    """Fare history page object."""

    PAGE_NAME = "Fare History"

    PAGE_HEADING = Locator.css("h2", name="page heading")
    FARE_TABLE = Locator.css("table.table-striped.table-condensed", name="fare table")
    TABLE_ROWS = Locator.css(
        "table.table-striped.table-condensed tbody tr.table-row", name="fare rows"
    )
    TABLE_HEADERS = Locator.css("tr.info th", name="column headers")
    PANEL_FOOTER = Locator.css(".panel-footer", name="internal use only footer")
    NO_RECORD_CELL = Locator.css(
        "table.table-striped.table-condensed tbody tr td", name="no record message"
    )
    ROW_CELLS = Locator.css("td", name="row cells")

    LOGIN_ROUTE_FRAGMENT = "login"

    def __init__(self, session: BrowserSession, fare_history_path: str = "home.jsp"):
        """
        Args:
            session: Open BrowserSession this page reads from
            fare_history_path: Page path relative to the application base URL
        """
        super().__init__(session)
        self.fare_history_path = fare_history_path

    @staticmethod
    def cell_locator(column: int) -> Locator:
        """Locator of the `column`-th (1-based) cell inside a row."""
        return Locator.css(f"td:nth-child({column})", name=f"column {column}")

    # =========================================================================
    # Page Information
    # =========================================================================

    def get_page_heading(self) -> str:
        return self._text(self.PAGE_HEADING)

    def get_logged_in_user_name(self) -> str:
        """
        Last whitespace-delimited token of the heading.

        Fragile: relies on the heading ending with the user name
        ("Employee Fares for fred").
        """
        tokens = self.get_page_heading().split()
        return tokens[-1] if tokens else ""

    def is_fare_table_visible(self) -> bool:
        return self.session.is_displayed(self.FARE_TABLE)

    def is_page_visible(self) -> bool:
        return self.is_fare_table_visible()

    def is_internal_use_only_label_visible(self) -> bool:
        return self._is_displayed(self.PANEL_FOOTER)

    def is_dashboard_visible(self) -> bool:
        # Same URL check as is_login_page_visible
        return self._url_contains(self.LOGIN_ROUTE_FRAGMENT)

    def is_login_page_visible(self) -> bool:
        return self._url_contains(self.LOGIN_ROUTE_FRAGMENT)

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate_to(self) -> None:
        """Open the fare history page directly and wait for the table."""
        with allure.step("Navigate to fare history"):
            self.session.navigate(self.fare_history_path)
            if not self.session.wait_until_visible(self.FARE_TABLE):
                logger.warning("Fare table did not become visible after navigation")

    def click_back_to_dashboard(self) -> None:
        """Browser back, then wait (bounded) for the dashboard URL."""
        self.navigate_back()
        self.session.wait_until(
            lambda s: self.LOGIN_ROUTE_FRAGMENT in s.current_url_or_empty().lower(),
            message="dashboard URL",
        )

    # =========================================================================
    # Table Structure
    # =========================================================================

    def _rows(self) -> List[Element]:
        return self.session.find_elements(self.TABLE_ROWS)

    def _row(self, row_index: int) -> Element:
        rows = self._rows()
        if row_index < 0 or row_index >= len(rows):
            raise IndexError(
                f"Row index {row_index} out of range (0..{len(rows) - 1})"
            )
        return rows[row_index]

    def _cell_text(self, row: Element, column: int) -> str:
        cell = self.session.find_in(row, self.cell_locator(column))
        return self.session.text_of(cell).strip()

    def _cell_texts(self, row: Element) -> List[str]:
        return [self.session.text_of(cell).strip() for cell in self.session.find_all_in(row, self.ROW_CELLS)]

    def _column(self, column: int) -> List[str]:
        return [self._cell_text(row, column) for row in self._rows()]

    def _filled_column(self, column: int) -> List[str]:
        """Column texts with missing or blank cells dropped."""
        return [text for text in self._column(column) if text]

    def get_number_of_fare_records(self) -> int:
        return len(self._rows())

    def get_fare_row_count(self) -> int:
        return self.get_number_of_fare_records()

    def get_fare_details_by_row(self, row_index: int) -> str:
        """
        Text of one row.

        Raises:
            IndexError: when row_index < 0 or >= the number of rows
        """
        return self.session.text_of(self._row(row_index))

    def get_fare_cells_by_row(self, row_index: int) -> List[str]:
        """Trimmed cell texts of one row (same bounds rule as above)."""
        return self._cell_texts(self._row(row_index))

    def get_all_column_headers(self) -> List[str]:
        return self._texts(self.TABLE_HEADERS)

    def has_column(self, column_name: str) -> bool:
        wanted = column_name.lower()
        return any(header.lower() == wanted for header in self.get_all_column_headers())

    # =========================================================================
    # Data Extraction
    # =========================================================================

    def get_all_fare_details(self) -> Iterator[str]:
        """Row texts, read from the live table when iteration starts."""
        for row in self._rows():
            yield self.session.text_of(row)

    def get_fare_records(self) -> Iterator[FareRecord]:
        for row in self._rows():
            yield FareRecord.from_cells(self._cell_texts(row))

    def get_fare_amounts(self) -> List[Decimal]:
        return [parse_fare(text) for text in self._filled_column(FARE_COLUMN)]

    def get_passenger_ratings(self) -> List[int]:
        return [int(text) for text in self._filled_column(PASSENGER_RATING_COLUMN)]

    def get_driver_ratings(self) -> List[int]:
        return [int(text) for text in self._filled_column(DRIVER_RATING_COLUMN)]

    def get_drivers(self) -> List[str]:
        return self._column(DRIVER_COLUMN)

    def get_trip_dates(self) -> List[Tuple[datetime, datetime]]:
        """
        (pickup, dropoff) per row, in row order; ordering is not checked here.

        Rows missing either timestamp cell are skipped.
        """
        dates = []
        for row in self._rows():
            pickup = self._cell_text(row, PICKUP_COLUMN)
            dropoff = self._cell_text(row, DROPOFF_COLUMN)
            if pickup and dropoff:
                dates.append((parse_timestamp(pickup), parse_timestamp(dropoff)))
        return dates

    # =========================================================================
    # Sorting
    # =========================================================================

    def sort_by_fare(self) -> List[Decimal]:
        return sorted(self.get_fare_amounts())

    def sort_by_driver(self) -> List[str]:
        return sorted(self.get_drivers())

    # =========================================================================
    # Messages
    # =========================================================================

    def get_no_record_message(self) -> str:
        """Message rendered in place of the rows when there is no data."""
        return self._text(self.NO_RECORD_CELL, timeout=self.session.short_timeout).strip()
