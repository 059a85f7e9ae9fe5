"""Statutory rules of the savings instrument modelled by the engine."""

from typing import Tuple

MAX_MONTHLY_DEPOSIT: float = 12500.0
MAX_ANNUAL_DEPOSIT: float = 150000.0
ANNUAL_RATE_PERCENT: float = 7.1

# smallest starting installment the engine will simulate
MIN_INSTALLMENT: float = 1.0

# financial year runs April -> March; interest is credited in the closing month
FY_START_MONTH: int = 4
FY_CLOSE_MONTH: int = 3

MONTHS_PER_YEAR: int = 12

DEFAULT_STEP_UP_CANDIDATES: Tuple[float, ...] = (1, 2, 3, 4, 5, 8, 10, 12, 15, 18, 21, 25)

MONTH_ABBREVIATIONS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def financial_year_start(calendar_month: int, calendar_year: int) -> int:
    """Calendar year in which the financial year containing this month began."""
    return calendar_year if calendar_month >= FY_START_MONTH else calendar_year - 1


def financial_year_label(fy_start: int) -> str:
    """Format a financial year as ``2026-27``."""
    return f"{fy_start}-{(fy_start + 1) % 100:02d}"
