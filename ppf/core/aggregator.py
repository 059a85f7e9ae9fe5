"""Group a month ledger into reporting periods and compare step-up scenarios."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from math import ceil
from typing import Iterable, List, Sequence, Union

from ppf.core.simulator import simulate
from ppf.domain.ledger import (
    ComparisonRow,
    Granularity,
    MonthLedgerEntry,
    PeriodSummaryRecord,
    PlanParameters,
    PlanSummary,
)
from ppf.domain.rules import (
    DEFAULT_STEP_UP_CANDIDATES,
    FY_CLOSE_MONTH,
    MONTH_ABBREVIATIONS,
    MONTHS_PER_YEAR,
    financial_year_label,
    financial_year_start,
)

logger = logging.getLogger(__name__)

# a granularity (or its string value), or a fixed period length in months;
# an unrecognised string raises ValueError
Period = Union[Granularity, str, int]


def to_currency(value: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _normalise(period: Period) -> Union[Granularity, int]:
    if isinstance(period, Granularity):
        return period
    if isinstance(period, str):
        return Granularity(period)
    return int(period)


def _start_year(entry: MonthLedgerEntry) -> int:
    """Calendar year of absolute month 1, recovered from any ledger entry."""
    index = entry.calendar_month - 1 - (entry.absolute_month - 1)
    return entry.calendar_year + index // MONTHS_PER_YEAR


def _closes_period(entry: MonthLedgerEntry, period: Union[Granularity, int]) -> bool:
    if period is Granularity.MONTHLY:
        return True
    if period is Granularity.YEARLY:
        return entry.calendar_month == FY_CLOSE_MONTH
    return entry.absolute_month % period == 0


def period_label(
    closing: MonthLedgerEntry,
    period: Union[Granularity, int],
    first_year: int,
    ordinal: int,
) -> str:
    """
    Label a period by its closing month.

    Financial-year groups read ``Year 2 (2025-26)``; fixed lengths that are a
    whole number of years count years from ``first_year``; everything else
    reads ``Month 7 (Oct 2026)``.
    """
    if period is Granularity.YEARLY:
        fy_start = financial_year_start(closing.calendar_month, closing.calendar_year)
        return f"Year {ordinal} ({financial_year_label(fy_start)})"

    if period is not Granularity.MONTHLY and period % MONTHS_PER_YEAR == 0:
        year_number = ceil(closing.absolute_month / MONTHS_PER_YEAR)
        return f"Year {year_number} ({financial_year_label(first_year + year_number - 1)})"

    month_name = MONTH_ABBREVIATIONS[closing.calendar_month - 1]
    return f"Month {closing.absolute_month} ({month_name} {closing.calendar_year})"


def aggregate_by_granularity(
    ledger: Sequence[MonthLedgerEntry],
    period: Period,
) -> List[PeriodSummaryRecord]:
    """
    Partition ``ledger`` into contiguous periods and summarise each one.

    ``period`` is ``Granularity.MONTHLY``, ``Granularity.YEARLY`` (April to
    March) or a number of months. The last month always closes a period, so
    a trailing partial group is still reported.

    Period deposit and interest are differences of the rounded cumulative
    totals at the period boundaries, so the periods add up exactly to the
    rounded final totals.
    """
    if not ledger:
        return []

    period = _normalise(period)
    first = ledger[0]
    first_year = _start_year(first)

    # totals as they stood just before the first entry
    deposit_before = to_currency(first.cumulative_deposit - first.deposit)
    interest_before = to_currency(first.cumulative_interest - first.monthly_interest)
    opened_at = first.absolute_month

    records: List[PeriodSummaryRecord] = []
    last_index = len(ledger) - 1

    for index, entry in enumerate(ledger):
        if index != last_index and not _closes_period(entry, period):
            continue

        deposit_to_date = to_currency(entry.cumulative_deposit)
        interest_to_date = to_currency(entry.cumulative_interest)

        records.append(
            PeriodSummaryRecord(
                period_label=period_label(entry, period, first_year, len(records) + 1),
                year_index=ceil(entry.absolute_month / MONTHS_PER_YEAR),
                first_month=opened_at,
                last_month=entry.absolute_month,
                monthly_installment=to_currency(entry.monthly_installment),
                deposit=deposit_to_date - deposit_before,
                interest=interest_to_date - interest_before,
                closing_balance=to_currency(entry.balance),
                is_capped=entry.is_capped,
            )
        )

        deposit_before = deposit_to_date
        interest_before = interest_to_date
        opened_at = entry.absolute_month + 1

    logger.debug("Aggregated %d months into %d periods (%s)", len(ledger), len(records), period)
    return records


def breakdown(params: PlanParameters) -> List[PeriodSummaryRecord]:
    """Simulate ``params`` and group by its granularity, or by its step-up frequency."""
    period: Period = params.granularity or params.step_up_frequency_months
    return aggregate_by_granularity(simulate(params), period)


def summarize(records: Sequence[PeriodSummaryRecord]) -> PlanSummary:
    if not records:
        return PlanSummary(total_invested=0, total_interest=0, maturity=0)

    total_invested = sum(record.deposit for record in records)
    maturity = records[-1].closing_balance
    return PlanSummary(
        total_invested=total_invested,
        total_interest=maturity - total_invested,
        maturity=maturity,
    )


def maturity_of(params: PlanParameters) -> int:
    ledger = simulate(params)
    return to_currency(ledger[-1].balance) if ledger else 0


def compare_step_ups(
    params: PlanParameters,
    candidates: Iterable[float] = DEFAULT_STEP_UP_CANDIDATES,
) -> List[ComparisonRow]:
    """
    Re-simulate ``params`` once per step-up percentage, everything else fixed.

    Rows come back in candidate order.
    """
    rows = [
        ComparisonRow(
            step_up_percent=percent,
            maturity=maturity_of(params.model_copy(update={"step_up_percent": percent})),
        )
        for percent in candidates
    ]
    logger.debug("Compared %d step-up scenarios", len(rows))
    return rows
