"""Month-by-month accrual of a stepped-up contribution plan."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ppf.domain.ledger import InterestCrediting, MonthLedgerEntry, PlanParameters
from ppf.domain.rules import (
    ANNUAL_RATE_PERCENT,
    FY_CLOSE_MONTH,
    MAX_ANNUAL_DEPOSIT,
    MAX_MONTHLY_DEPOSIT,
    MIN_INSTALLMENT,
    MONTHS_PER_YEAR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Accrual:
    """Running totals carried from one simulated month to the next."""

    installment: float
    balance: float = 0.0
    fy_deposit: float = 0.0
    fy_interest: float = 0.0
    cumulative_deposit: float = 0.0
    cumulative_interest: float = 0.0


def calendar_month_at(start_month: int, start_year: int, offset: int) -> Tuple[int, int]:
    """Return (month, year) reached after adding ``offset`` months to the start."""
    index = start_month - 1 + offset
    return index % MONTHS_PER_YEAR + 1, start_year + index // MONTHS_PER_YEAR


def opening_installment(amount: float) -> float:
    """Snap the starting contribution into [MIN_INSTALLMENT, MAX_MONTHLY_DEPOSIT]."""
    if amount < MIN_INSTALLMENT:
        amount = MIN_INSTALLMENT
    return min(amount, MAX_MONTHLY_DEPOSIT)


def stepped_up(installment: float, percent: float) -> float:
    return min(installment * (1 + percent / 100), MAX_MONTHLY_DEPOSIT)


def is_capped(installment: float) -> bool:
    return installment >= MAX_MONTHLY_DEPOSIT - 1


def _steps_up(params: PlanParameters, offset: int) -> bool:
    # never on the first month
    return (
        params.step_up_percent > 0
        and offset > 0
        and offset % params.step_up_frequency_months == 0
    )


def _closes_deposit_year(params: PlanParameters, offset: int, calendar_month: int) -> bool:
    if params.crediting is InterestCrediting.MONTHLY:
        return (offset + 1) % MONTHS_PER_YEAR == 0
    return calendar_month == FY_CLOSE_MONTH


def advance(
    state: Accrual,
    params: PlanParameters,
    offset: int,
) -> Tuple[Accrual, MonthLedgerEntry]:
    """
    Simulate month ``offset`` (0-based) and return the next state plus its ledger entry.

    Order of operations:
      1) Step up the installment when the frequency boundary is reached.
      2) Deposit the installment, trimmed to the headroom left under the annual cap.
      3) Accrue one month of interest on the post-deposit balance.
      4) Credit interest: every month in MONTHLY mode, otherwise only in March,
         where the financial-year trackers are also reset.
    """
    month, year = calendar_month_at(params.start_month, params.start_year, offset)

    installment = state.installment
    if _steps_up(params, offset):
        installment = stepped_up(installment, params.step_up_percent)

    deposit = installment
    if state.fy_deposit + deposit > MAX_ANNUAL_DEPOSIT:
        deposit = max(0.0, MAX_ANNUAL_DEPOSIT - state.fy_deposit)

    balance = state.balance + deposit
    fy_deposit = state.fy_deposit + deposit

    interest = balance * ANNUAL_RATE_PERCENT / 100 / 12
    fy_interest = state.fy_interest + interest

    if params.crediting is InterestCrediting.MONTHLY:
        balance += fy_interest
        fy_interest = 0.0
    elif month == FY_CLOSE_MONTH:
        balance += fy_interest
        fy_interest = 0.0

    if _closes_deposit_year(params, offset, month):
        fy_deposit = 0.0

    next_state = Accrual(
        installment=installment,
        balance=balance,
        fy_deposit=fy_deposit,
        fy_interest=fy_interest,
        cumulative_deposit=state.cumulative_deposit + deposit,
        cumulative_interest=state.cumulative_interest + interest,
    )
    entry = MonthLedgerEntry(
        absolute_month=offset + 1,
        calendar_month=month,
        calendar_year=year,
        monthly_installment=installment,
        deposit=deposit,
        monthly_interest=interest,
        balance=balance,
        cumulative_deposit=next_state.cumulative_deposit,
        cumulative_interest=next_state.cumulative_interest,
        pending_interest=fy_interest,
        is_capped=is_capped(installment),
    )
    return next_state, entry


def simulate(params: PlanParameters) -> List[MonthLedgerEntry]:
    """
    Produce the month ledger for ``params``: one entry per month, in order.

    A non-positive duration yields an empty ledger. The step-up frequency is
    not guarded; callers must reject values below 1.
    """
    state = Accrual(installment=opening_installment(params.start_amount))
    ledger: List[MonthLedgerEntry] = []

    for offset in range(params.total_months):
        state, entry = advance(state, params, offset)
        ledger.append(entry)

    logger.debug(
        "Simulated %d months from %02d/%d, closing balance %.2f",
        len(ledger),
        params.start_month,
        params.start_year,
        state.balance,
    )
    return ledger
