from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Granularity(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class InterestCrediting(str, Enum):
    # annual: accrued monthly, credited once per financial year in March
    # monthly: credited every month, deposit cap resets every 12 simulated months
    ANNUAL = "annual"
    MONTHLY = "monthly"


class PlanParameters(BaseModel):
    """
    Inputs for a single simulation run.

    Bounds are deliberately loose here: callers clamp and validate before
    invoking the engine (see ``ppf.schemas.plan``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    start_amount: float
    start_month: int
    start_year: int
    duration_years: int
    step_up_percent: float = 0.0
    step_up_frequency_months: int = 12
    granularity: Optional[Granularity] = None
    crediting: InterestCrediting = InterestCrediting.ANNUAL

    @property
    def total_months(self) -> int:
        return max(self.duration_years, 0) * 12


class MonthLedgerEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    absolute_month: int
    calendar_month: int
    calendar_year: int
    monthly_installment: float
    deposit: float
    monthly_interest: float
    balance: float
    cumulative_deposit: float
    cumulative_interest: float
    # accrued this financial year but not yet added to balance
    pending_interest: float
    is_capped: bool


class PeriodSummaryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    period_label: str
    year_index: int
    first_month: int
    last_month: int
    monthly_installment: int
    deposit: int
    interest: int
    closing_balance: int
    is_capped: bool


class ComparisonRow(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    step_up_percent: float
    maturity: int


class PlanSummary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    total_invested: int
    total_interest: int
    maturity: int
