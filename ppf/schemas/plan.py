"""Request/response contracts for the calculator endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ppf.domain.ledger import (
    ComparisonRow,
    Granularity,
    InterestCrediting,
    MonthLedgerEntry,
    PeriodSummaryRecord,
    PlanParameters,
    PlanSummary,
)
from ppf.domain.rules import DEFAULT_STEP_UP_CANDIDATES, MAX_MONTHLY_DEPOSIT

# smallest monthly contribution the form accepts
MIN_REQUESTED_AMOUNT = 500.0


class PlanRequest(BaseModel):
    """Plan inputs as submitted by the calculator form."""

    model_config = ConfigDict(extra="forbid")

    start_amount: Optional[float] = Field(
        default=1000.0,
        allow_inf_nan=False,
        description="Starting monthly contribution; snapped into [500, 12500].",
    )
    start_month: int = Field(3, ge=1, le=12)
    start_year: int = Field(default_factory=lambda: datetime.now().year, ge=1900, le=2200)
    duration_years: int = Field(60, ge=1, le=100)
    step_up_percent: float = Field(0.0, ge=0, le=100, allow_inf_nan=False)
    step_up_frequency_months: int = Field(12, ge=1)
    granularity: Optional[Granularity] = None
    crediting: InterestCrediting = InterestCrediting.ANNUAL

    @field_validator("start_amount")
    @classmethod
    def clamp_start_amount(cls, v: Optional[float]) -> float:
        # empty or zero input falls back to the minimum rather than failing
        if not v or v < MIN_REQUESTED_AMOUNT:
            return MIN_REQUESTED_AMOUNT
        return min(v, MAX_MONTHLY_DEPOSIT)

    @model_validator(mode="after")
    def ensure_frequency_fits(self) -> "PlanRequest":
        total_months = self.duration_years * 12
        if self.step_up_frequency_months > total_months:
            raise ValueError(
                f"step_up_frequency_months ({self.step_up_frequency_months}) "
                f"must not exceed the plan length ({total_months} months)"
            )
        return self

    def to_parameters(self) -> PlanParameters:
        return PlanParameters(
            start_amount=self.start_amount,
            start_month=self.start_month,
            start_year=self.start_year,
            duration_years=self.duration_years,
            step_up_percent=self.step_up_percent,
            step_up_frequency_months=self.step_up_frequency_months,
            granularity=self.granularity,
            crediting=self.crediting,
        )


class ComparisonRequest(PlanRequest):
    candidates: List[float] = Field(
        default_factory=lambda: list(DEFAULT_STEP_UP_CANDIDATES),
        min_length=1,
    )

    @field_validator("candidates")
    @classmethod
    def candidates_non_negative(cls, v: List[float]) -> List[float]:
        negatives = [p for p in v if p < 0]
        if negatives:
            raise ValueError(f"step-up candidates must be >= 0, got {negatives}")
        return v


class ScheduleResponse(BaseModel):
    parameters: PlanParameters
    months: List[MonthLedgerEntry]


class BreakdownResponse(BaseModel):
    parameters: PlanParameters
    records: List[PeriodSummaryRecord]
    summary: PlanSummary


class ComparisonResponse(BaseModel):
    parameters: PlanParameters
    rows: List[ComparisonRow]
