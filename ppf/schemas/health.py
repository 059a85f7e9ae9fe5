"""Pydantic schema for the health endpoint."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    annual_rate_percent: float
    max_monthly_deposit: float
    max_annual_deposit: float
