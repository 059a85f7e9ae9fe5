"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from ppf.core.aggregator import breakdown, compare_step_ups, summarize
from ppf.core.simulator import simulate
from ppf.domain.rules import ANNUAL_RATE_PERCENT, MAX_ANNUAL_DEPOSIT, MAX_MONTHLY_DEPOSIT
from ppf.schemas.health import HealthResponse
from ppf.schemas.plan import (
    BreakdownResponse,
    ComparisonRequest,
    ComparisonResponse,
    PlanRequest,
    ScheduleResponse,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("Rejected plan payload: %d error(s)", exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint echoing the rules the engine applies."""
    response = HealthResponse(
        status="ok",
        annual_rate_percent=ANNUAL_RATE_PERCENT,
        max_monthly_deposit=MAX_MONTHLY_DEPOSIT,
        max_annual_deposit=MAX_ANNUAL_DEPOSIT,
    )
    return jsonify(response.model_dump())


@api_bp.post("/calc/schedule")
def schedule() -> Any:
    """Full month-by-month ledger."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    params = PlanRequest.model_validate(raw_payload).to_parameters()
    response = ScheduleResponse(parameters=params, months=simulate(params))
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/calc/breakdown")
def period_breakdown() -> Any:
    """Period summary rows plus the invested/interest/maturity totals."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    params = PlanRequest.model_validate(raw_payload).to_parameters()
    records = breakdown(params)
    response = BreakdownResponse(parameters=params, records=records, summary=summarize(records))
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/calc/comparison")
def comparison() -> Any:
    """Maturity for each candidate step-up percentage."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ComparisonRequest.model_validate(raw_payload)
    params = payload.to_parameters()
    response = ComparisonResponse(parameters=params, rows=compare_step_ups(params, payload.candidates))
    return jsonify(response.model_dump(mode="json"))
