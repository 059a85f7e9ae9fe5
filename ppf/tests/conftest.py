from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from ppf.app import create_app
from ppf.domain.ledger import PlanParameters


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def april_plan() -> PlanParameters:
    """1000/month from April 2024 for one year, no step-up."""
    return PlanParameters(
        start_amount=1000.0,
        start_month=4,
        start_year=2024,
        duration_years=1,
        step_up_percent=0.0,
        step_up_frequency_months=12,
    )
