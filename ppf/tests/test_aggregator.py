from __future__ import annotations

from math import isclose

import pytest

from ppf.core.aggregator import (
    aggregate_by_granularity,
    breakdown,
    period_label,
    summarize,
    to_currency,
)
from ppf.core.simulator import simulate
from ppf.domain.ledger import Granularity, PlanParameters


def make_plan(**overrides) -> PlanParameters:
    values = dict(
        start_amount=1000.0,
        start_month=4,
        start_year=2026,
        duration_years=2,
        step_up_percent=0.0,
        step_up_frequency_months=12,
    )
    values.update(overrides)
    return PlanParameters(**values)


def test_to_currency_rounds_halves_up():
    assert to_currency(12461.5) == 12462
    assert to_currency(0.49) == 0
    assert to_currency(2.5) == 3
    assert to_currency(99.999) == 100


def test_yearly_frequency_labels_financial_years():
    records = aggregate_by_granularity(simulate(make_plan()), 12)

    assert [r.period_label for r in records] == ["Year 1 (2026-27)", "Year 2 (2027-28)"]
    assert [r.year_index for r in records] == [1, 2]
    assert [r.deposit for r in records] == [12000, 12000]
    assert [(r.first_month, r.last_month) for r in records] == [(1, 12), (13, 24)]


def test_multi_year_frequency_counts_years_from_start():
    records = aggregate_by_granularity(simulate(make_plan(duration_years=4)), 24)
    assert [r.period_label for r in records] == ["Year 2 (2027-28)", "Year 4 (2029-30)"]


def test_end_year_wraps_to_two_digits():
    records = aggregate_by_granularity(simulate(make_plan(start_year=2099, duration_years=2)), 12)
    assert records[0].period_label == "Year 1 (2099-00)"
    assert records[1].period_label == "Year 2 (2100-01)"


def test_custom_frequency_labels_by_closing_month():
    records = aggregate_by_granularity(simulate(make_plan(duration_years=1)), 6)
    assert [r.period_label for r in records] == ["Month 6 (Sep 2026)", "Month 12 (Mar 2027)"]


def test_final_partial_group_is_flushed():
    records = aggregate_by_granularity(simulate(make_plan(duration_years=1)), 5)

    assert [(r.first_month, r.last_month) for r in records] == [(1, 5), (6, 10), (11, 12)]
    assert [r.deposit for r in records] == [5000, 5000, 2000]


def test_monthly_granularity_emits_one_row_per_month():
    ledger = simulate(make_plan(duration_years=1))
    records = aggregate_by_granularity(ledger, Granularity.MONTHLY)

    assert len(records) == 12
    assert records[0].period_label == "Month 1 (Apr 2026)"
    assert all(r.deposit == 1000 for r in records)
    assert [r.closing_balance for r in records] == [to_currency(e.balance) for e in ledger]


def test_granularity_accepts_plain_strings():
    ledger = simulate(make_plan())
    assert aggregate_by_granularity(ledger, "yearly") == aggregate_by_granularity(ledger, Granularity.YEARLY)


def test_yearly_granularity_follows_financial_year_boundaries():
    ledger = simulate(make_plan(start_month=3, duration_years=1))
    records = aggregate_by_granularity(ledger, Granularity.YEARLY)

    # March 2026 closes FY 2025-26 on its own, April 2026..Feb 2027 is the remainder
    assert [r.period_label for r in records] == ["Year 1 (2025-26)", "Year 2 (2026-27)"]
    assert [(r.first_month, r.last_month) for r in records] == [(1, 1), (2, 12)]
    assert records[0].closing_balance == to_currency(ledger[0].balance)


def test_closing_balance_is_last_month_balance():
    ledger = simulate(make_plan(start_month=8, step_up_percent=5, step_up_frequency_months=7, duration_years=5))
    records = aggregate_by_granularity(ledger, 7)

    for record in records:
        assert record.closing_balance == to_currency(ledger[record.last_month - 1].balance)


@pytest.mark.parametrize("period", [1, 5, 12, 36, Granularity.YEARLY, Granularity.MONTHLY])
def test_period_totals_add_up_to_final_cumulatives(period):
    ledger = simulate(make_plan(start_month=10, step_up_percent=12, step_up_frequency_months=3, duration_years=6))
    records = aggregate_by_granularity(ledger, period)

    assert sum(r.deposit for r in records) == to_currency(ledger[-1].cumulative_deposit)
    assert sum(r.interest for r in records) == to_currency(ledger[-1].cumulative_interest)


def test_period_deltas_stay_within_a_unit_of_raw_sums():
    ledger = simulate(make_plan(start_amount=777.77, step_up_percent=3.3, step_up_frequency_months=4, duration_years=3))
    records = aggregate_by_granularity(ledger, 4)

    for record in records:
        months = ledger[record.first_month - 1:record.last_month]
        assert abs(record.deposit - sum(m.deposit for m in months)) <= 1
        assert abs(record.interest - sum(m.monthly_interest for m in months)) <= 1


def test_installment_and_cap_flag_come_from_closing_month():
    records = aggregate_by_granularity(simulate(make_plan(start_amount=12000.0, step_up_percent=10)), 12)
    assert records[0].monthly_installment == 12000
    assert not records[0].is_capped
    assert records[1].monthly_installment == 12500
    assert records[1].is_capped


def test_empty_ledger_aggregates_to_nothing():
    assert aggregate_by_granularity([], 12) == []
    assert aggregate_by_granularity([], Granularity.YEARLY) == []


def test_slice_of_ledger_uses_preceding_totals():
    ledger = simulate(make_plan())
    tail = aggregate_by_granularity(ledger[12:], 12)
    full = aggregate_by_granularity(ledger, 12)

    assert tail[0].deposit == full[1].deposit
    assert abs(tail[0].interest - full[1].interest) <= 1
    assert tail[0].closing_balance == full[1].closing_balance
    assert tail[0].period_label == full[1].period_label


def test_period_label_month_form():
    ledger = simulate(make_plan(start_month=11, start_year=2025, duration_years=1))
    assert period_label(ledger[2], 3, 2025, 1) == "Month 3 (Jan 2026)"


def test_breakdown_uses_granularity_over_frequency():
    stepped = breakdown(make_plan(step_up_frequency_months=6))
    monthly = breakdown(make_plan(step_up_frequency_months=6, granularity=Granularity.MONTHLY))

    assert len(stepped) == 4
    assert len(monthly) == 24


def test_summarize_matches_original_totals():
    records = breakdown(make_plan(duration_years=1))
    summary = summarize(records)

    assert summary.total_invested == 12000
    assert summary.maturity == records[-1].closing_balance
    assert summary.total_interest == summary.maturity - summary.total_invested
    assert isclose(summary.total_interest, 461.5, abs_tol=1)


def test_summarize_empty():
    summary = summarize([])
    assert (summary.total_invested, summary.total_interest, summary.maturity) == (0, 0, 0)


def test_unknown_granularity_string_raises():
    with pytest.raises(ValueError):
        aggregate_by_granularity(simulate(make_plan(duration_years=1)), "weekly")
