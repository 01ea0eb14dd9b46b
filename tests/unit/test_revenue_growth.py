from datetime import date

import pytest

from app.domain.indicators.revenue_growth import (
    classify_growth_period,
    compute_revenue_growth,
    months_between,
    revenue_growth_from_statements,
)


def test_growth_formula():
    assert compute_revenue_growth(110.0, 100.0) == pytest.approx(10.0)
    assert compute_revenue_growth(90.0, 100.0) == pytest.approx(-10.0)


def test_growth_uses_absolute_previous_revenue():
    assert compute_revenue_growth(-50.0, -100.0) == pytest.approx(50.0)


@pytest.mark.parametrize("latest,previous", [(None, 100.0), (100.0, None), (100.0, 0)])
def test_growth_requires_both_revenues(latest, previous):
    assert compute_revenue_growth(latest, previous) is None


def test_months_between_uses_thirty_day_months():
    assert months_between(date(2024, 9, 28), date(2023, 9, 30)) == 12
    assert months_between(date(2024, 6, 29), date(2024, 3, 30)) == 3


@pytest.mark.parametrize("latest,previous,expected", [
    (date(2024, 9, 28), date(2023, 9, 30), "YoY"),
    (date(2024, 6, 29), date(2024, 3, 30), "QoQ"),
    (date(2024, 7, 1), date(2024, 1, 1), "6M"),
    (date(2024, 2, 1), date(2024, 1, 1), "1M"),
    (date(2024, 1, 1), date(2024, 1, 1), None),
    (date(2023, 1, 1), date(2024, 1, 1), None),
])
def test_classify_growth_period(latest, previous, expected):
    assert classify_growth_period(latest, previous) == expected


def test_growth_from_annual_statements():
    statements = [
        {"date": "2024-09-28", "revenue": 391035000000},
        {"date": "2023-09-30", "revenue": 383285000000},
    ]
    growth, period = revenue_growth_from_statements(statements)
    assert growth == pytest.approx(2.022, abs=1e-3)
    assert period == "YoY"


def test_growth_from_statements_needs_two_rows():
    assert revenue_growth_from_statements([]) == (None, None)
    assert revenue_growth_from_statements([{"date": "2024-09-28", "revenue": 1}]) == (None, None)


def test_growth_from_statements_with_bad_date_keeps_growth():
    statements = [
        {"date": "not-a-date", "revenue": 120},
        {"date": "2023-09-30", "revenue": 100},
    ]
    growth, period = revenue_growth_from_statements(statements)
    assert growth == pytest.approx(20.0)
    assert period is None


def test_growth_from_statements_parses_numeric_strings():
    statements = [
        {"date": "2024-06-29", "revenue": "120"},
        {"date": "2024-03-30", "revenue": "100"},
    ]
    growth, period = revenue_growth_from_statements(statements)
    assert growth == pytest.approx(20.0)
    assert period == "QoQ"


@pytest.mark.parametrize("statements", [
    [{"date": "2024-09-28", "revenue": "n/a"}, {"date": "2023-09-30", "revenue": 100}],
    [{"date": "2024-09-28", "revenue": 110}, None],
    ["row", "row"],
])
def test_growth_from_unusable_statements(statements):
    assert revenue_growth_from_statements(statements) == (None, None)
