from datetime import date
from typing import Optional, Tuple

from app.utils.numbers import to_float
from app.utils.rounding import round_half_up

DAYS_PER_MONTH = 30


def months_between(latest: date, previous: date) -> int:
    """
    Approximate month distance between two statement dates.

    Known approximation: a flat 30-day month, so fiscal periods that
    straddle short months can land one bucket off.
    """
    return round_half_up((latest - previous).days / DAYS_PER_MONTH)


def classify_growth_period(latest: date, previous: date) -> Optional[str]:
    """
    Label the comparison window of two income statements.

    Returns:
        "YoY" for 10-14 months, "QoQ" for 2-4 months, "<n>M" for any
        other positive distance, None when the dates are not in order.
    """
    months = months_between(latest, previous)
    if 10 <= months <= 14:
        return "YoY"
    if 2 <= months <= 4:
        return "QoQ"
    if months > 0:
        return f"{months}M"
    return None


def compute_revenue_growth(
    latest_revenue: Optional[float],
    previous_revenue: Optional[float],
) -> Optional[float]:
    """
    Percentage revenue change against the previous period.

    Formula: ((latest - previous) / |previous|) * 100
    """
    if latest_revenue is None or not previous_revenue:
        return None
    return ((latest_revenue - previous_revenue) / abs(previous_revenue)) * 100


def revenue_growth_from_statements(statements: list) -> Tuple[Optional[float], Optional[str]]:
    """
    Derive (growth %, period label) from the two most recent statements.

    Args:
        statements: upstream income statements, newest first, each a dict
            carrying "date" (ISO) and "revenue"

    Returns:
        (None, None) when fewer than two usable statements are present
    """
    if not statements or len(statements) < 2:
        return None, None

    latest, previous = statements[0], statements[1]
    if not isinstance(latest, dict) or not isinstance(previous, dict):
        return None, None

    growth = compute_revenue_growth(to_float(latest.get("revenue")), to_float(previous.get("revenue")))
    if growth is None:
        return None, None

    try:
        latest_date = date.fromisoformat(str(latest.get("date"))[:10])
        previous_date = date.fromisoformat(str(previous.get("date"))[:10])
    except ValueError:
        return growth, None

    return growth, classify_growth_period(latest_date, previous_date)
