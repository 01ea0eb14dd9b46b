"""
FEAR & GREED ENGINE
Combine measured RSI with LLM sub-scores into one 0-100 reading

RESPONSIBILITIES:
- Weighted composite score per pipeline variant
- Score to label bucketing
- RSI-only fallback score
- Headline selection from an LLM-supplied index

RULES:
❌ No I/O
❌ No LLM calls
✅ Pure calculation
✅ Deterministic output
"""

from decimal import Decimal
from typing import List, Optional, Sequence

from app.domain.models import (
    AssetHandler,
    FearGreedLabel,
    FearGreedResult,
    NewsArticle,
    SelectedHeadline,
    SentimentSubScores,
)
from app.utils.rounding import round_half_up

NEUTRAL_SCORE = 50

# Fixed weights. RSI is observed, news/momentum/fundamentals are LLM reads.
FULL_WEIGHTS = {
    "rsi": Decimal("0.35"),
    "news": Decimal("0.30"),
    "momentum": Decimal("0.25"),
    "fundamentals": Decimal("0.10"),
}

SIMPLIFIED_WEIGHTS = {
    "rsi": Decimal("0.40"),
    "momentum": Decimal("0.35"),
    "news": Decimal("0.25"),
}

# Upper bound (inclusive) of each bucket, ascending
_LABEL_BOUNDS = (
    (20, FearGreedLabel.EXTREME_FEAR),
    (40, FearGreedLabel.FEAR),
    (60, FearGreedLabel.NEUTRAL),
    (80, FearGreedLabel.GREED),
)


def label_for_score(score: float) -> FearGreedLabel:
    """Bucket a score: ≤20, ≤40, ≤60, ≤80, above"""
    for upper, label in _LABEL_BOUNDS:
        if score <= upper:
            return label
    return FearGreedLabel.EXTREME_GREED


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def _d(value: float) -> Decimal:
    return Decimal(str(value))


def compute_composite_score(
    handler: AssetHandler,
    rsi: Optional[float],
    scores: SentimentSubScores,
) -> int:
    """
    Weighted composite of RSI and LLM sub-scores.

    Equities / Crypto:
        RSI*0.35 + news*0.30 + momentum*0.25 + fundamentals*0.10
    Simplified:
        RSI*0.40 + momentum*0.35 + news*0.25

    RSI counts as 50 when it was not measured.

    Raises:
        ValueError: full variant without an in-range fundamentals score,
            or a handler that is never scored (Cash)
    """
    rsi_value = _d(rsi if rsi is not None else NEUTRAL_SCORE)

    if handler in (AssetHandler.EQUITY, AssetHandler.CRYPTO):
        if scores.fundamentals_score is None:
            raise ValueError("fundamentals score required for full composite")
        if not 0 <= scores.fundamentals_score <= 100:
            raise ValueError("fundamentals score must be within [0, 100]")
        total = (
            rsi_value * FULL_WEIGHTS["rsi"]
            + _d(scores.news_score) * FULL_WEIGHTS["news"]
            + _d(scores.momentum_score) * FULL_WEIGHTS["momentum"]
            + _d(scores.fundamentals_score) * FULL_WEIGHTS["fundamentals"]
        )
    elif handler == AssetHandler.SIMPLIFIED:
        total = (
            rsi_value * SIMPLIFIED_WEIGHTS["rsi"]
            + _d(scores.momentum_score) * SIMPLIFIED_WEIGHTS["momentum"]
            + _d(scores.news_score) * SIMPLIFIED_WEIGHTS["news"]
        )
    else:
        raise ValueError(f"No composite score for handler: {handler.value}")

    return _clamp(round_half_up(total))


def build_fear_greed(
    handler: AssetHandler,
    rsi: Optional[float],
    scores: SentimentSubScores,
) -> FearGreedResult:
    score = compute_composite_score(handler, rsi, scores)
    return FearGreedResult(score=score, label=label_for_score(score), rsi=rsi)


def fallback_fear_greed(rsi: Optional[float]) -> FearGreedResult:
    """
    RSI-only reading used when the LLM step fails.

    score = round(RSI), or 50 when RSI is unavailable as well.
    """
    score = _clamp(round_half_up(rsi)) if rsi is not None else NEUTRAL_SCORE
    return FearGreedResult(score=score, label=label_for_score(score), rsi=rsi)


def select_headline(
    news: Sequence[NewsArticle],
    headline_number: Optional[int] = None,
) -> Optional[SelectedHeadline]:
    """
    Pick the headline the LLM pointed at.

    Args:
        news: upstream articles, in prompt order
        headline_number: 1-based index from the LLM (missing counts as 1)

    Returns:
        news[i-1] for an in-range index, news[0] otherwise, None for no news
    """
    if not news:
        return None

    index = headline_number if headline_number is not None else 1
    if isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= len(news):
        return SelectedHeadline.from_article(news[index - 1])
    return SelectedHeadline.from_article(news[0])


def first_headline(news: List[NewsArticle]) -> Optional[SelectedHeadline]:
    return SelectedHeadline.from_article(news[0]) if news else None
