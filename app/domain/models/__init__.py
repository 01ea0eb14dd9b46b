"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    AssetClass,
    AssetHandler,
    FearGreedLabel,

    # Entities
    AssetDataRequest,
    AssetDataResult,
    AssetMetrics,
    CashMetrics,
    CryptoMetrics,
    EquityMetrics,
    FearGreedResult,
    NewsArticle,
    PriceChangeData,
    ScoredSentiment,
    SelectedHeadline,
    SentimentSubScores,
    SimplifiedMetrics,
)

__all__ = [
    # Enums
    "AssetClass",
    "AssetHandler",
    "FearGreedLabel",

    # Entities
    "AssetDataRequest",
    "AssetDataResult",
    "AssetMetrics",
    "CashMetrics",
    "CryptoMetrics",
    "EquityMetrics",
    "FearGreedResult",
    "NewsArticle",
    "PriceChangeData",
    "ScoredSentiment",
    "SelectedHeadline",
    "SentimentSubScores",
    "SimplifiedMetrics",
]
