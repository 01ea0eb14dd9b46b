"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from app.domain.errors import UnsupportedAssetClassError


class AssetHandler(str, Enum):
    """Pipeline variant an asset class is routed to"""
    CASH = "cash"
    CRYPTO = "crypto"
    EQUITY = "equity"
    SIMPLIFIED = "simplified"


class AssetClass(str, Enum):
    """Asset class tags accepted by the asset data endpoint"""
    EQUITIES = "Equities"
    CRYPTOCURRENCIES = "Cryptocurrencies"
    CASH = "Cash"
    BONDS = "Bonds"
    REAL_ESTATE = "Real Estate"
    COMMODITIES = "Commodities"

    @classmethod
    def parse(cls, tag: str) -> "AssetClass":
        """
        Resolve a request tag to an AssetClass.

        Matching ignores case, spaces and underscores, so "Real Estate",
        "RealEstate" and "real_estate" all resolve to REAL_ESTATE.

        Raises:
            UnsupportedAssetClassError: tag is not a known asset class
        """
        key = _normalize_tag(tag)
        for member in cls:
            if _normalize_tag(member.value) == key:
                return member
        raise UnsupportedAssetClassError(tag)

    @property
    def handler(self) -> AssetHandler:
        return _HANDLERS[self]


def _normalize_tag(tag: str) -> str:
    return "".join(ch for ch in (tag or "").lower() if ch not in " _-")


_HANDLERS = {
    AssetClass.CASH: AssetHandler.CASH,
    AssetClass.CRYPTOCURRENCIES: AssetHandler.CRYPTO,
    AssetClass.EQUITIES: AssetHandler.EQUITY,
    AssetClass.BONDS: AssetHandler.SIMPLIFIED,
    AssetClass.REAL_ESTATE: AssetHandler.SIMPLIFIED,
    AssetClass.COMMODITIES: AssetHandler.SIMPLIFIED,
}


class FearGreedLabel(str, Enum):
    """Fear & Greed buckets"""
    EXTREME_FEAR = "Extreme Fear"
    FEAR = "Fear"
    NEUTRAL = "Neutral"
    GREED = "Greed"
    EXTREME_GREED = "Extreme Greed"


@dataclass(frozen=True)
class AssetDataRequest:
    """Validated asset data request - Immutable

    `ticker` is echoed back as the client sent it (trimmed); `symbol` is
    the upper-cased form used for upstream lookups.
    """
    ticker: str
    asset_class: AssetClass

    def __post_init__(self):
        if not self.ticker or not self.ticker.strip():
            raise ValueError("Ticker cannot be empty")
        object.__setattr__(self, "ticker", self.ticker.strip())

    @property
    def symbol(self) -> str:
        return self.ticker.upper()


@dataclass(frozen=True)
class PriceChangeData:
    """Percentage price changes; any window may be missing upstream"""
    one_day: Optional[float] = None
    five_day: Optional[float] = None
    one_month: Optional[float] = None
    three_month: Optional[float] = None

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            "1D": self.one_day,
            "5D": self.five_day,
            "1M": self.one_month,
            "3M": self.three_month,
        }


@dataclass(frozen=True)
class NewsArticle:
    """Upstream news item"""
    title: str
    site: str
    published_date: str
    url: str


@dataclass(frozen=True)
class SelectedHeadline:
    """Headline surfaced to the client"""
    title: str
    site: str
    published_date: str
    url: str

    @classmethod
    def from_article(cls, article: NewsArticle) -> "SelectedHeadline":
        return cls(
            title=article.title,
            site=article.site,
            published_date=article.published_date,
            url=article.url,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "site": self.site,
            "publishedDate": self.published_date,
            "url": self.url,
        }


@dataclass(frozen=True)
class EquityMetrics:
    pe_ratio: Optional[float] = None
    revenue_growth: Optional[float] = None
    growth_period: Optional[str] = None
    profit_margin: Optional[float] = None
    dividend_yield: Optional[float] = None
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    market_cap: Optional[float] = None
    price_changes: PriceChangeData = field(default_factory=PriceChangeData)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "peRatio": self.pe_ratio,
            "revenueGrowth": self.revenue_growth,
            "growthPeriod": self.growth_period,
            "profitMargin": self.profit_margin,
            "dividendYield": self.dividend_yield,
            "sma50": self.sma50,
            "sma200": self.sma200,
            "marketCap": self.market_cap,
            "priceChanges": self.price_changes.to_dict(),
        }


@dataclass(frozen=True)
class CryptoMetrics:
    price: Optional[float] = None
    volume: Optional[float] = None
    market_cap: Optional[float] = None
    rsi: Optional[float] = None
    rsi_label: Optional[str] = None
    sma20_week: Optional[float] = None
    sma50_week: Optional[float] = None
    sma200_week: Optional[float] = None
    price_changes: PriceChangeData = field(default_factory=PriceChangeData)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "volume": self.volume,
            "marketCap": self.market_cap,
            "rsi": self.rsi,
            "rsiLabel": self.rsi_label,
            "sma20Week": self.sma20_week,
            "sma50Week": self.sma50_week,
            "sma200Week": self.sma200_week,
            "priceChanges": self.price_changes.to_dict(),
        }


@dataclass(frozen=True)
class CashMetrics:
    yield_pct: float = 4.0

    def to_dict(self) -> Dict[str, Any]:
        return {"yield": self.yield_pct}


@dataclass(frozen=True)
class SimplifiedMetrics:
    price_changes: PriceChangeData = field(default_factory=PriceChangeData)

    def to_dict(self) -> Dict[str, Any]:
        return {"priceChanges": self.price_changes.to_dict()}


AssetMetrics = Union[EquityMetrics, CryptoMetrics, CashMetrics, SimplifiedMetrics]


@dataclass(frozen=True)
class SentimentSubScores:
    """Sub-scores returned by the LLM (0-100 each)"""
    momentum_score: float
    news_score: float
    fundamentals_score: Optional[float] = None
    headline_number: Optional[int] = None


@dataclass(frozen=True)
class FearGreedResult:
    """Composite Fear & Greed reading - Immutable"""
    score: int
    label: FearGreedLabel
    rsi: Optional[float]

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError("Fear & Greed score must be within [0, 100]")

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "label": self.label.value, "rsi": self.rsi}


@dataclass(frozen=True)
class ScoredSentiment:
    """Output of the composite scorer"""
    fear_greed: FearGreedResult
    headline: Optional[SelectedHeadline]
    used_fallback: bool = False


@dataclass(frozen=True)
class AssetDataResult:
    """Response payload for one asset data request"""
    ticker: str
    asset_class: AssetClass
    metrics: Optional[AssetMetrics] = None
    fear_greed: Optional[FearGreedResult] = None
    headline: Optional[SelectedHeadline] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "ticker": self.ticker,
            "assetClass": self.asset_class.value,
        }
        if self.fear_greed is not None:
            payload["fearGreed"] = self.fear_greed.to_dict()
        if self.metrics is not None:
            payload["metrics"] = self.metrics.to_dict()
        if self.asset_class.handler != AssetHandler.CASH:
            payload["headline"] = self.headline.to_dict() if self.headline else None
        return payload
