"""
FMP Market Data Provider
Typed fetch helpers over the FMP "stable" API

Each helper issues exactly one request and raises on failure; callers
decide how a failed fetch degrades.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.domain.models import NewsArticle, PriceChangeData
from app.infrastructure.market_data.fmp_client import FMPClient
from app.utils.numbers import to_float as _num


def _first(payload: Any) -> Optional[Dict[str, Any]]:
    if isinstance(payload, list):
        return payload[0] if payload and isinstance(payload[0], dict) else None
    if isinstance(payload, dict):
        return payload
    return None


def _articles(payload: Any, limit: int) -> List[NewsArticle]:
    if not isinstance(payload, list):
        return []
    out: List[NewsArticle] = []
    for item in payload:
        if not isinstance(item, dict) or not item.get("title"):
            continue
        out.append(NewsArticle(
            title=str(item.get("title")),
            site=str(item.get("site") or item.get("publisher") or ""),
            published_date=str(item.get("publishedDate") or ""),
            url=str(item.get("url") or ""),
        ))
        if len(out) >= limit:
            break
    return out


class FMPMarketDataProvider:
    NEWS_STOCK = "/stable/news/stock"
    NEWS_CRYPTO = "/stable/news/crypto"
    RATIOS = "/stable/ratios"
    KEY_METRICS = "/stable/key-metrics"
    QUOTE = "/stable/quote"
    PRICE_CHANGE = "/stable/stock-price-change"
    RSI = "/stable/technical-indicators/rsi"
    SMA = "/stable/technical-indicators/sma"
    INCOME_STATEMENT = "/stable/income-statement"

    def __init__(self, client: FMPClient):
        self.client = client

    # ------------------------------------------------------------------
    # NEWS
    # ------------------------------------------------------------------

    async def get_news(self, symbol: str, limit: int = 10) -> List[NewsArticle]:
        payload = await self.client.fetch_json(self.NEWS_STOCK, {"symbols": symbol, "limit": limit})
        return _articles(payload, limit)

    async def get_crypto_news(self, symbol: str, limit: int = 10) -> List[NewsArticle]:
        payload = await self.client.fetch_json(self.NEWS_CRYPTO, {"symbols": symbol, "limit": limit})
        return _articles(payload, limit)

    # ------------------------------------------------------------------
    # FUNDAMENTALS
    # ------------------------------------------------------------------

    async def get_ratios(self, symbol: str) -> Optional[Dict[str, Any]]:
        return _first(await self.client.fetch_json(self.RATIOS, {"symbol": symbol, "limit": 1}))

    async def get_key_metrics(self, symbol: str) -> Optional[Dict[str, Any]]:
        return _first(await self.client.fetch_json(self.KEY_METRICS, {"symbol": symbol, "limit": 1}))

    async def get_income_statements(self, symbol: str, limit: int = 2) -> List[Dict[str, Any]]:
        payload = await self.client.fetch_json(self.INCOME_STATEMENT, {"symbol": symbol, "limit": limit})
        if not isinstance(payload, list):
            return []
        return [row for row in payload if isinstance(row, dict)]

    # ------------------------------------------------------------------
    # QUOTES & PRICE CHANGES
    # ------------------------------------------------------------------

    async def get_quote(self, symbol: str) -> Optional[Dict[str, Any]]:
        return _first(await self.client.fetch_json(self.QUOTE, {"symbol": symbol}))

    async def get_price_change(self, symbol: str) -> PriceChangeData:
        row = _first(await self.client.fetch_json(self.PRICE_CHANGE, {"symbol": symbol})) or {}
        return PriceChangeData(
            one_day=_num(row.get("1D")),
            five_day=_num(row.get("5D")),
            one_month=_num(row.get("1M")),
            three_month=_num(row.get("3M")),
        )

    # ------------------------------------------------------------------
    # TECHNICAL INDICATORS
    # ------------------------------------------------------------------

    async def get_rsi(self, symbol: str, period: int = 14) -> Optional[float]:
        payload = await self.client.fetch_json(
            self.RSI, {"symbol": symbol, "periodLength": period, "timeframe": "1day"}
        )
        row = _first(payload) or {}
        return _num(row.get("rsi"))

    async def get_sma(self, symbol: str, period: int) -> Optional[float]:
        payload = await self.client.fetch_json(
            self.SMA, {"symbol": symbol, "periodLength": period, "timeframe": "1day"}
        )
        row = _first(payload) or {}
        return _num(row.get("sma"))
