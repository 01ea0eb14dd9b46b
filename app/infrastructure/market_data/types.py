"""
Market data provider protocol for type hints.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from app.domain.models import NewsArticle, PriceChangeData


class MarketDataProvider(Protocol):
    async def get_news(self, symbol: str, limit: int = 10) -> List[NewsArticle]:
        ...

    async def get_crypto_news(self, symbol: str, limit: int = 10) -> List[NewsArticle]:
        ...

    async def get_ratios(self, symbol: str) -> Optional[Dict[str, Any]]:
        ...

    async def get_key_metrics(self, symbol: str) -> Optional[Dict[str, Any]]:
        ...

    async def get_income_statements(self, symbol: str, limit: int = 2) -> List[Dict[str, Any]]:
        ...

    async def get_quote(self, symbol: str) -> Optional[Dict[str, Any]]:
        ...

    async def get_price_change(self, symbol: str) -> PriceChangeData:
        ...

    async def get_rsi(self, symbol: str, period: int = 14) -> Optional[float]:
        ...

    async def get_sma(self, symbol: str, period: int) -> Optional[float]:
        ...
