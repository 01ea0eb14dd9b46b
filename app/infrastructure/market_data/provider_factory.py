"""
Market data provider factory (settings-driven).
"""

from __future__ import annotations

from typing import Optional

from app.config import Settings, settings as default_settings
from app.infrastructure.market_data.fmp_client import FMPClient
from app.infrastructure.market_data.fmp_provider import FMPMarketDataProvider
from app.infrastructure.market_data.types import MarketDataProvider


def get_market_data_provider(settings: Optional[Settings] = None) -> MarketDataProvider:
    cfg = settings or default_settings
    client = FMPClient(
        api_key=cfg.FMP_API_KEY,
        base_url=cfg.FMP_BASE_URL,
        timeout=cfg.FMP_TIMEOUT_SECONDS,
    )
    return FMPMarketDataProvider(client)
