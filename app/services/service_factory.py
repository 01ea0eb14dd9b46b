from typing import Optional

from app.config import Settings
from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.llm.grok_client import CompletionClient, get_llm_client
from app.infrastructure.market_data.provider_factory import get_market_data_provider
from app.infrastructure.market_data.types import MarketDataProvider
from app.services.asset_data_service import AssetDataService
from app.services.fear_greed_service import FearGreedService


def build_asset_data_service(
    config_engine: Optional[ConfigEngine] = None,
    settings: Optional[Settings] = None,
    provider: Optional[MarketDataProvider] = None,
    llm: Optional[CompletionClient] = None,
) -> AssetDataService:
    """Wire the asset data pipeline; explicit collaborators win over settings"""
    if config_engine is None:
        config_engine = ConfigEngine()
        config_engine.load_all()

    scorer = FearGreedService(
        llm=llm or get_llm_client(settings),
        system_message=config_engine.llm_system_message,
    )
    return AssetDataService(
        provider=provider or get_market_data_provider(settings),
        scorer=scorer,
        config=config_engine.asset_data,
    )
