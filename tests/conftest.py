from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.api.routes import asset_data, health
from app.domain.services.config_engine import ConfigEngine
from app.services.asset_data_service import AssetDataService
from app.services.fear_greed_service import FearGreedService
from tests.fakes import FakeLLM, FakeMarketDataProvider


@pytest.fixture()
def config_engine() -> ConfigEngine:
    engine = ConfigEngine()
    engine.load_all()
    return engine


@pytest.fixture()
def provider() -> FakeMarketDataProvider:
    return FakeMarketDataProvider()


@pytest.fixture()
def llm() -> FakeLLM:
    return FakeLLM(error=RuntimeError("LLM unavailable"))


@pytest.fixture()
def service(provider, llm, config_engine) -> AssetDataService:
    return AssetDataService(
        provider=provider,
        scorer=FearGreedService(llm=llm, system_message=config_engine.llm_system_message),
        config=config_engine.asset_data,
    )


@pytest.fixture()
async def app(service) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(asset_data.router, prefix="/api", tags=["Asset Data"])
    app.state.asset_data_service = service
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
