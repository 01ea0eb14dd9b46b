"""
FastAPI Main Application
Diversonal asset data pipeline: FMP fetch -> asset-class dispatch ->
metric aggregation -> composite Fear & Greed score
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.logging import get_logger, setup_logging
from app.domain.services.config_engine import ConfigEngine
from app.services.service_factory import build_asset_data_service
from app.api.routes import asset_data, health

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Loads configuration and wires the asset data service
    """
    setup_logging(settings.LOG_LEVEL)

    logger.info("=" * 60)
    logger.info("Starting Diversonal Asset Data API")
    logger.info("=" * 60)

    config_engine = ConfigEngine()
    config_engine.load_all()
    logger.info("Configuration loaded (news_limit=%s, rsi_period=%s)",
                config_engine.asset_data.news_limit, config_engine.asset_data.rsi_period)

    service = build_asset_data_service(config_engine=config_engine)
    app.state.config_engine = config_engine
    app.state.asset_data_service = service

    if not settings.FMP_API_KEY:
        logger.warning("FMP_API_KEY not set; market data requests will fail")
    if not settings.XAI_API_KEY:
        logger.warning("XAI_API_KEY not set; Fear & Greed falls back to RSI only")

    logger.info("API Server: http://%s:%s (docs at /docs)", settings.API_HOST, settings.API_PORT)

    yield

    logger.info("Shutting down Diversonal Asset Data API")
    close = getattr(service.scorer.llm, "close", None)
    if close is not None:
        await close()
    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Diversonal Asset Data API",
    description="Per-asset metrics with a composite Fear & Greed reading",
    version=health.VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Diversonal Asset Data API",
        "version": health.VERSION,
        "docs": "/docs",
    }


app.include_router(health.router, tags=["Health"])
app.include_router(asset_data.router, prefix="/api", tags=["Asset Data"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
