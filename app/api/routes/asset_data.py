"""
Asset Data routes - per-asset metrics and Fear & Greed reading.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.logging import get_logger
from app.domain.errors import UnsupportedAssetClassError
from app.domain.models import AssetClass, AssetDataRequest
from app.services.asset_data_service import AssetDataService
from app.services.service_factory import build_asset_data_service

logger = get_logger(__name__)

router = APIRouter()

MISSING_FIELDS = "Missing ticker or assetClass"


def get_asset_data_service(request: Request) -> AssetDataService:
    """Service built at startup; built lazily when the app skipped lifespan."""
    service = getattr(request.app.state, "asset_data_service", None)
    if service is None:
        service = build_asset_data_service()
        request.app.state.asset_data_service = service
    return service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


@router.post("/asset-data")
async def asset_data(request: Request):
    """Metrics, Fear & Greed score and headline for one asset."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    ticker = _text(body.get("ticker"))
    tag = _text(body.get("assetClass"))
    if not ticker or not tag:
        return _error(400, MISSING_FIELDS)

    try:
        asset_class = AssetClass.parse(tag)
    except UnsupportedAssetClassError as exc:
        return _error(400, str(exc))

    try:
        service = get_asset_data_service(request)
        result = await service.get_asset_data(AssetDataRequest(ticker=ticker, asset_class=asset_class))
    except Exception as exc:
        logger.exception("Asset data failed for %s (%s)", ticker, tag)
        return _error(500, str(exc) or "Failed to fetch asset data")

    return result.to_dict()
