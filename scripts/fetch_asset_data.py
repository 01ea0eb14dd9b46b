#!/usr/bin/env python3
"""
Fetch Asset Data
Runs the asset data pipeline for one ticker without starting the API server

Usage:
    python scripts/fetch_asset_data.py AAPL Equities
    python scripts/fetch_asset_data.py BTC Cryptocurrencies --json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add app to path
sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.config import settings
from app.core.logging import setup_logging
from app.domain.errors import AssetDataError
from app.domain.models import AssetClass, AssetDataRequest
from app.services.service_factory import build_asset_data_service

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch metrics and Fear & Greed for one asset.")
    parser.add_argument("ticker", help="Ticker symbol, e.g. AAPL or BTC")
    parser.add_argument(
        "asset_class",
        help="Asset class: " + ", ".join(c.value for c in AssetClass),
    )
    parser.add_argument("--json", action="store_true", help="Print the raw JSON response")
    return parser.parse_args(argv)


def print_summary(payload: dict) -> None:
    print(f"{payload['ticker']} ({payload['assetClass']})")
    fear_greed = payload.get("fearGreed")
    if fear_greed:
        rsi = fear_greed.get("rsi")
        rsi_text = f", RSI {rsi:.1f}" if rsi is not None else ""
        print(f"  Fear & Greed: {fear_greed['score']} {fear_greed['label']}{rsi_text}")
    for key, value in (payload.get("metrics") or {}).items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        print(f"  {key}: {value}")
    headline = payload.get("headline")
    if headline:
        print(f"  Headline: {headline['title']} ({headline['site']})")


async def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(settings.LOG_LEVEL)

    try:
        asset_class = AssetClass.parse(args.asset_class)
        request = AssetDataRequest(ticker=args.ticker, asset_class=asset_class)
    except (AssetDataError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    service = build_asset_data_service()
    try:
        result = await service.get_asset_data(request)
    except Exception as exc:
        logger.error("Failed to fetch asset data for %s: %s", request.ticker, exc)
        return 1
    finally:
        close = getattr(service.scorer.llm, "close", None)
        if close is not None:
            await close()

    payload = result.to_dict()
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print_summary(payload)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
