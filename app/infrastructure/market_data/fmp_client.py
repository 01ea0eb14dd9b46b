"""
Financial Modeling Prep HTTP gateway.
Single-attempt authenticated JSON GETs against the FMP API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.domain.errors import MarketDataConfigError, MarketDataError, MarketDataHTTPError

logger = logging.getLogger(__name__)


class FMPClient:
    HEADERS = {
        "Accept": "application/json",
        "Cache-Control": "no-cache",
    }

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://financialmodelingprep.com",
        timeout: float = 30.0,
    ):
        self.api_key = (api_key or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None

    async def fetch_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET {base_url}{endpoint} and return the parsed JSON body.

        Raises:
            MarketDataConfigError: API key not configured
            MarketDataError: transport failure (timeout, connection error)
            MarketDataHTTPError: non-2xx status or non-JSON body
        """
        if not self.api_key:
            raise MarketDataConfigError("FMP_API_KEY not configured")

        url = f"{self.base_url}{endpoint}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        query["apikey"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=self.HEADERS, params=query)
        except httpx.HTTPError as exc:
            raise MarketDataError(f"FMP request to {endpoint} failed: {type(exc).__name__}") from exc

        if not 200 <= response.status_code < 300:
            logger.debug("FMP %s -> %s", endpoint, response.status_code)
            raise MarketDataHTTPError(
                f"FMP API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MarketDataHTTPError(f"FMP returned a non-JSON body for {endpoint}") from exc
