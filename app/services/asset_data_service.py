"""
Asset data service.

Routes a request to its asset-class handler, fans out the upstream
fetches concurrently, assembles the metrics and hands them to the
Fear & Greed scorer.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, Optional, Tuple

from app.domain.indicators.revenue_growth import revenue_growth_from_statements
from app.domain.indicators.rsi import label_rsi
from app.domain.models import (
    AssetDataRequest,
    AssetDataResult,
    AssetHandler,
    CashMetrics,
    CryptoMetrics,
    EquityMetrics,
    PriceChangeData,
    SimplifiedMetrics,
)
from app.domain.services.config_engine import AssetDataConfig
from app.domain.services.sentiment_prompt import (
    build_crypto_prompt,
    build_equity_prompt,
    build_simplified_prompt,
)
from app.infrastructure.market_data.types import MarketDataProvider
from app.services.fear_greed_service import FearGreedService
from app.utils.numbers import first_nonzero, to_float

_logger = logging.getLogger(__name__)

CRYPTO_QUOTE_SUFFIX = "USD"


def normalize_crypto_symbol(ticker: str) -> str:
    """BTC -> BTCUSD; BTCUSD stays as-is"""
    symbol = ticker.strip().upper()
    return symbol if symbol.endswith(CRYPTO_QUOTE_SUFFIX) else f"{symbol}{CRYPTO_QUOTE_SUFFIX}"


class AssetDataService:
    def __init__(
        self,
        provider: MarketDataProvider,
        scorer: FearGreedService,
        config: AssetDataConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.scorer = scorer
        self.config = config
        self.logger = logger or _logger

    async def get_asset_data(self, request: AssetDataRequest) -> AssetDataResult:
        handler = request.asset_class.handler
        self.logger.info(
            "Fetching asset data for %s (%s)", request.ticker, request.asset_class.value
        )

        if handler == AssetHandler.CASH:
            return self._cash(request)
        if handler == AssetHandler.CRYPTO:
            return await self._crypto(request)
        if handler == AssetHandler.EQUITY:
            return await self._equity(request)
        if handler == AssetHandler.SIMPLIFIED:
            return await self._simplified(request)
        raise AssertionError(f"Unhandled asset handler: {handler}")

    async def _gather(self, ticker: str, **calls: Awaitable[Any]) -> Dict[str, Any]:
        """
        Run named fetches concurrently; a failed fetch yields None for its
        own name and never cancels its siblings.
        """
        names = list(calls)
        results = await asyncio.gather(*calls.values(), return_exceptions=True)

        out: Dict[str, Any] = {}
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                self.logger.warning("Fetch '%s' failed for %s: %s", name, ticker, result)
                out[name] = None
            elif isinstance(result, BaseException):
                raise result
            else:
                out[name] = result
        return out

    def _revenue_growth(self, ticker: str, statements) -> Tuple[Optional[float], Optional[str]]:
        """Growth and period label; a bad statement only nulls these two fields"""
        try:
            return revenue_growth_from_statements(statements or [])
        except Exception as exc:
            self.logger.warning("Revenue growth failed for %s: %s", ticker, exc)
            return None, None

    # ------------------------------------------------------------------
    # CASH
    # ------------------------------------------------------------------

    def _cash(self, request: AssetDataRequest) -> AssetDataResult:
        return AssetDataResult(
            ticker=request.ticker,
            asset_class=request.asset_class,
            metrics=CashMetrics(yield_pct=self.config.cash_yield),
        )

    # ------------------------------------------------------------------
    # EQUITIES
    # ------------------------------------------------------------------

    async def _equity(self, request: AssetDataRequest) -> AssetDataResult:
        ticker = request.symbol
        cfg = self.config
        fetched = await self._gather(
            ticker,
            news=self.provider.get_news(ticker, cfg.news_limit),
            ratios=self.provider.get_ratios(ticker),
            key_metrics=self.provider.get_key_metrics(ticker),
            quote=self.provider.get_quote(ticker),
            price_change=self.provider.get_price_change(ticker),
            rsi=self.provider.get_rsi(ticker, cfg.rsi_period),
            income=self.provider.get_income_statements(ticker, cfg.income_statement_limit),
        )

        news = fetched["news"] or []
        ratios = fetched["ratios"] or {}
        key_metrics = fetched["key_metrics"] or {}
        quote = fetched["quote"] or {}
        rsi = fetched["rsi"]
        revenue_growth, growth_period = self._revenue_growth(ticker, fetched["income"])

        net_margin = first_nonzero(ratios.get("netProfitMargin"))
        metrics = EquityMetrics(
            pe_ratio=first_nonzero(ratios.get("priceToEarningsRatio"), key_metrics.get("peRatio")),
            revenue_growth=revenue_growth,
            growth_period=growth_period,
            profit_margin=net_margin * 100 if net_margin is not None else None,
            dividend_yield=first_nonzero(
                ratios.get("dividendYieldPercentage"), key_metrics.get("dividendYield")
            ),
            sma50=first_nonzero(quote.get("priceAvg50")),
            sma200=first_nonzero(quote.get("priceAvg200")),
            market_cap=first_nonzero(quote.get("marketCap")),
            price_changes=fetched["price_change"] or PriceChangeData(),
        )

        scored = await self.scorer.score(
            AssetHandler.EQUITY, ticker, build_equity_prompt(ticker, metrics, news), rsi, news
        )
        return AssetDataResult(
            ticker=request.ticker,
            asset_class=request.asset_class,
            metrics=metrics,
            fear_greed=scored.fear_greed,
            headline=scored.headline,
            )

    # ------------------------------------------------------------------
    # CRYPTOCURRENCIES
    # ------------------------------------------------------------------

    async def _crypto(self, request: AssetDataRequest) -> AssetDataResult:
        symbol = normalize_crypto_symbol(request.ticker)
        cfg = self.config
        fetched = await self._gather(
            symbol,
            quote=self.provider.get_quote(symbol),
            rsi=self.provider.get_rsi(symbol, cfg.rsi_period),
            sma20_week=self.provider.get_sma(symbol, cfg.sma20_week_window),
            sma50_week=self.provider.get_sma(symbol, cfg.sma50_week_window),
            sma200_week=self.provider.get_sma(symbol, cfg.sma200_week_window),
            news=self.provider.get_crypto_news(symbol, cfg.news_limit),
            price_change=self.provider.get_price_change(symbol),
        )

        news = fetched["news"] or []
        quote = fetched["quote"] or {}
        rsi = to_float(fetched["rsi"])

        metrics = CryptoMetrics(
            price=first_nonzero(quote.get("price")),
            volume=first_nonzero(quote.get("volume")),
            market_cap=first_nonzero(quote.get("marketCap")),
            rsi=rsi,
            rsi_label=label_rsi(rsi),
            sma20_week=fetched["sma20_week"],
            sma50_week=fetched["sma50_week"],
            sma200_week=fetched["sma200_week"],
            price_changes=fetched["price_change"] or PriceChangeData(),
        )

        scored = await self.scorer.score(
            AssetHandler.CRYPTO,
            symbol,
            build_crypto_prompt(request.symbol, metrics, news),
            rsi,
            news,
        )
        return AssetDataResult(
            ticker=request.ticker,
            asset_class=request.asset_class,
            metrics=metrics,
            fear_greed=scored.fear_greed,
            headline=scored.headline,
            )

    # ------------------------------------------------------------------
    # BONDS / REAL ESTATE / COMMODITIES
    # ------------------------------------------------------------------

    async def _simplified(self, request: AssetDataRequest) -> AssetDataResult:
        ticker = request.symbol
        cfg = self.config
        fetched = await self._gather(
            ticker,
            news=self.provider.get_news(ticker, cfg.news_limit),
            price_change=self.provider.get_price_change(ticker),
            rsi=self.provider.get_rsi(ticker, cfg.rsi_period),
        )

        news = fetched["news"] or []
        price_changes = fetched["price_change"] or PriceChangeData()
        rsi = fetched["rsi"]

        prompt = build_simplified_prompt(ticker, request.asset_class, price_changes, news)
        scored = await self.scorer.score(AssetHandler.SIMPLIFIED, ticker, prompt, rsi, news)
        return AssetDataResult(
            ticker=request.ticker,
            asset_class=request.asset_class,
            metrics=SimplifiedMetrics(price_changes=price_changes),
            fear_greed=scored.fear_greed,
            headline=scored.headline,
            )
