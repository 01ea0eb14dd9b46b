import json

import pytest

from app.domain.errors import MarketDataHTTPError
from app.domain.models import AssetClass, AssetDataRequest, PriceChangeData
from app.services.asset_data_service import AssetDataService, normalize_crypto_symbol
from app.services.fear_greed_service import FearGreedService
from tests.fakes import FakeLLM, FakeMarketDataProvider, make_article


def build_service(provider, llm, config_engine):
    return AssetDataService(
        provider=provider,
        scorer=FearGreedService(llm=llm),
        config=config_engine.asset_data,
    )


def request(ticker, asset_class):
    return AssetDataRequest(ticker=ticker, asset_class=asset_class)


@pytest.mark.parametrize("ticker,expected", [("BTC", "BTCUSD"), ("btcusd", "BTCUSD"), (" eth ", "ETHUSD")])
def test_normalize_crypto_symbol(ticker, expected):
    assert normalize_crypto_symbol(ticker) == expected


@pytest.mark.asyncio
async def test_cash_makes_no_calls(config_engine):
    provider = FakeMarketDataProvider()
    llm = FakeLLM(reply="{}")
    service = build_service(provider, llm, config_engine)

    result = await service.get_asset_data(request("USD", AssetClass.CASH))

    assert provider.calls == []
    assert llm.prompts == []
    assert result.to_dict() == {"ticker": "USD", "assetClass": "Cash", "metrics": {"yield": 4.0}}


@pytest.mark.asyncio
async def test_equity_aggregates_metrics(config_engine):
    provider = FakeMarketDataProvider(
        news=[make_article(1), make_article(2)],
        rsi=72,
        ratios={"priceToEarningsRatio": 0, "netProfitMargin": 0.24, "dividendYieldPercentage": 0.44},
        key_metrics={"peRatio": 29.5, "dividendYield": 0.0044},
        quote={"priceAvg50": 180.2, "priceAvg200": 175.9, "marketCap": 2.9e12},
        income=[
            {"date": "2024-09-28", "revenue": 110},
            {"date": "2023-09-30", "revenue": 100},
        ],
        price_change=PriceChangeData(one_day=1.0, five_day=2.0, one_month=3.0, three_month=4.0),
    )
    reply = json.dumps({"momentumScore": 65, "newsScore": 80, "fundamentalsScore": 50, "headlineNumber": 2})
    llm = FakeLLM(reply=reply)
    service = build_service(provider, llm, config_engine)

    payload = (await service.get_asset_data(request("aapl", AssetClass.EQUITIES))).to_dict()

    assert payload["ticker"] == "aapl"
    assert provider.calls[0][1] == "AAPL"
    assert payload["fearGreed"] == {"score": 70, "label": "Greed", "rsi": 72}
    assert payload["headline"]["title"] == "Headline 2"
    metrics = payload["metrics"]
    assert metrics["peRatio"] == 29.5
    assert metrics["revenueGrowth"] == pytest.approx(10.0)
    assert metrics["growthPeriod"] == "YoY"
    assert metrics["profitMargin"] == pytest.approx(24.0)
    assert metrics["dividendYield"] == 0.44
    assert metrics["sma50"] == 180.2
    assert metrics["sma200"] == 175.9
    assert metrics["marketCap"] == 2.9e12
    assert metrics["priceChanges"] == {"1D": 1.0, "5D": 2.0, "1M": 3.0, "3M": 4.0}
    assert set(provider.call_names) == {
        "get_news", "get_ratios", "get_key_metrics", "get_quote",
        "get_price_change", "get_rsi", "get_income_statements",
    }
    assert "AAPL" in llm.prompts[0]


@pytest.mark.asyncio
async def test_failed_fetch_degrades_single_field(config_engine):
    provider = FakeMarketDataProvider(
        rsi=55,
        quote={"priceAvg50": 10.0, "priceAvg200": 9.0, "marketCap": 1000},
        failures={"get_ratios": MarketDataHTTPError("FMP API error: 500", status_code=500)},
    )
    service = build_service(provider, FakeLLM(error=RuntimeError("down")), config_engine)

    payload = (await service.get_asset_data(request("MSFT", AssetClass.EQUITIES))).to_dict()

    metrics = payload["metrics"]
    assert metrics["peRatio"] is None
    assert metrics["profitMargin"] is None
    assert metrics["sma50"] == 10.0
    assert metrics["marketCap"] == 1000
    assert payload["fearGreed"] == {"score": 55, "label": "Neutral", "rsi": 55}
    assert payload["headline"] is None


@pytest.mark.asyncio
async def test_crypto_queries_usd_pair_and_keeps_request_ticker(config_engine):
    provider = FakeMarketDataProvider(
        rsi=25,
        quote={"price": 60000, "volume": 1.2e9, "marketCap": 1.1e12},
        sma={140: 58000.0, 350: 50000.0, 1400: 35000.0},
    )
    service = build_service(provider, FakeLLM(error=RuntimeError("down")), config_engine)

    payload = (await service.get_asset_data(request("btc", AssetClass.CRYPTOCURRENCIES))).to_dict()

    assert payload["ticker"] == "btc"
    assert payload["assetClass"] == "Cryptocurrencies"
    assert {call[1] for call in provider.calls} == {"BTCUSD"}
    metrics = payload["metrics"]
    assert metrics["price"] == 60000
    assert metrics["rsi"] == 25
    assert metrics["rsiLabel"] == "Oversold"
    assert metrics["sma20Week"] == 58000.0
    assert metrics["sma50Week"] == 50000.0
    assert metrics["sma200Week"] == 35000.0
    assert payload["fearGreed"]["label"] == "Fear"
    assert "get_crypto_news" in provider.call_names
    assert "get_ratios" not in provider.call_names


@pytest.mark.asyncio
async def test_simplified_skips_fundamentals(config_engine):
    provider = FakeMarketDataProvider(
        news=[make_article(1)],
        rsi=60,
        price_change=PriceChangeData(one_day=-0.5),
    )
    reply = json.dumps({"momentumScore": 70, "newsScore": 40, "headlineNumber": 9})
    service = build_service(provider, FakeLLM(reply=reply), config_engine)

    payload = (await service.get_asset_data(request("GLD", AssetClass.COMMODITIES))).to_dict()

    assert sorted(provider.call_names) == ["get_news", "get_price_change", "get_rsi"]
    assert payload["fearGreed"] == {"score": 59, "label": "Neutral", "rsi": 60}
    assert payload["headline"]["title"] == "Headline 1"
    assert payload["metrics"] == {"priceChanges": {"1D": -0.5, "5D": None, "1M": None, "3M": None}}


@pytest.mark.asyncio
async def test_income_statement_failure_nulls_only_growth(config_engine):
    provider = FakeMarketDataProvider(
        rsi=40,
        ratios={"priceToEarningsRatio": 21.0},
        quote={"priceAvg50": 10.0, "marketCap": 1000},
        failures={"get_income_statements": MarketDataHTTPError("FMP API error: 403", status_code=403)},
    )
    service = build_service(provider, FakeLLM(error=RuntimeError("down")), config_engine)

    payload = (await service.get_asset_data(request("AAPL", AssetClass.EQUITIES))).to_dict()

    metrics = payload["metrics"]
    assert metrics["revenueGrowth"] is None
    assert metrics["growthPeriod"] is None
    assert metrics["peRatio"] == 21.0
    assert metrics["sma50"] == 10.0
    assert payload["fearGreed"] == {"score": 40, "label": "Fear", "rsi": 40}


@pytest.mark.asyncio
async def test_string_revenues_are_parsed(config_engine):
    provider = FakeMarketDataProvider(
        rsi=40,
        income=[
            {"date": "2024-09-28", "revenue": "110"},
            {"date": "2023-09-30", "revenue": "100"},
        ],
    )
    service = build_service(provider, FakeLLM(error=RuntimeError("down")), config_engine)

    payload = (await service.get_asset_data(request("AAPL", AssetClass.EQUITIES))).to_dict()

    assert payload["metrics"]["revenueGrowth"] == pytest.approx(10.0)
    assert payload["metrics"]["growthPeriod"] == "YoY"
    assert payload["fearGreed"]["score"] == 40


@pytest.mark.asyncio
async def test_malformed_income_rows_null_growth(config_engine):
    provider = FakeMarketDataProvider(
        rsi=40,
        income=[{"date": "2024-09-28", "revenue": "n/a"}, "garbage"],
    )
    service = build_service(provider, FakeLLM(error=RuntimeError("down")), config_engine)

    payload = (await service.get_asset_data(request("AAPL", AssetClass.EQUITIES))).to_dict()

    assert payload["metrics"]["revenueGrowth"] is None
    assert payload["metrics"]["growthPeriod"] is None
    assert payload["fearGreed"]["score"] == 40


@pytest.mark.asyncio
async def test_revenue_growth_error_does_not_fail_request(config_engine, monkeypatch):
    import app.services.asset_data_service as service_module

    def broken(statements):
        raise TypeError("unexpected statement shape")

    monkeypatch.setattr(service_module, "revenue_growth_from_statements", broken)
    provider = FakeMarketDataProvider(rsi=40, quote={"marketCap": 1000})
    service = build_service(provider, FakeLLM(error=RuntimeError("down")), config_engine)

    payload = (await service.get_asset_data(request("AAPL", AssetClass.EQUITIES))).to_dict()

    assert payload["metrics"]["revenueGrowth"] is None
    assert payload["metrics"]["growthPeriod"] is None
    assert payload["metrics"]["marketCap"] == 1000
    assert payload["fearGreed"] == {"score": 40, "label": "Fear", "rsi": 40}


@pytest.mark.asyncio
async def test_stray_fundamentals_score_ignored_for_simplified(config_engine):
    provider = FakeMarketDataProvider(rsi=60)
    reply = json.dumps({"momentumScore": 70, "newsScore": 40, "fundamentalsScore": 150})
    service = build_service(provider, FakeLLM(reply=reply), config_engine)

    payload = (await service.get_asset_data(request("TLT", AssetClass.BONDS))).to_dict()

    assert payload["fearGreed"] == {"score": 59, "label": "Neutral", "rsi": 60}


@pytest.mark.asyncio
async def test_out_of_range_fundamentals_falls_back_for_equities(config_engine):
    provider = FakeMarketDataProvider(rsi=33)
    reply = json.dumps({"momentumScore": 70, "newsScore": 40, "fundamentalsScore": 150})
    service = build_service(provider, FakeLLM(reply=reply), config_engine)

    payload = (await service.get_asset_data(request("AAPL", AssetClass.EQUITIES))).to_dict()

    assert payload["fearGreed"] == {"score": 33, "label": "Fear", "rsi": 33}
