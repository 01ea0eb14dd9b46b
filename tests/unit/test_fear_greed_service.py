import json

import pytest

from app.domain.errors import LLMConfigurationError
from app.domain.models import AssetHandler, FearGreedLabel
from app.services.fear_greed_service import FearGreedService
from tests.fakes import FakeLLM, make_article


NEWS = [make_article(1), make_article(2)]


@pytest.mark.asyncio
async def test_llm_failure_falls_back_to_rsi():
    scorer = FearGreedService(llm=FakeLLM(error=RuntimeError("timeout")))

    scored = await scorer.score(AssetHandler.EQUITY, "AAPL", "prompt", 18, NEWS)

    assert scored.used_fallback is True
    assert scored.fear_greed.to_dict() == {"score": 18, "label": "Extreme Fear", "rsi": 18}
    assert scored.headline.title == "Headline 1"


@pytest.mark.asyncio
async def test_llm_failure_without_rsi_is_neutral():
    scorer = FearGreedService(llm=FakeLLM(error=LLMConfigurationError("XAI_API_KEY not configured")))

    scored = await scorer.score(AssetHandler.SIMPLIFIED, "TLT", "prompt", None, [])

    assert scored.fear_greed.score == 50
    assert scored.fear_greed.label == FearGreedLabel.NEUTRAL
    assert scored.fear_greed.rsi is None
    assert scored.headline is None


@pytest.mark.asyncio
async def test_unparseable_reply_falls_back():
    scorer = FearGreedService(llm=FakeLLM(reply="I think the market is bullish"))

    scored = await scorer.score(AssetHandler.EQUITY, "AAPL", "prompt", 64.5, NEWS)

    assert scored.used_fallback is True
    assert scored.fear_greed.score == 65


@pytest.mark.asyncio
async def test_missing_fundamentals_falls_back_for_full_variant():
    reply = json.dumps({"momentumScore": 60, "newsScore": 60})
    scorer = FearGreedService(llm=FakeLLM(reply=reply))

    scored = await scorer.score(AssetHandler.CRYPTO, "BTCUSD", "prompt", 40, NEWS)

    assert scored.used_fallback is True
    assert scored.fear_greed.score == 40


@pytest.mark.asyncio
async def test_fenced_reply_is_scored_and_selects_headline():
    reply = "```json\n" + json.dumps({
        "momentumScore": 65,
        "newsScore": 80,
        "fundamentalsScore": 50,
        "headlineNumber": 2,
    }) + "\n```"
    llm = FakeLLM(reply=reply)
    scorer = FearGreedService(llm=llm, system_message="system")

    scored = await scorer.score(AssetHandler.EQUITY, "AAPL", "the prompt", 72, NEWS)

    assert scored.used_fallback is False
    assert scored.fear_greed.to_dict() == {"score": 70, "label": "Greed", "rsi": 72}
    assert scored.headline.title == "Headline 2"
    assert llm.prompts == ["the prompt"]
