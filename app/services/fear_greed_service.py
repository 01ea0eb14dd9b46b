"""
Fear & Greed scoring service.

Prompt -> LLM -> parsed sub-scores -> composite. Any failure along that
chain falls back to the RSI-only reading (and to 50 without RSI).
"""

import logging
from typing import List, Optional

from app.domain.models import AssetHandler, NewsArticle, ScoredSentiment
from app.domain.services.fear_greed_engine import (
    build_fear_greed,
    fallback_fear_greed,
    first_headline,
    select_headline,
)
from app.infrastructure.llm.grok_client import CompletionClient
from app.infrastructure.llm.json_response import parse_sentiment_reply

_logger = logging.getLogger(__name__)


class FearGreedService:
    def __init__(
        self,
        llm: CompletionClient,
        system_message: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.llm = llm
        self.system_message = system_message
        self.logger = logger or _logger

    async def score(
        self,
        handler: AssetHandler,
        ticker: str,
        prompt: str,
        rsi: Optional[float],
        news: List[NewsArticle],
    ) -> ScoredSentiment:
        """
        Score one asset.

        Args:
            handler: pipeline variant, selects the weighting
            ticker: for logging only
            prompt: fully rendered sentiment prompt
            rsi: independently measured RSI, or None
            news: articles in the order they were numbered in the prompt
        """
        try:
            reply = await self.llm.complete(prompt, self.system_message)
            sub_scores = parse_sentiment_reply(reply)
            fear_greed = build_fear_greed(handler, rsi, sub_scores)
        except Exception as exc:
            self.logger.warning(
                "Fear & Greed LLM step failed for %s (%s): %s; using RSI fallback",
                ticker, type(exc).__name__, exc,
            )
            return ScoredSentiment(
                fear_greed=fallback_fear_greed(rsi),
                headline=first_headline(news),
                used_fallback=True,
            )

        self.logger.info(
            "Fear & Greed for %s: %s (%s)", ticker, fear_greed.score, fear_greed.label.value
        )
        return ScoredSentiment(
            fear_greed=fear_greed,
            headline=select_headline(news, sub_scores.headline_number),
        )
