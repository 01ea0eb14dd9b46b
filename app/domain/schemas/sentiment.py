from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional

from app.domain.models import SentimentSubScores


class SentimentReply(BaseModel):
    """JSON object the LLM is asked to return"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    momentum_score: float = Field(alias="momentumScore", ge=0, le=100)
    news_score: float = Field(alias="newsScore", ge=0, le=100)
    # Bounds checked by the composite, only the full variant weighs it
    fundamentals_score: Optional[float] = Field(default=None, alias="fundamentalsScore")
    headline_number: Optional[int] = Field(default=None, alias="headlineNumber")

    @field_validator("headline_number", mode="before")
    @classmethod
    def _lenient_headline(cls, value: Any) -> Optional[int]:
        # A bad index only costs the headline choice, never the score
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    def to_sub_scores(self) -> SentimentSubScores:
        return SentimentSubScores(
            momentum_score=self.momentum_score,
            news_score=self.news_score,
            fundamentals_score=self.fundamentals_score,
            headline_number=self.headline_number,
        )
