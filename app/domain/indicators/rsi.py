from typing import Optional

OVERBOUGHT = 70
OVERSOLD = 30


def label_rsi(rsi: Optional[float]) -> Optional[str]:
    """Classic 70/30 RSI reading"""
    if rsi is None:
        return None
    if rsi >= OVERBOUGHT:
        return "Overbought"
    if rsi <= OVERSOLD:
        return "Oversold"
    return "Neutral"
