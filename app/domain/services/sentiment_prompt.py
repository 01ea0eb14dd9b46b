"""
Sentiment prompt construction for the Fear & Greed LLM step.
"""

from typing import Optional, Sequence

from app.domain.models import (
    AssetClass,
    CryptoMetrics,
    EquityMetrics,
    NewsArticle,
    PriceChangeData,
)

NO_NEWS = "No recent news available"


def format_pct(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"


def format_money(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    absv = abs(value)
    if absv >= 1e12:
        return f"${value / 1e12:.2f}T"
    if absv >= 1e9:
        return f"${value / 1e9:.2f}B"
    if absv >= 1e6:
        return f"${value / 1e6:.2f}M"
    return f"${value:,.2f}"


def format_number(value: Optional[float], digits: int = 1) -> str:
    return "N/A" if value is None else f"{value:.{digits}f}"


def headlines_block(news: Sequence[NewsArticle]) -> str:
    if not news:
        return NO_NEWS
    return "\n".join(
        f'{i}. "{a.title}" ({a.site}, {a.published_date})'
        for i, a in enumerate(news, start=1)
    )


def momentum_block(changes: PriceChangeData) -> str:
    return "\n".join([
        "**PRICE MOMENTUM:**",
        f"- 1 Day: {format_pct(changes.one_day)}",
        f"- 5 Day: {format_pct(changes.five_day)}",
        f"- 1 Month: {format_pct(changes.one_month)}",
        f"- 3 Month: {format_pct(changes.three_month)}",
    ])


def _news_section(news: Sequence[NewsArticle]) -> str:
    return f"**NEWS HEADLINES ({len(news)} recent articles):**\n{headlines_block(news)}"


def _reply_contract(with_fundamentals: bool, fundamentals_hint: str = "") -> str:
    lines = [
        "Score each dimension from 0 (extreme fear) to 100 (extreme greed):",
        "- momentumScore: strength and direction of recent price moves",
        "- newsScore: tone of the headlines above",
    ]
    if with_fundamentals:
        lines.append(f"- fundamentalsScore: {fundamentals_hint}")
    lines.append("- headlineNumber: the single most market-moving headline (1-based)")
    lines.append("")
    lines.append("Return ONLY valid JSON:")
    lines.append("{")
    lines.append('  "momentumScore": 55,')
    lines.append('  "newsScore": 60,')
    if with_fundamentals:
        lines.append('  "fundamentalsScore": 50,')
    lines.append('  "headlineNumber": 1')
    lines.append("}")
    return "\n".join(lines)


def build_equity_prompt(
    ticker: str,
    metrics: EquityMetrics,
    news: Sequence[NewsArticle],
) -> str:
    growth_label = f" ({metrics.growth_period})" if metrics.growth_period else ""
    fundamentals = "\n".join([
        "**FUNDAMENTALS:**",
        f"- P/E Ratio: {format_number(metrics.pe_ratio)}",
        f"- Revenue Growth{growth_label}: {format_pct(metrics.revenue_growth)}",
        f"- Profit Margin: {format_number(metrics.profit_margin)}%"
        if metrics.profit_margin is not None else "- Profit Margin: N/A",
        f"- Dividend Yield: {format_number(metrics.dividend_yield, 2)}%"
        if metrics.dividend_yield is not None else "- Dividend Yield: N/A",
        f"- 50-Day SMA: {format_money(metrics.sma50)}",
        f"- 200-Day SMA: {format_money(metrics.sma200)}",
        f"- Market Cap: {format_money(metrics.market_cap)}",
    ])
    return "\n\n".join([
        f"Assess market sentiment for {ticker} (equity).",
        momentum_block(metrics.price_changes),
        fundamentals,
        _news_section(news),
        _reply_contract(True, "valuation, growth and profitability quality"),
    ])


def build_crypto_prompt(
    ticker: str,
    metrics: CryptoMetrics,
    news: Sequence[NewsArticle],
) -> str:
    rsi_label = f" ({metrics.rsi_label})" if metrics.rsi_label else ""
    technicals = "\n".join([
        "**TECHNICAL INDICATORS:**",
        f"- RSI (14-day): {format_number(metrics.rsi)}{rsi_label}",
        f"- Current Price: {format_money(metrics.price)}",
        f"- 20-Week SMA: {format_money(metrics.sma20_week)}",
        f"- 50-Week SMA: {format_money(metrics.sma50_week)}",
        f"- 200-Week SMA: {format_money(metrics.sma200_week)}",
        f"- Market Cap: {format_money(metrics.market_cap)}",
        f"- 24h Volume: {format_money(metrics.volume)}",
    ])
    return "\n\n".join([
        f"Assess market sentiment for {ticker} (cryptocurrency).",
        momentum_block(metrics.price_changes),
        technicals,
        _news_section(news),
        _reply_contract(True, "price position against the weekly SMAs, market cap and volume"),
    ])


def build_simplified_prompt(
    ticker: str,
    asset_class: AssetClass,
    price_changes: PriceChangeData,
    news: Sequence[NewsArticle],
) -> str:
    return "\n\n".join([
        f"Assess market sentiment for {ticker} ({asset_class.value}).",
        momentum_block(price_changes),
        _news_section(news),
        _reply_contract(False),
    ])
