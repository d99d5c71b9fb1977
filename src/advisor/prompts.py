"""Prompt templates for the sentiment advisor."""

SYSTEM_PROMPT = (
    "Act as a specialized financial market analyst focused on technical and "
    "fundamental analysis. Your goal is to provide a concise, single-paragraph "
    "sentiment summary based on the latest available news and data. Conclude "
    "your analysis with a clear trade direction suggestion (Long, Short, or "
    "Neutral). Do not use markdown formatting like headings or bolding in your "
    "summary."
)


def build_query(ticker: str) -> str:
    """Build the user prompt for a ticker.

    Args:
        ticker: Stock or ETF symbol.

    Returns:
        Prompt asking for recent news, sentiment and a trade direction.
    """
    return (
        f"Find recent news and market sentiment for the stock/ETF ticker {ticker} "
        "and suggest a trade direction (Long/Short/Neutral). Provide a concise "
        "summary for a trade journal, including a mention of the current trend "
        "or risk factors."
    )
