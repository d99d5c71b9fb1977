import asyncio
import logging
from typing import Awaitable, Callable

from anthropic import Anthropic, APIError

from src.advisor.models import SentimentAnalysis, SentimentUnavailableError, SourceCitation
from src.advisor.prompts import SYSTEM_PROMPT, build_query

logger = logging.getLogger(__name__)


class EmptyResponseError(ValueError):
    """Raised when the API answers without any summary text."""


class SentimentAdvisor:
    """Fetches a grounded market-sentiment summary for a ticker.

    Failed requests are retried in a bounded loop with exponential backoff;
    only the final failure is surfaced to the caller.
    """

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    DEFAULT_MAX_TOKENS = 1000
    DEFAULT_MAX_RETRIES = 3
    DEFAULT_BASE_DELAY = 1.0
    DEFAULT_MAX_SEARCHES = 5

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        max_tokens: int | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay_seconds: float = DEFAULT_BASE_DELAY,
        max_searches: int = DEFAULT_MAX_SEARCHES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = Anthropic(api_key=api_key)
        self.model = model or self.DEFAULT_MODEL
        self.max_tokens = max_tokens or self.DEFAULT_MAX_TOKENS
        self.max_retries = max_retries
        self.base_delay_seconds = base_delay_seconds
        self.max_searches = max_searches
        self._sleep = sleep

    def retry_delays(self) -> list[float]:
        """Delay before each retry: base, 2x base, 4x base, ..."""
        return [self.base_delay_seconds * 2**attempt for attempt in range(self.max_retries)]

    async def fetch(self, ticker: str) -> SentimentAnalysis:
        """Fetch a sentiment summary for a ticker.

        Args:
            ticker: Stock or ETF symbol.

        Returns:
            SentimentAnalysis with summary text and cited sources.

        Raises:
            ValueError: If the ticker is blank.
            SentimentUnavailableError: If every attempt failed.
        """
        ticker = ticker.strip().upper()
        if not ticker:
            raise ValueError("Ticker is required")

        delays = self.retry_delays()
        for attempt in range(self.max_retries + 1):
            try:
                return await self._request(ticker)
            except (APIError, EmptyResponseError) as e:
                if attempt >= self.max_retries:
                    logger.error(f"Sentiment analysis for {ticker} failed: {e}")
                    break
                delay = delays[attempt]
                logger.warning(
                    f"Sentiment request for {ticker} failed ({e}), retrying in {delay:.0f}s"
                )
                await self._sleep(delay)

        raise SentimentUnavailableError(
            f"Failed to get analysis for {ticker} after {self.max_retries} retries."
        )

    async def _request(self, ticker: str) -> SentimentAnalysis:
        """Make one API call and parse the answer."""
        # Sync client call runs in a worker thread to keep the event loop free
        response = await asyncio.to_thread(
            self.client.messages.create,
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_query(ticker)}],
            tools=[
                {
                    "type": "web_search_20250305",
                    "name": "web_search",
                    "max_uses": self.max_searches,
                }
            ],
        )
        return self._parse_response(ticker, response)

    def _parse_response(self, ticker: str, response) -> SentimentAnalysis:
        """Collect text blocks and web citations from a response.

        Raises:
            EmptyResponseError: If the response carries no text.
        """
        parts: list[str] = []
        sources: list[SourceCitation] = []
        seen: set[str] = set()

        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) != "text":
                continue
            parts.append(block.text or "")

            for citation in getattr(block, "citations", None) or []:
                uri = getattr(citation, "url", None)
                title = getattr(citation, "title", None)
                if not uri or not title or uri in seen:
                    continue
                seen.add(uri)
                sources.append(SourceCitation(title=title, uri=uri))

        text = "".join(parts).strip()
        if not text:
            raise EmptyResponseError("Invalid response structure or no generated text.")

        return SentimentAnalysis(ticker=ticker, text=text, sources=sources)
