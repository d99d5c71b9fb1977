"""Tests for SentimentAdvisor."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from anthropic import APIConnectionError

from src.advisor.models import SentimentAnalysis, SentimentUnavailableError
from src.advisor.prompts import SYSTEM_PROMPT
from src.advisor.sentiment_advisor import SentimentAdvisor


def make_response(*blocks) -> SimpleNamespace:
    """Create a Messages API response with the given content blocks."""
    return SimpleNamespace(content=list(blocks))


def text_block(text: str, citations=None) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text, citations=citations)


def citation(url: str | None, title: str | None) -> SimpleNamespace:
    return SimpleNamespace(type="web_search_result_location", url=url, title=title)


def connection_error() -> APIConnectionError:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    return APIConnectionError(request=request)


class TestSentimentAdvisorInit:
    """Tests for SentimentAdvisor initialization."""

    @patch("src.advisor.sentiment_advisor.Anthropic")
    def test_creates_client_with_api_key(self, mock_anthropic):
        advisor = SentimentAdvisor(api_key="test-key")

        mock_anthropic.assert_called_once_with(api_key="test-key")
        assert advisor.model == SentimentAdvisor.DEFAULT_MODEL
        assert advisor.max_tokens == SentimentAdvisor.DEFAULT_MAX_TOKENS
        assert advisor.max_retries == 3

    @patch("src.advisor.sentiment_advisor.Anthropic")
    def test_retry_delays_double(self, mock_anthropic):
        advisor = SentimentAdvisor(api_key="k", base_delay_seconds=0.5)

        assert advisor.retry_delays() == [0.5, 1.0, 2.0]

    @patch("src.advisor.sentiment_advisor.Anthropic")
    def test_no_retries_no_delays(self, mock_anthropic):
        assert SentimentAdvisor(api_key="k", max_retries=0).retry_delays() == []


class TestSentimentAdvisorFetch:
    """Tests for SentimentAdvisor.fetch method."""

    @pytest.fixture
    def client(self):
        with patch("src.advisor.sentiment_advisor.Anthropic") as mock_anthropic:
            client = MagicMock()
            mock_anthropic.return_value = client
            yield client

    @pytest.fixture
    def sleep(self):
        return AsyncMock()

    @pytest.fixture
    def advisor(self, client, sleep):
        return SentimentAdvisor(api_key="test-key", sleep=sleep)

    async def test_returns_text_and_sources(self, advisor, client):
        client.messages.create.return_value = make_response(
            text_block(
                "QQQ trades above its 50-day average. Long.",
                citations=[citation("https://news.example.com/qqq", "Tech rally")],
            )
        )

        result = await advisor.fetch("qqq")

        assert isinstance(result, SentimentAnalysis)
        assert result.ticker == "QQQ"
        assert result.text == "QQQ trades above its 50-day average. Long."
        assert result.has_sources
        assert result.sources[0].title == "Tech rally"
        assert result.sources[0].uri == "https://news.example.com/qqq"

    async def test_request_uses_web_search_and_system_prompt(self, advisor, client):
        client.messages.create.return_value = make_response(text_block("Neutral."))

        await advisor.fetch("SPY")

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["model"] == SentimentAdvisor.DEFAULT_MODEL
        assert kwargs["tools"][0]["type"] == "web_search_20250305"
        assert kwargs["tools"][0]["max_uses"] == 5
        assert "SPY" in kwargs["messages"][0]["content"]

    async def test_concatenates_text_blocks_and_skips_tool_blocks(self, advisor, client):
        client.messages.create.return_value = make_response(
            SimpleNamespace(type="server_tool_use", name="web_search"),
            SimpleNamespace(type="web_search_tool_result", content=[]),
            text_block("Momentum is strong, "),
            text_block("suggesting Long."),
        )

        result = await advisor.fetch("QQQ")

        assert result.text == "Momentum is strong, suggesting Long."
        assert not result.has_sources

    async def test_sources_deduplicated_and_incomplete_dropped(self, advisor, client):
        client.messages.create.return_value = make_response(
            text_block(
                "Bearish. Short.",
                citations=[
                    citation("https://a.example.com", "A"),
                    citation("https://a.example.com", "A again"),
                    citation(None, "No link"),
                    citation("https://b.example.com", None),
                    citation("https://c.example.com", "C"),
                ],
            )
        )

        result = await advisor.fetch("QQQ")

        assert [s.uri for s in result.sources] == ["https://a.example.com", "https://c.example.com"]

    async def test_blank_ticker_rejected(self, advisor, client):
        with pytest.raises(ValueError):
            await advisor.fetch("   ")

        client.messages.create.assert_not_called()

    async def test_retries_then_succeeds(self, advisor, client, sleep):
        """A transient failure is retried after the base delay."""
        client.messages.create.side_effect = [
            connection_error(),
            make_response(text_block("Neutral.")),
        ]

        result = await advisor.fetch("QQQ")

        assert result.text == "Neutral."
        assert client.messages.create.call_count == 2
        sleep.assert_awaited_once_with(1.0)

    async def test_exhausted_retries_raise(self, advisor, client, sleep):
        """After the last retry the failure is surfaced."""
        client.messages.create.side_effect = connection_error()

        with pytest.raises(SentimentUnavailableError, match="after 3 retries"):
            await advisor.fetch("QQQ")

        assert client.messages.create.call_count == 4
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0, 4.0]

    async def test_empty_text_is_retried(self, advisor, client, sleep):
        client.messages.create.side_effect = [
            make_response(),
            make_response(text_block("   ")),
            make_response(text_block("Long.")),
        ]

        result = await advisor.fetch("QQQ")

        assert result.text == "Long."
        assert sleep.await_count == 2

    async def test_no_retries_configured(self, client, sleep):
        advisor = SentimentAdvisor(api_key="k", max_retries=0, sleep=sleep)
        client.messages.create.side_effect = connection_error()

        with pytest.raises(SentimentUnavailableError):
            await advisor.fetch("QQQ")

        assert client.messages.create.call_count == 1
        sleep.assert_not_awaited()
