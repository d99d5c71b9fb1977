"""Market sentiment advisor backed by a language-model API."""

from src.advisor.models import SentimentAnalysis, SentimentUnavailableError, SourceCitation
from src.advisor.sentiment_advisor import SentimentAdvisor

__all__ = [
    "SentimentAdvisor",
    "SentimentAnalysis",
    "SentimentUnavailableError",
    "SourceCitation",
]
