from pydantic import BaseModel, Field


class SentimentUnavailableError(RuntimeError):
    """Raised when no analysis could be fetched after all retries."""


class SourceCitation(BaseModel):
    """A web source the summary was grounded on."""

    title: str
    uri: str


class SentimentAnalysis(BaseModel):
    """Sentiment summary for a ticker with its sources."""

    ticker: str
    text: str = Field(min_length=1)
    sources: list[SourceCitation] = Field(default_factory=list)

    @property
    def has_sources(self) -> bool:
        return bool(self.sources)
