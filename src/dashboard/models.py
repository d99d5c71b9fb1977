"""Data models for the dashboard."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MessageLevel(Enum):
    """Severity levels for user-facing messages."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class RowStatus(Enum):
    """Transient status of a journal row operation."""

    LOADING = "loading"
    SUCCESS = "success"
    DELETING = "deleting"
    ERROR = "error"


@dataclass
class StatusMessage:
    """A message shown in one area of the page.

    Messages without ``expires_at`` stay until cleared.
    """

    level: MessageLevel
    text: str
    created_at: datetime
    expires_at: datetime | None = None

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or now < self.expires_at
