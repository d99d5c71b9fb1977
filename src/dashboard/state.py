"""Dashboard state management."""
from datetime import datetime, timedelta
from typing import Callable

from src.dashboard.models import MessageLevel, RowStatus, StatusMessage

# Message areas of the page
CALCULATOR = "calculator"
SAVE = "save"
SETTINGS = "settings"
ADVISOR = "advisor"


class DashboardState:
    """Per-session UI state for messages, banners and row statuses.

    Banners report upstream conditions and persist until cleared. Area
    messages and row statuses may carry a lifetime after which they
    stop being reported.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize dashboard state."""
        self._clock = clock or datetime.now
        self._banners: dict[str, StatusMessage] = {}
        self._messages: dict[str, StatusMessage] = {}
        self._row_status: dict[str, tuple[RowStatus, datetime | None]] = {}

    def _expiry(self, ttl_seconds: float | None) -> datetime | None:
        if ttl_seconds is None:
            return None
        return self._clock() + timedelta(seconds=ttl_seconds)

    @property
    def banners(self) -> list[StatusMessage]:
        """Active banners, oldest first."""
        return list(self._banners.values())

    def set_banner(self, key: str, text: str, level: MessageLevel = MessageLevel.ERROR) -> None:
        """Show a persistent banner for an upstream condition."""
        self._banners[key] = StatusMessage(level=level, text=text, created_at=self._clock())

    def clear_banner(self, key: str) -> None:
        self._banners.pop(key, None)

    def post_message(
        self,
        area: str,
        level: MessageLevel,
        text: str,
        ttl_seconds: float | None = None,
    ) -> None:
        """Show a message in one area, replacing the previous one."""
        now = self._clock()
        self._messages[area] = StatusMessage(
            level=level,
            text=text,
            created_at=now,
            expires_at=self._expiry(ttl_seconds),
        )

    def message(self, area: str) -> StatusMessage | None:
        """Current message for an area, or None once it expired."""
        message = self._messages.get(area)
        if message is None:
            return None
        if not message.is_active(self._clock()):
            del self._messages[area]
            return None
        return message

    def clear_message(self, area: str) -> None:
        """Dismiss the message of an area."""
        self._messages.pop(area, None)

    def set_row_status(
        self, record_id: str, status: RowStatus, ttl_seconds: float | None = None
    ) -> None:
        """Mark an in-flight or finished operation on a journal row."""
        self._row_status[record_id] = (status, self._expiry(ttl_seconds))

    def clear_row_status(self, record_id: str) -> None:
        self._row_status.pop(record_id, None)

    def row_status(self, record_id: str) -> RowStatus | None:
        """Status of a journal row, or None once it cleared."""
        entry = self._row_status.get(record_id)
        if entry is None:
            return None
        status, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._row_status[record_id]
            return None
        return status
