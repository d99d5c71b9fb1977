# src/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field


class JournalSettings(BaseModel):
    """Configuration settings for the trade journal.

    Attributes:
        enabled: Whether journaling is enabled.
        data_dir: Directory holding one sub-directory per user.
        journal_file: File name of the per-user trade journal document.
        settings_file: File name of the per-user default settings document.
        update_status_seconds: How long a per-row update status stays visible.
        delete_status_seconds: How long a per-row delete status stays visible.
    """

    enabled: bool = True
    data_dir: str = "data/journal"

    journal_file: str = "trade_journal.json"
    settings_file: str = "settings.json"

    update_status_seconds: float = Field(default=2.0, ge=0.0, le=60.0)
    delete_status_seconds: float = Field(default=1.0, ge=0.0, le=60.0)
