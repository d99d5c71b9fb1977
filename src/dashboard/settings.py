"""Settings for the Streamlit dashboard."""
from typing import Literal

from pydantic import BaseModel, Field


class DashboardSettings(BaseModel):
    """Configuration for the dashboard."""

    message_seconds: float = Field(default=5.0, ge=0.0)
    max_journal_rows: int = Field(default=200, gt=0)
    theme: Literal["light", "dark"] = "light"
