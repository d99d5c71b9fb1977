"""Wiring of stores, journal and advisor for the dashboard."""
import logging
from dataclasses import dataclass, field
from pathlib import Path

from src.advisor.sentiment_advisor import SentimentAdvisor
from src.config.settings import Settings
from src.journal.journal_manager import JournalManager
from src.journal.trade_store import JournalStore, JsonJournalStore
from src.preferences.settings_store import JsonSettingsStore, SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


@dataclass
class AppContext:
    """Long-lived services shared by a dashboard session.

    A service that could not be initialized is None and the reason is
    kept in ``errors`` for the page banner.
    """

    settings: Settings
    manager: JournalManager
    journal_store: JournalStore | None = None
    settings_store: SettingsStore | None = None
    advisor: SentimentAdvisor | None = None
    errors: dict[str, str] = field(default_factory=dict)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from YAML, or defaults when the file is missing."""
    if path.exists():
        return Settings.from_yaml(path)
    logger.warning(f"{path} not found, using default settings")
    return Settings()


def create_context(settings: Settings) -> AppContext:
    """Initialize every service, degrading instead of failing.

    Args:
        settings: Loaded settings object.

    Returns:
        AppContext with unavailable services set to None.
    """
    errors: dict[str, str] = {}
    journal_store = None
    settings_store = None

    if settings.journal.enabled:
        try:
            journal_store = JsonJournalStore(settings.journal)
            settings_store = JsonSettingsStore(settings.journal)
            logger.info(f"✓ Journal store ready at {settings.journal.data_dir}")
        except OSError as e:
            logger.error(f"Journal store setup failed: {e}")
            errors["database"] = f"Journal store setup failed: {e}. Journaling and persistence disabled."
    else:
        errors["database"] = "Journaling is disabled in settings. Journaling and persistence disabled."

    advisor = None
    if settings.advisor_available:
        advisor = SentimentAdvisor(
            api_key=settings.anthropic.api_key,
            model=settings.advisor.model,
            max_tokens=settings.advisor.max_tokens,
            max_retries=settings.advisor.max_retries,
            base_delay_seconds=settings.advisor.base_delay_seconds,
            max_searches=settings.advisor.max_searches,
        )
        logger.info("✓ Sentiment advisor ready")
    else:
        errors["advisor"] = "Sentiment advisor unavailable: ANTHROPIC_API_KEY is not configured."

    manager = JournalManager(settings=settings.journal, store=journal_store)

    return AppContext(
        settings=settings,
        manager=manager,
        journal_store=journal_store,
        settings_store=settings_store,
        advisor=advisor,
        errors=errors,
    )
