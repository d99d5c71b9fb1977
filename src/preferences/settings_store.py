"""Per-user stores for saved default settings."""
import json
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import aiofiles
from pydantic import ValidationError

from src.journal.models import StoreUnavailableError
from src.journal.settings import JournalSettings
from src.journal.trade_store import validate_user_id
from src.preferences.models import DefaultSettings

logger = logging.getLogger(__name__)

SettingsListener = Callable[[DefaultSettings | None], None]


class SettingsStore(ABC):
    """Abstract single-document-per-user settings store."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[SettingsListener]] = defaultdict(list)

    @abstractmethod
    async def get(self, user_id: str) -> DefaultSettings | None:
        """Return the user's saved defaults, or None if never saved."""
        pass

    @abstractmethod
    async def upsert(self, user_id: str, settings: DefaultSettings) -> DefaultSettings:
        """Merge settings into the user's document and return the result."""
        pass

    def subscribe(self, user_id: str, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener for changes to the user's defaults."""
        self._listeners[user_id].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[user_id]:
                self._listeners[user_id].remove(listener)

        return unsubscribe

    def _notify(self, user_id: str, settings: DefaultSettings | None) -> None:
        for listener in list(self._listeners.get(user_id, [])):
            listener(settings)


class JsonSettingsStore(SettingsStore):
    """Settings store keeping one JSON document per user.

    Stores settings at: {data_dir}/{user_id}/{settings_file}
    """

    def __init__(
        self,
        settings: JournalSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._data_dir = Path(settings.data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _get_file_path(self, user_id: str) -> Path:
        return self._data_dir / validate_user_id(user_id) / self._settings.settings_file

    async def _read_document(self, user_id: str) -> dict:
        file_path = self._get_file_path(user_id)
        if not file_path.exists():
            return {}

        async with aiofiles.open(file_path, "r") as f:
            content = await f.read()
            return json.loads(content) if content.strip() else {}

    async def get(self, user_id: str) -> DefaultSettings | None:
        """Return the user's saved defaults.

        Raises:
            StoreUnavailableError: If the stored document cannot be parsed.
        """
        try:
            document = await self._read_document(user_id)
            return DefaultSettings.model_validate(document) if document else None
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to load default settings for {user_id}: {e}")
            raise StoreUnavailableError("Failed to load default settings.") from e

    async def upsert(self, user_id: str, settings: DefaultSettings) -> DefaultSettings:
        """Merge the non-empty fields into the stored document."""
        document = await self._read_document(user_id)
        document.update(settings.model_dump(mode="json", exclude_none=True))
        document["updated_at"] = self._clock().isoformat()

        file_path = self._get_file_path(user_id)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(file_path, "w") as f:
            await f.write(json.dumps(document, indent=2))

        saved = DefaultSettings.model_validate(document)
        logger.info(f"Saved default settings for {user_id}")
        self._notify(user_id, saved)
        return saved
