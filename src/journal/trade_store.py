# src/journal/trade_store.py
"""Per-user keyed stores for journaled trades."""
import json
import logging
import re
import uuid
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import aiofiles

from src.journal.models import (
    MalformedRecordError,
    NewTrade,
    RecordNotFoundError,
    SENTIMENT_NOT_AVAILABLE,
    StoreUnavailableError,
    TradeRecord,
    TradeResult,
)
from src.journal.pnl import chronological
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)

RecordsListener = Callable[[list[TradeRecord]], None]

_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

_NUMERIC_FIELDS = (
    "max_shares",
    "entry_price",
    "atr_stop_distance",
    "total_risk_amount",
    "total_cost",
    "net_risk",
    "net_gain",
    "target_r_multiple",
)


def validate_user_id(user_id: str) -> str:
    """Reject user ids that are empty or not safe as a path segment."""
    if not user_id or not _USER_ID_PATTERN.match(user_id) or user_id in (".", ".."):
        raise ValueError(f"Invalid user id: {user_id!r}")
    return user_id


def validate_new_trade(trade: NewTrade) -> None:
    """Check a trade has every field needed to become a record.

    Raises:
        MalformedRecordError: If a numeric field is missing or invalid.
    """
    if not isinstance(trade.ticker, str) or not trade.ticker.strip():
        raise MalformedRecordError("Trade is missing a ticker")

    for name in _NUMERIC_FIELDS:
        value = getattr(trade, name, None)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedRecordError(f"Trade field {name} must be numeric, got {value!r}")

    if not isinstance(trade.max_shares, int) or trade.max_shares <= 0:
        raise MalformedRecordError("Trade must have a positive whole number of shares")
    if trade.total_risk_amount < 0:
        raise MalformedRecordError("Trade risk amount cannot be negative")


class JournalStore(ABC):
    """Abstract keyed record store with live change notification.

    Records are keyed by (user_id, record_id). Every successful write
    notifies the user's subscribers with the full current record set.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[RecordsListener]] = defaultdict(list)

    @abstractmethod
    async def create(self, user_id: str, trade: NewTrade) -> str:
        """Store a new trade and return its id."""
        pass

    @abstractmethod
    async def update(self, user_id: str, record_id: str, result: TradeResult) -> TradeRecord:
        """Set the result of an existing record."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, record_id: str) -> None:
        """Remove a record."""
        pass

    @abstractmethod
    async def list_records(self, user_id: str) -> list[TradeRecord]:
        """Return the user's records, oldest first."""
        pass

    def subscribe(self, user_id: str, listener: RecordsListener) -> Callable[[], None]:
        """Register a listener for the user's record set.

        Returns:
            A callable that removes the listener.
        """
        if listener not in self._listeners[user_id]:
            self._listeners[user_id].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[user_id]:
                self._listeners[user_id].remove(listener)

        return unsubscribe

    def _notify(self, user_id: str, records: list[TradeRecord]) -> None:
        for listener in list(self._listeners.get(user_id, [])):
            listener(list(records))


class JsonJournalStore(JournalStore):
    """Journal store keeping one JSON document per user.

    Stores records at: {data_dir}/{user_id}/{journal_file}
    """

    def __init__(
        self,
        settings: JournalSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            settings: Journal configuration settings.
            clock: Source of creation timestamps, UTC now by default.
        """
        super().__init__()
        self._settings = settings
        self._data_dir = Path(settings.data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _get_file_path(self, user_id: str) -> Path:
        """Get the journal file path for a user."""
        return self._data_dir / validate_user_id(user_id) / self._settings.journal_file

    async def _read_entries(self, user_id: str) -> list[dict]:
        """Read raw entries from the user's journal file.

        Raises:
            StoreUnavailableError: If the document cannot be parsed into records.
        """
        file_path = self._get_file_path(user_id)
        if not file_path.exists():
            return []

        async with aiofiles.open(file_path, "r") as f:
            content = await f.read()

        try:
            entries = json.loads(content) if content.strip() else []
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse trade journal for {user_id}: {e}")
            raise StoreUnavailableError("Failed to load trade journal.") from e

        if not isinstance(entries, list):
            logger.error(f"Trade journal for {user_id} is not a list of records")
            raise StoreUnavailableError("Failed to load trade journal.")

        self._to_records(user_id, entries)
        return entries

    def _to_records(self, user_id: str, entries: list[dict]) -> list[TradeRecord]:
        """Convert raw entries to records, oldest first."""
        try:
            return chronological([self._dict_to_record(e) for e in entries])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed entry in trade journal for {user_id}: {e!r}")
            raise StoreUnavailableError("Failed to load trade journal.") from e

    async def _write_entries(self, user_id: str, entries: list[dict]) -> None:
        """Write raw entries to the user's journal file."""
        file_path = self._get_file_path(user_id)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(file_path, "w") as f:
            await f.write(json.dumps(entries, indent=2, default=str))

    def _record_to_dict(self, record: TradeRecord) -> dict:
        """Convert a TradeRecord to a dictionary for JSON storage."""
        return {
            "id": record.id,
            "ticker": record.ticker,
            "max_shares": record.max_shares,
            "entry_price": record.entry_price,
            "atr_stop_distance": record.atr_stop_distance,
            "total_risk_amount": record.total_risk_amount,
            "total_cost": record.total_cost,
            "net_risk": record.net_risk,
            "net_gain": record.net_gain,
            "target_r_multiple": record.target_r_multiple,
            "sentiment_text": record.sentiment_text,
            "result": record.result.value,
            "timestamp": record.timestamp.isoformat(),
        }

    def _dict_to_record(self, data: dict) -> TradeRecord:
        """Convert a dictionary from JSON to a TradeRecord."""
        return TradeRecord(
            id=data["id"],
            ticker=data["ticker"],
            max_shares=int(data["max_shares"]),
            entry_price=data["entry_price"],
            atr_stop_distance=data["atr_stop_distance"],
            total_risk_amount=data.get("total_risk_amount") or 0.0,
            total_cost=data.get("total_cost") or 0.0,
            net_risk=data["net_risk"],
            net_gain=data["net_gain"],
            target_r_multiple=data.get("target_r_multiple") or 0.0,
            sentiment_text=data.get("sentiment_text", SENTIMENT_NOT_AVAILABLE),
            result=TradeResult(data.get("result", TradeResult.PENDING.value)),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )

    def _next_timestamp(self, entries: list[dict]) -> datetime:
        """Creation time that never precedes an existing record."""
        now = self._clock()
        if entries:
            latest = max(datetime.fromisoformat(e["timestamp"]) for e in entries)
            if latest > now:
                return latest
        return now

    async def _publish(self, user_id: str, entries: list[dict]) -> list[TradeRecord]:
        records = self._to_records(user_id, entries)
        self._notify(user_id, records)
        return records

    async def create(self, user_id: str, trade: NewTrade) -> str:
        """Store a new trade with a fresh id and timestamp.

        Raises:
            MalformedRecordError: If the trade is missing required numbers.
        """
        validate_new_trade(trade)
        entries = await self._read_entries(user_id)

        record = TradeRecord(
            id=uuid.uuid4().hex,
            ticker=trade.ticker.strip().upper(),
            max_shares=trade.max_shares,
            entry_price=trade.entry_price,
            atr_stop_distance=trade.atr_stop_distance,
            total_risk_amount=trade.total_risk_amount,
            total_cost=trade.total_cost,
            net_risk=trade.net_risk,
            net_gain=trade.net_gain,
            target_r_multiple=trade.target_r_multiple,
            sentiment_text=trade.sentiment_text,
            result=TradeResult.PENDING,
            timestamp=self._next_timestamp(entries),
        )

        entries.append(self._record_to_dict(record))
        await self._write_entries(user_id, entries)
        logger.info(f"Journaled {record.ticker} x{record.max_shares} as {record.id}")

        await self._publish(user_id, entries)
        return record.id

    async def update(self, user_id: str, record_id: str, result: TradeResult) -> TradeRecord:
        """Overwrite the result of a record.

        Raises:
            RecordNotFoundError: If the record does not exist.
        """
        result = TradeResult(result)
        entries = await self._read_entries(user_id)

        for entry in entries:
            if entry["id"] == record_id:
                entry["result"] = result.value
                break
        else:
            raise RecordNotFoundError(record_id)

        await self._write_entries(user_id, entries)
        logger.info(f"Marked trade {record_id} as {result.value}")

        records = await self._publish(user_id, entries)
        return next(r for r in records if r.id == record_id)

    async def delete(self, user_id: str, record_id: str) -> None:
        """Remove a record.

        Raises:
            RecordNotFoundError: If the record does not exist.
        """
        entries = await self._read_entries(user_id)
        remaining = [e for e in entries if e["id"] != record_id]
        if len(remaining) == len(entries):
            raise RecordNotFoundError(record_id)

        await self._write_entries(user_id, remaining)
        logger.info(f"Deleted trade {record_id}")

        await self._publish(user_id, remaining)

    async def list_records(self, user_id: str) -> list[TradeRecord]:
        """Return the user's records, oldest first."""
        entries = await self._read_entries(user_id)
        return self._to_records(user_id, entries)
