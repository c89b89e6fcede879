"""
Entry Store - the date-keyed, date-ordered measurement history.

The whole history lives in one JSON blob under a single storage key. Every
mutation is a full read-modify-write: load, change, re-sort, persist.
"""

import asyncio
import datetime as dt
import json
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from .interface import StorageInterface
from .local_storage import LocalStorage
from ..config import settings
from ..models.measurement import MeasurementEntry

logger = logging.getLogger(__name__)

_ENTRY_LIST = TypeAdapter(List[MeasurementEntry])

# November 2025 InBody scan
NOVEMBER_2025 = MeasurementEntry(
    date=dt.date(2025, 11, 16),
    weight=74.2,
    body_fat_percent=24.8,
    body_fat_mass=18.4,
    muscle_mass=31.3,
    visceral_fat=8,
    bmi=22.9,
    inbody_score=68,
    waist_hip_ratio=0.97,
)

# December 2025 InBody scan
DECEMBER_2025 = MeasurementEntry(
    date=dt.date(2025, 12, 30),
    weight=73.3,
    body_fat_percent=23.1,
    body_fat_mass=17.0,
    muscle_mass=31.5,
    visceral_fat=7,
    bmi=22.6,
    inbody_score=69,
    waist_hip_ratio=0.91,
)

SEED_ENTRIES = (NOVEMBER_2025, DECEMBER_2025)

# Applied on every startup; overwrites whatever is stored for 2025-11-16.
CANONICAL_CORRECTION = NOVEMBER_2025


class StorageError(Exception):
    """Raised when the entry history cannot be persisted."""


def _by_date(entry: MeasurementEntry) -> dt.date:
    return entry.date


class EntryStore:
    """
    Owns the measurement history.
    At most one entry per date; always sorted ascending by date.
    """

    def __init__(self, storage: StorageInterface, key: Optional[str] = None):
        """
        Initialize entry store.

        Args:
            storage: StorageInterface implementation (typically LocalStorage)
            key: Storage key of the history blob, defaults to settings.entries_storage_key
        """
        self.storage = storage
        self.key = key or settings.entries_storage_key
        # Serializes read-modify-write cycles between concurrent requests
        self._lock = asyncio.Lock()

    async def _load(self) -> List[MeasurementEntry]:
        """Load the history, failing closed to an empty list on malformed data."""
        content = await self.storage.load(self.key)
        if content is None:
            return []

        try:
            entries = _ENTRY_LIST.validate_json(content)
        except ValidationError as e:
            logger.error(
                f"Stored entry history under '{self.key}' is malformed, treating it as empty: "
                f"{e.error_count()} validation error(s)",
                extra={"extra_fields": {"storage_key": self.key, "errors": e.errors(include_url=False)}}
            )
            await self.storage.save(f"{self.key}.corrupt", content)
            return []

        unique = {}
        for entry in entries:
            unique[entry.date] = entry
        if len(unique) != len(entries):
            logger.warning(f"Dropped {len(entries) - len(unique)} duplicate-date entries from '{self.key}'")

        return sorted(unique.values(), key=_by_date)

    async def _save(self, entries: List[MeasurementEntry]) -> None:
        content = json.dumps([entry.to_storage() for entry in entries], indent=2, ensure_ascii=False)
        if not await self.storage.save(self.key, content):
            raise StorageError(f"Failed to persist entry history under '{self.key}'")

    async def all(self) -> List[MeasurementEntry]:
        """
        Get the history.

        Returns:
            List[MeasurementEntry]: Entries in ascending date order
        """
        return await self._load()

    async def upsert(self, entry: MeasurementEntry) -> List[MeasurementEntry]:
        """
        Add an entry, replacing any existing entry for the same date.

        Args:
            entry: Complete measurement record

        Returns:
            List[MeasurementEntry]: Updated history in ascending date order
        """
        async with self._lock:
            entries = await self._load()
            index = next((i for i, e in enumerate(entries) if e.date == entry.date), None)
            if index is None:
                entries.append(entry)
                logger.info(f"Added entry for {entry.date.isoformat()}")
            else:
                entries[index] = entry
                logger.info(f"Replaced entry for {entry.date.isoformat()}")
            entries.sort(key=_by_date)
            await self._save(entries)
            return entries

    async def delete(self, date: dt.date) -> List[MeasurementEntry]:
        """
        Delete the entry for a date. Unknown dates are a no-op.

        Args:
            date: Date of the entry to remove

        Returns:
            List[MeasurementEntry]: Remaining history in ascending date order
        """
        async with self._lock:
            entries = await self._load()
            remaining = [e for e in entries if e.date != date]
            if len(remaining) != len(entries):
                logger.info(f"Deleted entry for {date.isoformat()}")
            await self._save(remaining)
            return remaining

    async def ensure_seeded(self) -> List[MeasurementEntry]:
        """
        Seed an empty history, or apply the 2025-11-16 correction to an existing one.

        Idempotent: repeated runs converge to the same stored state.

        Returns:
            List[MeasurementEntry]: History after seeding/migration
        """
        async with self._lock:
            entries = await self._load()
            if not entries:
                entries = list(SEED_ENTRIES)
                logger.info(f"Seeded empty history with {len(entries)} entries")
            else:
                index = next(
                    (i for i, e in enumerate(entries) if e.date == CANONICAL_CORRECTION.date), None
                )
                if index is None:
                    entries.append(CANONICAL_CORRECTION)
                else:
                    entries[index] = CANONICAL_CORRECTION
                logger.debug(f"Applied correction for {CANONICAL_CORRECTION.date.isoformat()}")
            entries.sort(key=_by_date)
            await self._save(entries)
            return entries


# Global entry store instance
_entry_store: Optional[EntryStore] = None


def init_entry_store(storage: Optional[StorageInterface] = None) -> EntryStore:
    """
    Initialize the global entry store instance.

    Args:
        storage: Optional StorageInterface implementation. If None, creates LocalStorage.
    """
    global _entry_store
    if storage is None:
        storage = LocalStorage(settings.local_storage_path)
    _entry_store = EntryStore(storage)
    return _entry_store


def get_entry_store() -> EntryStore:
    """
    Get the global entry store instance.

    Returns:
        EntryStore: Global entry store instance

    Raises:
        RuntimeError: If the entry store has not been initialized
    """
    if _entry_store is None:
        raise RuntimeError("Entry store not initialized. Call init_entry_store() first.")
    return _entry_store
