"""Persisted selection and preference stores."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from .interfaces.storage import KeyValueStore
from .models import AssetRecord, PreferenceFlag, Preferences, SelectionEntry

logger = logging.getLogger(__name__)

SELECTION_KEY = "comparisonCoins"
PREFERENCES_KEY = "userPreferences"

MAX_SELECTED = 5


class SelectionLimitError(Exception):
    """Raised when pinning an asset would exceed the comparison limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"You can compare a maximum of {limit} cryptocurrencies at once")
        self.limit = limit


@dataclass(frozen=True)
class SelectionChange:
    entry: SelectionEntry
    added: bool


class SelectionStore:
    """Ordered set of pinned assets, persisted on every mutation."""

    def __init__(self, store: KeyValueStore, max_selected: int = MAX_SELECTED) -> None:
        self._store = store
        self.max_selected = max_selected
        self._entries: list[SelectionEntry] = []

    @property
    def entries(self) -> tuple[SelectionEntry, ...]:
        return tuple(self._entries)

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(e.id for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, asset_id: str) -> bool:
        return any(e.id == asset_id for e in self._entries)

    def load(self) -> None:
        """Restore pinned assets from storage; bad data is skipped."""
        self._entries = []
        raw = self._store.get(SELECTION_KEY)
        if raw is None:
            return

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Discarding unreadable selection data: %s", e)
            return
        if not isinstance(items, list):
            logger.warning("Discarding selection data that is not a list")
            return

        for item in items:
            try:
                entry = SelectionEntry.from_dict(item)
            except ValueError as e:
                logger.warning("Skipping selection entry: %s", e)
                continue
            if self.contains(entry.id):
                continue
            if len(self._entries) >= self.max_selected:
                logger.warning(
                    "Stored selection exceeds %d entries, dropping the rest",
                    self.max_selected,
                )
                break
            self._entries.append(entry)

        logger.debug("Loaded %d pinned assets", len(self._entries))

    def save(self) -> None:
        payload = json.dumps([e.to_dict() for e in self._entries])
        self._store.set(SELECTION_KEY, payload)

    def toggle(self, record: AssetRecord) -> SelectionChange:
        """Unpin ``record`` if pinned, else pin it.

        Raises:
            SelectionLimitError: pinning would exceed ``max_selected``.
        """
        removed = self.remove(record.id)
        if removed is not None:
            return SelectionChange(entry=removed, added=False)

        if len(self._entries) >= self.max_selected:
            raise SelectionLimitError(self.max_selected)

        entry = SelectionEntry.from_record(record)
        self._entries.append(entry)
        self.save()
        return SelectionChange(entry=entry, added=True)

    def remove(self, asset_id: str) -> SelectionEntry | None:
        """Unpin by id. Returns the removed entry, or None if it was not pinned."""
        for index, entry in enumerate(self._entries):
            if entry.id == asset_id:
                del self._entries[index]
                self.save()
                return entry
        return None


class PreferenceStore:
    """User display preferences, persisted on every change."""

    def __init__(self, store: KeyValueStore, defaults: Preferences | None = None) -> None:
        self._store = store
        self.defaults = defaults or Preferences()
        self._preferences = self.defaults

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    def load(self) -> None:
        self._preferences = self.defaults
        raw = self._store.get(PREFERENCES_KEY)
        if raw is None:
            return
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Discarding unreadable preferences: %s", e)
            return
        if not isinstance(data, dict):
            logger.warning("Discarding preferences that are not an object")
            return
        self._preferences = Preferences.from_dict(data, self.defaults)

    def save(self) -> None:
        self._store.set(PREFERENCES_KEY, json.dumps(self._preferences.to_dict()))

    def set(self, flag: PreferenceFlag, value: bool) -> Preferences:
        self._preferences = self._preferences.with_flag(flag, value)
        self.save()
        return self._preferences
