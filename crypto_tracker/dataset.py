"""In-memory market snapshot plus search and sort over it."""
from __future__ import annotations

import logging
from typing import Iterable

from .models import AssetRecord, SortMode

logger = logging.getLogger(__name__)


class DataSet:
    """Latest full snapshot of asset records, replaced wholesale on each fetch."""

    def __init__(self, records: Iterable[AssetRecord] = ()) -> None:
        self._records: tuple[AssetRecord, ...] = ()
        self._by_id: dict[str, AssetRecord] = {}
        self.replace(records)

    def replace(self, records: Iterable[AssetRecord]) -> None:
        records = tuple(records)
        by_id: dict[str, AssetRecord] = {}
        unique: list[AssetRecord] = []
        for record in records:
            if record.id in by_id:
                logger.warning("Duplicate asset id '%s' in snapshot, keeping first", record.id)
                continue
            by_id[record.id] = record
            unique.append(record)
        self._records = tuple(unique)
        self._by_id = by_id

    @property
    def records(self) -> tuple[AssetRecord, ...]:
        return self._records

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._by_id)

    @property
    def is_empty(self) -> bool:
        return not self._records

    def get(self, asset_id: str) -> AssetRecord | None:
        return self._by_id.get(asset_id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._by_id


def search(records: Iterable[AssetRecord], term: str) -> list[AssetRecord]:
    """Case-insensitive substring match on name or symbol. Empty term is identity."""
    needle = term.strip().lower()
    if not needle:
        return list(records)
    return [
        r for r in records
        if needle in r.name.lower() or needle in r.symbol.lower()
    ]


def _sort_key(record: AssetRecord, field: str) -> tuple[bool, float, str]:
    # Absent values order below every present value; id breaks ties.
    value = getattr(record, field)
    if value is None:
        return (False, 0.0, record.id)
    return (True, value, record.id)


def sort_records(records: Iterable[AssetRecord], mode: SortMode) -> list[AssetRecord]:
    """Return ``records`` in the total order defined by ``mode``."""
    return sorted(
        records,
        key=lambda r: _sort_key(r, mode.field),
        reverse=mode.descending,
    )
