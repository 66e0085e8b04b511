"""Card projections consumed by renderers.

The main list and the comparison panel are both rendered as ``AssetCard``
values. Optional fields are ``None`` when the matching preference is off, so
a renderer only has to skip ``None`` fields.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .dataset import DataSet
from .formatting import format_change, format_magnitude, format_price
from .models import AssetRecord, Preferences, SelectionEntry

LOADING_PLACEHOLDER = "Loading..."


@dataclass(frozen=True)
class AssetCard:
    id: str
    name: str
    symbol: str
    image: str
    price: str
    change: str | None = None
    change_positive: bool = True
    market_cap: str | None = None
    volume: str | None = None
    selected: bool = False
    loading: bool = False


def build_card(record: AssetRecord, prefs: Preferences, selected: bool = False) -> AssetCard:
    change_pct = record.price_change_percentage_24h
    return AssetCard(
        id=record.id,
        name=record.name,
        symbol=record.symbol,
        image=record.image,
        price=f"${format_price(record.current_price)}",
        change=format_change(change_pct) if prefs.show_change else None,
        change_positive=change_pct is None or change_pct >= 0,
        market_cap=format_magnitude(record.market_cap) if prefs.show_market_cap else None,
        volume=format_magnitude(record.total_volume) if prefs.show_volume else None,
        selected=selected,
    )


def build_loading_card(entry: SelectionEntry) -> AssetCard:
    """Card for a pinned asset that is not in the current snapshot."""
    return AssetCard(
        id=entry.id,
        name=entry.name,
        symbol=entry.symbol,
        image=entry.image,
        price=LOADING_PLACEHOLDER,
        selected=True,
        loading=True,
    )


def build_list_cards(
    records: Iterable[AssetRecord],
    selected_ids: frozenset[str],
    prefs: Preferences,
) -> list[AssetCard]:
    return [build_card(r, prefs, selected=r.id in selected_ids) for r in records]


def build_comparison_cards(
    entries: Iterable[SelectionEntry],
    dataset: DataSet,
    prefs: Preferences,
) -> list[AssetCard]:
    """Resolve each pinned entry against the snapshot, in pin order."""
    cards: list[AssetCard] = []
    for entry in entries:
        record = dataset.get(entry.id)
        if record is None:
            cards.append(build_loading_card(entry))
        else:
            cards.append(build_card(record, prefs, selected=True))
    return cards
