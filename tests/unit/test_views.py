"""Unit tests for card projection and comparison reconciliation."""
from __future__ import annotations

from crypto_tracker.dataset import DataSet
from crypto_tracker.models import AssetRecord, Preferences, SelectionEntry
from crypto_tracker.views import (
    LOADING_PLACEHOLDER,
    build_card,
    build_comparison_cards,
    build_list_cards,
)


class TestBuildCard:
    def test_all_fields_shown(self, sample_records: list[AssetRecord]) -> None:
        card = build_card(sample_records[0], Preferences())
        assert card.price == "$65,000.00"
        assert card.change == "+1.50%"
        assert card.change_positive is True
        assert card.market_cap == "1280.00B"
        assert card.volume == "31.00B"

    def test_hidden_fields_are_none(self, sample_records: list[AssetRecord]) -> None:
        prefs = Preferences(show_change=False, show_market_cap=False, show_volume=False)
        card = build_card(sample_records[1], prefs)
        assert card.price == "$3500.00"
        assert card.change is None
        assert card.market_cap is None
        assert card.volume is None

    def test_negative_change(self, sample_records: list[AssetRecord]) -> None:
        card = build_card(sample_records[1], Preferences())
        assert card.change == "-0.80%"
        assert card.change_positive is False

    def test_missing_values_render_na(self, sample_records: list[AssetRecord]) -> None:
        card = build_card(sample_records[5], Preferences())
        assert card.market_cap == "N/A"
        solana = build_card(sample_records[3], Preferences())
        assert solana.change == "N/A"


class TestBuildListCards:
    def test_marks_selected(self, sample_records: list[AssetRecord]) -> None:
        cards = build_list_cards(sample_records, frozenset({"ethereum"}), Preferences())
        assert [c.id for c in cards if c.selected] == ["ethereum"]
        assert len(cards) == len(sample_records)


class TestBuildComparisonCards:
    def test_resolves_against_snapshot_in_pin_order(
        self, sample_records: list[AssetRecord]
    ) -> None:
        entries = [
            SelectionEntry.from_record(sample_records[2]),
            SelectionEntry.from_record(sample_records[0]),
        ]
        cards = build_comparison_cards(entries, DataSet(sample_records), Preferences())
        assert [c.id for c in cards] == ["tether", "bitcoin"]
        assert all(not c.loading for c in cards)
        assert cards[1].price == "$65,000.00"

    def test_missing_entry_becomes_loading_card(self) -> None:
        entry = SelectionEntry(id="ghost", name="Ghost", symbol="gst", image="g.png")
        cards = build_comparison_cards([entry], DataSet(), Preferences())
        assert len(cards) == 1
        assert cards[0].loading is True
        assert cards[0].name == "Ghost"
        assert cards[0].price == LOADING_PLACEHOLDER
        assert cards[0].change is None

    def test_preferences_apply_to_comparison(self, sample_records: list[AssetRecord]) -> None:
        entries = [SelectionEntry.from_record(sample_records[0])]
        prefs = Preferences(show_volume=False)
        cards = build_comparison_cards(entries, DataSet(sample_records), prefs)
        assert cards[0].volume is None
        assert cards[0].change == "+1.50%"
