"""Plain-text renderer for terminals."""
from __future__ import annotations

import sys
from typing import TextIO

from ..models import LoadingPhase, LoadingState, Notification, Severity
from ..views import AssetCard

_SEVERITY_ICONS = {
    Severity.INFO: "ℹ️",
    Severity.SUCCESS: "✅",
    Severity.ERROR: "🚨",
}


class ConsoleRenderer:
    """Prints the main list, comparison panel and notices to a stream."""

    def __init__(self, stream: TextIO | None = None, show_list: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.show_list = show_list
        self.dark_mode = False

    def _write(self, text: str) -> None:
        print(text, file=self.stream)

    @staticmethod
    def format_card(card: AssetCard) -> str:
        marker = "★" if card.selected else " "
        parts = [f"{marker} {card.name} ({card.symbol.upper()})", card.price]
        if card.change is not None:
            parts.append(card.change)
        if card.market_cap is not None:
            parts.append(f"Market Cap: ${card.market_cap}")
        if card.volume is not None:
            parts.append(f"Volume: ${card.volume}")
        return " · ".join(parts)

    def render_list(self, cards: list[AssetCard]) -> None:
        if not self.show_list:
            return
        self._write("━━ Cryptocurrencies ━━")
        if not cards:
            self._write("No cryptocurrencies found")
            return
        for card in cards:
            self._write(self.format_card(card))

    def render_comparison(self, cards: list[AssetCard]) -> None:
        self._write("━━ Comparison ━━")
        if not cards:
            self._write("Select cryptocurrencies to compare")
            return
        for card in cards:
            self._write(self.format_card(card))

    def show_notification(self, notification: Notification) -> None:
        icon = _SEVERITY_ICONS.get(notification.severity, "")
        self._write(f"{icon} {notification.message}")

    def show_loading(self, state: LoadingState) -> None:
        if state.phase is LoadingPhase.IDLE or not state.message:
            return
        if state.phase is LoadingPhase.INITIAL:
            self._write(f"[{state.message}]")
        else:
            self._write(state.message)

    def apply_theme(self, dark_mode: bool) -> None:
        self.dark_mode = dark_mode
