"""Command handlers for renderer events."""
from __future__ import annotations

import logging

from ..events import (
    AssetClicked,
    ComparisonRemoveClicked,
    Event,
    PreferenceToggled,
    SearchSubmitted,
    SortSelected,
)
from ..models import PreferenceFlag, Preferences, SelectionEntry, Severity, SortMode
from ..state import AppState
from ..stores import SelectionLimitError

logger = logging.getLogger(__name__)


class DashboardController:
    """Applies user commands to the application state and re-renders."""

    def __init__(self, state: AppState) -> None:
        self._state = state

    def dispatch(self, event: Event) -> None:
        """Route a renderer event to its handler."""
        if isinstance(event, AssetClicked):
            self.toggle_selection(event.asset_id)
        elif isinstance(event, SearchSubmitted):
            self.submit_search(event.term)
        elif isinstance(event, SortSelected):
            self.select_sort(event.mode)
        elif isinstance(event, PreferenceToggled):
            if event.value is None:
                self.toggle_preference(event.flag)
            else:
                self.set_preference(event.flag, event.value)
        elif isinstance(event, ComparisonRemoveClicked):
            self.remove_from_comparison(event.asset_id)
        else:
            raise TypeError(f"Unknown event: {event!r}")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_selection(self, asset_id: str) -> None:
        """Pin or unpin an asset from the main list."""
        state = self._state
        selection = state.selection

        if selection.contains(asset_id):
            removed = selection.remove(asset_id)
            state.notify(f"Removed {removed.name} from comparison", Severity.INFO)
        else:
            record = state.dataset.get(asset_id)
            if record is None:
                logger.warning("Cannot pin '%s': not in current snapshot", asset_id)
                state.notify(f"Unknown cryptocurrency '{asset_id}'", Severity.ERROR)
                return
            try:
                change = selection.toggle(record)
            except SelectionLimitError as e:
                state.notify(str(e), Severity.ERROR)
                return
            state.notify(f"Added {change.entry.name} to comparison", Severity.SUCCESS)

        state.render()

    def remove_from_comparison(self, asset_id: str) -> SelectionEntry | None:
        """Unpin an asset from the comparison panel. No-op when not pinned."""
        removed = self._state.selection.remove(asset_id)
        if removed is None:
            return None
        self._state.render()
        self._state.notify(f"Removed {removed.name} from comparison", Severity.INFO)
        return removed

    # ------------------------------------------------------------------
    # Search / sort
    # ------------------------------------------------------------------

    def submit_search(self, term: str) -> None:
        state = self._state
        state.search_term = term.strip()
        state.render_list()

        if state.search_term:
            found = len(state.main_list())
            state.notify(
                f'Found {found} cryptocurrencies matching "{state.search_term.lower()}"',
                Severity.INFO,
            )

    def select_sort(self, mode: SortMode | str) -> None:
        self._state.sort_mode = SortMode(mode)
        self._state.render_list()

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def set_preference(self, flag: PreferenceFlag | str, value: bool) -> Preferences:
        flag = PreferenceFlag(flag)
        prefs = self._state.preference_store.set(flag, value)
        if flag is PreferenceFlag.DARK_MODE:
            self._state.apply_theme()
        self._state.render()
        return prefs

    def toggle_preference(self, flag: PreferenceFlag | str) -> Preferences:
        flag = PreferenceFlag(flag)
        return self.set_preference(flag, not self._state.preferences.get(flag))
