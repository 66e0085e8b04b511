"""Application state shared by the scheduler and the controller."""
from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from .dataset import DataSet, search, sort_records
from .interfaces.renderer import Renderer
from .models import (
    AssetRecord,
    LoadingState,
    Notification,
    Preferences,
    SelectionEntry,
    Severity,
    SortMode,
)
from .stores import PreferenceStore, SelectionStore
from .views import AssetCard, build_comparison_cards, build_list_cards

logger = logging.getLogger(__name__)


class AppState:
    """Owns the snapshot, pinned assets, preferences and view state.

    All mutation goes through this object; renderers are pushed fresh cards
    after every change.
    """

    def __init__(
        self,
        selection: SelectionStore,
        preferences: PreferenceStore,
        renderers: Iterable[Renderer] = (),
        history_size: int = 50,
    ) -> None:
        self.dataset = DataSet()
        self._selection = selection
        self._preferences = preferences
        self._renderers: list[Renderer] = list(renderers)
        self._notifications: deque[Notification] = deque(maxlen=history_size)
        self._loading = LoadingState()
        self.search_term = ""
        self.sort_mode: SortMode | None = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def selection(self) -> SelectionStore:
        return self._selection

    @property
    def selected_entries(self) -> tuple[SelectionEntry, ...]:
        return self._selection.entries

    @property
    def preference_store(self) -> PreferenceStore:
        return self._preferences

    @property
    def preferences(self) -> Preferences:
        return self._preferences.preferences

    @property
    def dark_mode(self) -> bool:
        return self._preferences.preferences.dark_mode

    @property
    def loading(self) -> LoadingState:
        return self._loading

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    def drain_notifications(self) -> list[Notification]:
        """Return and clear the notification history."""
        items = list(self._notifications)
        self._notifications.clear()
        return items

    def add_renderer(self, renderer: Renderer) -> None:
        self._renderers.append(renderer)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def main_list(self) -> list[AssetRecord]:
        """Snapshot filtered by the search term, then ordered by the sort mode."""
        records = search(self.dataset.records, self.search_term)
        if self.sort_mode is not None:
            records = sort_records(records, self.sort_mode)
        return records

    def list_cards(self) -> list[AssetCard]:
        return build_list_cards(self.main_list(), self._selection.ids, self.preferences)

    def comparison_cards(self) -> list[AssetCard]:
        return build_comparison_cards(self._selection.entries, self.dataset, self.preferences)

    # ------------------------------------------------------------------
    # Mutation + renderer dispatch
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Restore persisted selection and preferences."""
        self._preferences.load()
        self._selection.load()
        logger.info(
            "Restored %d pinned assets, dark mode %s",
            len(self._selection),
            "on" if self.dark_mode else "off",
        )
        self._dispatch("apply_theme", self.dark_mode)

    def replace_snapshot(self, records: Iterable[AssetRecord]) -> None:
        self.dataset.replace(records)
        self.render()

    def notify(self, message: str, severity: Severity = Severity.INFO) -> Notification:
        notification = Notification(message=message, severity=severity)
        self._notifications.append(notification)
        logger.debug("Notice [%s]: %s", severity.value, message)
        self._dispatch("show_notification", notification)
        return notification

    def set_loading(self, loading: LoadingState) -> None:
        self._loading = loading
        self._dispatch("show_loading", loading)

    def render(self) -> None:
        self.render_list()
        self.render_comparison()

    def render_list(self) -> None:
        self._dispatch("render_list", self.list_cards())

    def render_comparison(self) -> None:
        self._dispatch("render_comparison", self.comparison_cards())

    def apply_theme(self) -> None:
        self._dispatch("apply_theme", self.dark_mode)

    def _dispatch(self, method: str, *args) -> None:
        for renderer in self._renderers:
            try:
                getattr(renderer, method)(*args)
            except Exception as e:
                logger.error("Renderer %s failed: %s", method, e)
