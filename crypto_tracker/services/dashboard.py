"""Composition root — builds the dashboard core from configuration."""
from __future__ import annotations

import logging
from typing import Iterable

from ..config import AppConfig
from ..interfaces.market_data import MarketDataSource
from ..interfaces.renderer import Renderer
from ..interfaces.storage import KeyValueStore
from ..models import Preferences
from ..sources import CoinGeckoClient
from ..state import AppState
from ..storage import JsonFileStore, MemoryStore
from ..stores import PreferenceStore, SelectionStore
from .controller import DashboardController
from .scheduler import FetchScheduler

logger = logging.getLogger(__name__)


def build_store(config: AppConfig) -> KeyValueStore:
    if config.storage.backend == "memory":
        return MemoryStore()
    return JsonFileStore(config.storage.path)


class Dashboard:
    """Wires storage, market-data source, state, scheduler and controller."""

    def __init__(
        self,
        config: AppConfig,
        renderers: Iterable[Renderer] = (),
        source: MarketDataSource | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self._config = config
        self.store = store if store is not None else build_store(config)

        defaults = Preferences(
            show_change=config.preferences.show_change,
            show_market_cap=config.preferences.show_market_cap,
            show_volume=config.preferences.show_volume,
            dark_mode=config.preferences.dark_mode,
        )
        self.state = AppState(
            selection=SelectionStore(self.store, config.comparison.max_selected),
            preferences=PreferenceStore(self.store, defaults),
            renderers=renderers,
            history_size=config.notifications.history_size,
        )
        self.source: MarketDataSource = source or CoinGeckoClient(config.market_data)
        self.scheduler = FetchScheduler(self.source, self.state, config.scheduler)
        self.controller = DashboardController(self.state)

    def start(self) -> None:
        """Load persisted state and draw the pre-fetch view."""
        self.state.load()
        self.state.render_comparison()

    async def run(self, iterations: int | None = None) -> None:
        """Load persisted state, then poll until cancelled."""
        self.start()
        await self.scheduler.run_forever(iterations)
