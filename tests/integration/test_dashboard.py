"""Integration tests for the dashboard composition root."""
from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from crypto_tracker.config import AppConfig, StorageConfig
from crypto_tracker.models import AssetRecord, PreferenceFlag
from crypto_tracker.render.console import ConsoleRenderer
from crypto_tracker.services.dashboard import Dashboard, build_store
from crypto_tracker.storage import JsonFileStore, MemoryStore
from crypto_tracker.stores import SELECTION_KEY


class TestBuildStore:
    def test_memory_backend(self) -> None:
        assert isinstance(build_store(AppConfig(storage=StorageConfig(backend="memory"))), MemoryStore)

    def test_json_backend(self, tmp_path: Path) -> None:
        cfg = AppConfig(storage=StorageConfig(backend="json", path=str(tmp_path / "s.json")))
        assert isinstance(build_store(cfg), JsonFileStore)


class TestDashboard:
    def test_start_restores_selection_before_first_fetch(
        self, sample_app_config: AppConfig
    ) -> None:
        store = MemoryStore({
            SELECTION_KEY: json.dumps([
                {"id": "bitcoin", "name": "Bitcoin", "symbol": "btc", "image": ""},
            ]),
            "userPreferences": json.dumps({"enableDarkMode": True}),
        })
        renderer = MagicMock()
        dashboard = Dashboard(sample_app_config, renderers=[renderer], source=AsyncMock(), store=store)

        dashboard.start()

        renderer.apply_theme.assert_called_once_with(True)
        cards = renderer.render_comparison.call_args.args[0]
        assert [c.id for c in cards] == ["bitcoin"]
        assert cards[0].loading is True

    @pytest.mark.asyncio
    async def test_run_fetches_and_resolves_comparison(
        self, sample_app_config: AppConfig, sample_records: list[AssetRecord]
    ) -> None:
        source = AsyncMock()
        source.fetch_markets.return_value = sample_records
        renderer = MagicMock()
        dashboard = Dashboard(sample_app_config, renderers=[renderer], source=source, store=MemoryStore())
        dashboard.start()
        dashboard.controller.toggle_selection("bitcoin")  # not in snapshot yet

        await dashboard.run(iterations=1)
        dashboard.controller.toggle_selection("bitcoin")

        assert [e.id for e in dashboard.state.selected_entries] == ["bitcoin"]
        cards = renderer.render_comparison.call_args.args[0]
        assert cards[0].loading is False
        assert cards[0].price == "$65,000.00"

    @pytest.mark.asyncio
    async def test_console_renderer_end_to_end(
        self, sample_app_config: AppConfig, sample_records: list[AssetRecord]
    ) -> None:
        source = AsyncMock()
        source.fetch_markets.return_value = sample_records
        out = io.StringIO()
        dashboard = Dashboard(
            sample_app_config, renderers=[ConsoleRenderer(stream=out)],
            source=source, store=MemoryStore(),
        )

        await dashboard.run(iterations=1)
        dashboard.controller.toggle_selection("ethereum")
        dashboard.controller.set_preference(PreferenceFlag.SHOW_VOLUME, False)

        text = out.getvalue()
        assert "Fetching cryptocurrency data..." in text
        assert "Bitcoin (BTC) · $65,000.00 · +1.50%" in text
        assert "Added Ethereum to comparison" in text
        assert "★ Ethereum (ETH)" in text


class TestConsoleRenderer:
    def test_empty_list(self) -> None:
        out = io.StringIO()
        ConsoleRenderer(stream=out).render_list([])
        assert "No cryptocurrencies found" in out.getvalue()

    def test_empty_comparison(self) -> None:
        out = io.StringIO()
        ConsoleRenderer(stream=out).render_comparison([])
        assert "Select cryptocurrencies to compare" in out.getvalue()

    def test_list_hidden(self) -> None:
        out = io.StringIO()
        ConsoleRenderer(stream=out, show_list=False).render_list([])
        assert out.getvalue() == ""
