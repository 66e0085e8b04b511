"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from crypto_tracker.config import (
    AppConfig,
    ComparisonConfig,
    MarketDataConfig,
    NotificationsConfig,
    PreferenceDefaultsConfig,
    SchedulerConfig,
    StorageConfig,
)
from crypto_tracker.models import AssetRecord
from crypto_tracker.state import AppState
from crypto_tracker.storage import MemoryStore
from crypto_tracker.stores import PreferenceStore, SelectionStore


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_market_data_config() -> MarketDataConfig:
    return MarketDataConfig(
        base_url="https://api.example.com/api/v3",
        vs_currency="usd",
        per_page=100,
        request_timeout=10,
    )


@pytest.fixture()
def sample_app_config(sample_market_data_config: MarketDataConfig) -> AppConfig:
    return AppConfig(
        market_data=sample_market_data_config,
        scheduler=SchedulerConfig(min_interval_seconds=60.0),
        comparison=ComparisonConfig(max_selected=5),
        storage=StorageConfig(backend="memory"),
        preferences=PreferenceDefaultsConfig(),
        notifications=NotificationsConfig(history_size=50),
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


def make_record(
    asset_id: str,
    name: str | None = None,
    symbol: str | None = None,
    price: float | None = 1.0,
    change: float | None = 0.0,
    market_cap: float | None = 1_000_000.0,
    volume: float | None = 10_000.0,
) -> AssetRecord:
    return AssetRecord(
        id=asset_id,
        name=name or asset_id.title(),
        symbol=symbol or asset_id[:3],
        image=f"https://img.example.com/{asset_id}.png",
        current_price=price,
        price_change_percentage_24h=change,
        market_cap=market_cap,
        total_volume=volume,
    )


@pytest.fixture()
def record_factory():
    return make_record


@pytest.fixture()
def sample_records() -> list[AssetRecord]:
    return [
        make_record("bitcoin", "Bitcoin", "btc", 65000.0, 1.5, 1.28e12, 3.1e10),
        make_record("ethereum", "Ethereum", "eth", 3500.0, -0.8, 4.2e11, 1.5e10),
        make_record("tether", "Tether", "usdt", 1.0, 0.01, 1.1e11, 5.0e10),
        make_record("solana", "Solana", "sol", 150.0, None, 6.8e10, 2.5e9),
        make_record("dogecoin", "Dogecoin", "doge", 0.12, 4.2, 1.7e10, 9.0e8),
        make_record("shiba-inu", "Shiba Inu", "shib", 0.000023, -2.3, None, 4.0e8),
        make_record("cardano", "Cardano", "ada", 0.45, 0.0, 1.6e10, None),
    ]


@pytest.fixture()
def sample_api_payload() -> list[dict]:
    return [
        {
            "id": "bitcoin",
            "symbol": "btc",
            "name": "Bitcoin",
            "image": "https://img.example.com/bitcoin.png",
            "current_price": 65000,
            "market_cap": 1280000000000,
            "total_volume": 31000000000,
            "price_change_percentage_24h": 1.5,
        },
        {
            "id": "ethereum",
            "symbol": "eth",
            "name": "Ethereum",
            "image": "https://img.example.com/ethereum.png",
            "current_price": 3500.12,
            "market_cap": 420000000000,
            "total_volume": 15000000000,
            "price_change_percentage_24h": None,
        },
    ]


# ---------------------------------------------------------------------------
# State fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def renderer() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def app_state(memory_store: MemoryStore, renderer: MagicMock) -> AppState:
    return AppState(
        selection=SelectionStore(memory_store),
        preferences=PreferenceStore(memory_store),
        renderers=[renderer],
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    market_data:
      base_url: "https://api.example.com/api/v3/"
      vs_currency: USD
      per_page: 50
      request_timeout: 15
      api_key: "key-123"
    scheduler:
      min_interval_seconds: 90
      retry_backoff_factor: 2.0
      max_retry_delay_seconds: 600
    comparison:
      max_selected: 3
    storage:
      backend: memory
    preferences:
      show_change: true
      show_market_cap: false
      show_volume: true
      dark_mode: true
    notifications:
      history_size: 20
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
