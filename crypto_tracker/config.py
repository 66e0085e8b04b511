"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MarketDataConfig:
    base_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    per_page: int = 100
    request_timeout: int = 30
    api_key: str = ""


@dataclass(frozen=True)
class SchedulerConfig:
    min_interval_seconds: float = 60.0
    retry_backoff_factor: float = 1.0
    max_retry_delay_seconds: float = 60.0


@dataclass(frozen=True)
class ComparisonConfig:
    max_selected: int = 5


@dataclass(frozen=True)
class StorageConfig:
    backend: str = "json"
    path: str = "~/.crypto-tracker/storage.json"


@dataclass(frozen=True)
class PreferenceDefaultsConfig:
    show_change: bool = True
    show_market_cap: bool = True
    show_volume: bool = True
    dark_mode: bool = False


@dataclass(frozen=True)
class NotificationsConfig:
    history_size: int = 50


@dataclass(frozen=True)
class AppConfig:
    market_data: MarketDataConfig = field(default_factory=MarketDataConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    comparison: ComparisonConfig = field(default_factory=ComparisonConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    preferences: PreferenceDefaultsConfig = field(default_factory=PreferenceDefaultsConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_market_data(raw: dict[str, Any]) -> MarketDataConfig:
    return MarketDataConfig(
        base_url=str(raw.get("base_url", MarketDataConfig.base_url)).rstrip("/"),
        vs_currency=str(raw.get("vs_currency", "usd")).lower(),
        per_page=int(raw.get("per_page", 100)),
        request_timeout=int(raw.get("request_timeout", 30)),
        api_key=str(raw.get("api_key") or ""),
    )


def _build_scheduler(raw: dict[str, Any]) -> SchedulerConfig:
    min_interval = float(raw.get("min_interval_seconds", 60.0))
    return SchedulerConfig(
        min_interval_seconds=min_interval,
        retry_backoff_factor=float(raw.get("retry_backoff_factor", 1.0)),
        max_retry_delay_seconds=float(raw.get("max_retry_delay_seconds", min_interval)),
    )


def _build_comparison(raw: dict[str, Any]) -> ComparisonConfig:
    return ComparisonConfig(max_selected=int(raw.get("max_selected", 5)))


def _build_storage(raw: dict[str, Any]) -> StorageConfig:
    return StorageConfig(
        backend=str(raw.get("backend", "json")),
        path=str(raw.get("path", StorageConfig.path)),
    )


def _build_preferences(raw: dict[str, Any]) -> PreferenceDefaultsConfig:
    return PreferenceDefaultsConfig(
        show_change=bool(raw.get("show_change", True)),
        show_market_cap=bool(raw.get("show_market_cap", True)),
        show_volume=bool(raw.get("show_volume", True)),
        dark_mode=bool(raw.get("dark_mode", False)),
    )


def _build_notifications(raw: dict[str, Any]) -> NotificationsConfig:
    return NotificationsConfig(history_size=int(raw.get("history_size", 50)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        market_data=_build_market_data(raw.get("market_data") or {}),
        scheduler=_build_scheduler(raw.get("scheduler") or {}),
        comparison=_build_comparison(raw.get("comparison") or {}),
        storage=_build_storage(raw.get("storage") or {}),
        preferences=_build_preferences(raw.get("preferences") or {}),
        notifications=_build_notifications(raw.get("notifications") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    md = cfg.market_data
    if not md.base_url:
        raise ValueError("market_data.base_url must be set")
    if not 1 <= md.per_page <= 100:
        raise ValueError(f"market_data.per_page must be between 1 and 100, got {md.per_page}")
    if md.request_timeout <= 0:
        raise ValueError("market_data.request_timeout must be positive")

    sched = cfg.scheduler
    if sched.min_interval_seconds <= 0:
        raise ValueError("scheduler.min_interval_seconds must be positive")
    if sched.retry_backoff_factor < 1.0:
        raise ValueError("scheduler.retry_backoff_factor must be >= 1.0")
    if sched.max_retry_delay_seconds < sched.min_interval_seconds:
        raise ValueError(
            "scheduler.max_retry_delay_seconds must not be below min_interval_seconds"
        )

    if cfg.comparison.max_selected < 1:
        raise ValueError("comparison.max_selected must be at least 1")

    if cfg.storage.backend not in ("json", "memory"):
        raise ValueError(f"Unknown storage backend '{cfg.storage.backend}'")
    if cfg.storage.backend == "json" and not cfg.storage.path:
        raise ValueError("storage.path must be set for the json backend")

    if cfg.notifications.history_size < 1:
        raise ValueError("notifications.history_size must be at least 1")
