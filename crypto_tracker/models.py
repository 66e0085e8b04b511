"""Data models — all frozen (immutable)."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class AssetRecord:
    """One asset's market snapshot as returned by the market-data source."""

    id: str
    name: str
    symbol: str
    image: str = ""
    current_price: float | None = None
    price_change_percentage_24h: float | None = None
    market_cap: float | None = None
    total_volume: float | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> AssetRecord:
        """Build a record from one ``/coins/markets`` JSON object."""
        asset_id = raw.get("id")
        if not asset_id:
            raise ValueError(f"Asset record without id: {raw!r}")
        return cls(
            id=str(asset_id),
            name=str(raw.get("name") or asset_id),
            symbol=str(raw.get("symbol") or ""),
            image=str(raw.get("image") or ""),
            current_price=_optional_float(raw.get("current_price")),
            price_change_percentage_24h=_optional_float(
                raw.get("price_change_percentage_24h")
            ),
            market_cap=_optional_float(raw.get("market_cap")),
            total_volume=_optional_float(raw.get("total_volume")),
        )


@dataclass(frozen=True)
class SelectionEntry:
    """Reduced, persisted projection of a pinned asset."""

    id: str
    name: str
    symbol: str
    image: str = ""

    @classmethod
    def from_record(cls, record: AssetRecord) -> SelectionEntry:
        return cls(id=record.id, name=record.name, symbol=record.symbol, image=record.image)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SelectionEntry:
        if not isinstance(raw, dict) or not raw.get("id"):
            raise ValueError(f"Invalid selection entry: {raw!r}")
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or raw["id"]),
            symbol=str(raw.get("symbol") or ""),
            image=str(raw.get("image") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "symbol": self.symbol, "image": self.image}


class PreferenceFlag(str, Enum):
    SHOW_CHANGE = "show_change"
    SHOW_MARKET_CAP = "show_market_cap"
    SHOW_VOLUME = "show_volume"
    DARK_MODE = "dark_mode"


# Persisted key names for each flag.
_PREFERENCE_KEYS: dict[PreferenceFlag, str] = {
    PreferenceFlag.SHOW_CHANGE: "show24hChange",
    PreferenceFlag.SHOW_MARKET_CAP: "showMarketCap",
    PreferenceFlag.SHOW_VOLUME: "showVolume",
    PreferenceFlag.DARK_MODE: "enableDarkMode",
}


@dataclass(frozen=True)
class Preferences:
    """User display toggles."""

    show_change: bool = True
    show_market_cap: bool = True
    show_volume: bool = True
    dark_mode: bool = False

    def get(self, flag: PreferenceFlag) -> bool:
        return getattr(self, flag.value)

    def with_flag(self, flag: PreferenceFlag, value: bool) -> Preferences:
        return replace(self, **{flag.value: bool(value)})

    def to_dict(self) -> dict[str, bool]:
        return {key: self.get(flag) for flag, key in _PREFERENCE_KEYS.items()}

    @classmethod
    def from_dict(cls, raw: dict[str, Any], defaults: Preferences | None = None) -> Preferences:
        """Restore persisted preferences; missing keys keep ``defaults``."""
        prefs = defaults or cls()
        for flag, key in _PREFERENCE_KEYS.items():
            if key in raw and raw[key] is not None:
                prefs = prefs.with_flag(flag, bool(raw[key]))
        return prefs


class SortMode(str, Enum):
    MARKET_CAP_DESC = "market_cap_desc"
    MARKET_CAP_ASC = "market_cap_asc"
    PRICE_DESC = "price_desc"
    PRICE_ASC = "price_asc"
    CHANGE_DESC = "change_desc"
    CHANGE_ASC = "change_asc"

    @property
    def field(self) -> str:
        """AssetRecord attribute this mode orders by."""
        return _SORT_FIELDS[self.value.rsplit("_", 1)[0]]

    @property
    def descending(self) -> bool:
        return self.value.endswith("_desc")

    @property
    def inverse(self) -> SortMode:
        base, direction = self.value.rsplit("_", 1)
        return SortMode(f"{base}_{'asc' if direction == 'desc' else 'desc'}")


_SORT_FIELDS = {
    "market_cap": "market_cap",
    "price": "current_price",
    "change": "price_change_percentage_24h",
}


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A transient user-facing notice."""

    message: str
    severity: Severity = Severity.INFO


class LoadingPhase(str, Enum):
    INITIAL = "initial"  # blocking, full-screen
    REFRESH = "refresh"  # non-blocking, inline
    IDLE = "idle"


@dataclass(frozen=True)
class LoadingState:
    phase: LoadingPhase = LoadingPhase.IDLE
    message: str = ""
    error: bool = False
