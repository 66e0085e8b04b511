"""Typed events emitted by renderers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .models import PreferenceFlag, SortMode


@dataclass(frozen=True)
class AssetClicked:
    asset_id: str


@dataclass(frozen=True)
class SearchSubmitted:
    term: str


@dataclass(frozen=True)
class SortSelected:
    mode: SortMode


@dataclass(frozen=True)
class PreferenceToggled:
    flag: PreferenceFlag
    value: bool | None = None  # None flips the current value


@dataclass(frozen=True)
class ComparisonRemoveClicked:
    asset_id: str


Event = Union[
    AssetClicked,
    SearchSubmitted,
    SortSelected,
    PreferenceToggled,
    ComparisonRemoveClicked,
]
