"""Market-data source protocol — price feed abstraction."""
from typing import Protocol

from ..models import AssetRecord


class MarketDataError(Exception):
    """Any failure to obtain a usable snapshot from a market-data source."""


class MarketDataSource(Protocol):
    """Abstract interface for fetching a page of asset market snapshots.

    Implementations raise ``MarketDataError`` on any transport failure or
    non-success response.
    """

    async def fetch_markets(self) -> list[AssetRecord]: ...
