"""Market-data sources."""
from ..interfaces.market_data import MarketDataError
from .coingecko import CoinGeckoClient

__all__ = ["CoinGeckoClient", "MarketDataError"]
