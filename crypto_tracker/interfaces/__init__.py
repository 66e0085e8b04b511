"""Protocol interfaces for the crypto tracker core."""
from .market_data import MarketDataError, MarketDataSource
from .renderer import Renderer
from .storage import KeyValueStore

__all__ = ["KeyValueStore", "MarketDataError", "MarketDataSource", "Renderer"]
