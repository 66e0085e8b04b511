"""CoinGecko market-data source."""
import logging
import ssl

import aiohttp
import certifi

from ..config import MarketDataConfig
from ..interfaces.market_data import MarketDataError
from ..models import AssetRecord

logger = logging.getLogger(__name__)


class CoinGeckoClient:
    """Fetch a page of coin market snapshots from the CoinGecko REST API."""

    def __init__(self, config: MarketDataConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.vs_currency = config.vs_currency
        self.per_page = config.per_page
        self.request_timeout = config.request_timeout
        self.api_key = config.api_key

    @property
    def markets_url(self) -> str:
        return f"{self.base_url}/coins/markets"

    def _params(self) -> dict[str, str]:
        return {
            "vs_currency": self.vs_currency,
            "order": "market_cap_desc",
            "per_page": str(self.per_page),
            "page": "1",
            "sparkline": "false",
            "price_change_percentage": "24h",
        }

    def _headers(self) -> dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    async def fetch_markets(self) -> list[AssetRecord]:
        """Fetch the configured page of assets, ordered by market cap.

        Raises:
            MarketDataError: on transport errors, timeouts, non-200 responses
                or a body that is not a list of asset objects.
        """
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)

        try:
            async with aiohttp.ClientSession(connector=connector, timeout=timeout) as session:
                async with session.get(
                    self.markets_url, params=self._params(), headers=self._headers()
                ) as response:
                    if response.status != 200:
                        raise MarketDataError(f"HTTP error! Status: {response.status}")
                    data = await response.json()
        except MarketDataError:
            raise
        except Exception as e:
            raise MarketDataError(str(e) or type(e).__name__) from e

        if not isinstance(data, list):
            raise MarketDataError("Unexpected response body: expected a list of assets")

        records: list[AssetRecord] = []
        for item in data:
            try:
                records.append(AssetRecord.from_api(item))
            except (ValueError, AttributeError) as e:
                logger.warning("Skipping malformed asset record: %s", e)

        logger.info("Fetched %d assets from CoinGecko", len(records))
        return records
