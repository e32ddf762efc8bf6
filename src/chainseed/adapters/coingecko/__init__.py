"""CoinGecko market-data record source."""

from __future__ import annotations

from .client import CoinGeckoAPIError, CoinGeckoClient, should_cache_payload
from .source import CoinGeckoRecordSource

__all__ = ["CoinGeckoAPIError", "CoinGeckoClient", "CoinGeckoRecordSource", "should_cache_payload"]
