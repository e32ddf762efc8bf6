"""Record source built from CoinGecko market data."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from chainseed.domain.errors import RecordSourceError

from .client import CoinGeckoAPIError
from .schema import CoinGeckoCoin
from .translator import chains_for, translate_asset, translate_deployments

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chainseed.domain.model import AssetCandidate, ChainCandidate, DeploymentCandidate

    from .schema import CoinGeckoMarket

log = getLogger(__name__)


class MarketDataClient(Protocol):
    def fetch_top_markets(self, *, limit: int) -> list[CoinGeckoMarket]: ...

    def fetch_coins(self, coin_ids: Sequence[str]) -> dict[str, CoinGeckoCoin]: ...


class CoinGeckoRecordSource:
    """Top-N CoinGecko assets, their deployments and the built-in chain table.

    Coin details are fetched once and shared by the asset and deployment
    loaders, so a full run costs one markets call plus one call per coin.
    """

    def __init__(
        self,
        client: MarketDataClient,
        *,
        limit: int,
        chains: Sequence[str],
    ) -> None:
        if limit <= 0:
            raise ValueError(f"CoinGecko asset limit must be positive, got {limit}")
        self._client = client
        self._limit = limit
        self._chains = tuple(chains)
        self._coins: list[CoinGeckoCoin] | None = None

    def load_chains(self) -> list[ChainCandidate]:
        return chains_for(self._chains)

    def load_assets(self) -> list[AssetCandidate]:
        assets = [translate_asset(coin) for coin in self._load_coins()]
        return [asset for asset in assets if asset is not None]

    def load_deployments(self) -> list[DeploymentCandidate]:
        return [
            deployment
            for coin in self._load_coins()
            for deployment in translate_deployments(coin, chain_ids=self._chains)
        ]

    def _load_coins(self) -> list[CoinGeckoCoin]:
        if self._coins is not None:
            return self._coins
        try:
            markets = self._client.fetch_top_markets(limit=self._limit)
            details = self._client.fetch_coins([market.id for market in markets])
        except CoinGeckoAPIError as exc:
            raise RecordSourceError(f"CoinGecko fetch failed: {exc}") from exc

        missing = [market.id for market in markets if market.id not in details]
        if missing:
            log.warning(
                "Using market summaries without deployments for %s coins: %s",
                len(missing),
                ", ".join(missing),
            )
        self._coins = [
            details.get(market.id) or CoinGeckoCoin.from_market(market) for market in markets
        ]
        return self._coins
