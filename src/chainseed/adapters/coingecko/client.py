"""CoinGecko API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from chainseed.adapters.http_resilience import ResilientClient

from .schema import CoinGeckoCoin, CoinGeckoErrorResponse, CoinGeckoMarket

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from chainseed.config.coingecko import CoinGeckoConfig
    from chainseed.config.http_resilience import ResilienceConfig
    from chainseed.domain.cancellation import CancelToken

log = getLogger(__name__)

MARKETS_PATH = "coins/markets"
MAX_MARKETS_PER_PAGE = 250

COIN_DETAIL_PARAMS: dict[str, str] = {
    "localization": "false",
    "tickers": "false",
    "market_data": "false",
    "community_data": "false",
    "developer_data": "false",
    "sparkline": "false",
}


class CoinGeckoAPIError(RuntimeError):
    """Raised when the CoinGecko API returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def should_cache_payload(payload: object) -> bool:
    """Keep rate-limit and error envelopes out of the response cache."""

    if not isinstance(payload, dict):
        return True
    try:
        CoinGeckoErrorResponse.model_validate(payload)
    except ValidationError:
        return True
    return False


class CoinGeckoClient:
    """Low-level HTTP client for the CoinGecko API."""

    def __init__(
        self,
        *,
        config: CoinGeckoConfig,
        cancel_token: CancelToken | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._cancel_token = cancel_token
        self._client_factory = client_factory or ResilientClient

    def fetch_top_markets(self, *, limit: int) -> list[CoinGeckoMarket]:
        """Return up to ``limit`` coins ordered by market capitalisation."""

        return asyncio.run(self._fetch_top_markets_async(limit=limit))

    def fetch_coins(self, coin_ids: Sequence[str]) -> dict[str, CoinGeckoCoin]:
        """Fetch details for each id; ids whose lookup fails are left out."""

        return asyncio.run(self._fetch_coins_async(coin_ids))

    async def _fetch_top_markets_async(self, *, limit: int) -> list[CoinGeckoMarket]:
        markets: list[CoinGeckoMarket] = []
        page = 1
        async with self._client_factory(self._resilience) as client:
            while len(markets) < limit:
                self._check_cancelled()
                per_page = min(limit - len(markets), MAX_MARKETS_PER_PAGE)
                payload = await self._perform_request(
                    client=client,
                    path=MARKETS_PATH,
                    params={
                        "vs_currency": "usd",
                        "order": "market_cap_desc",
                        "per_page": str(per_page),
                        "page": str(page),
                        "sparkline": "false",
                    },
                )
                if not isinstance(payload, list):
                    raise CoinGeckoAPIError("Unexpected CoinGecko markets payload")
                try:
                    batch = [CoinGeckoMarket.model_validate(item) for item in payload]
                except ValidationError as exc:
                    raise CoinGeckoAPIError(f"Invalid CoinGecko markets payload: {exc}") from exc
                markets.extend(batch)
                if len(batch) < per_page:
                    break
                page += 1

        log.info("Fetched %s CoinGecko markets", len(markets))
        return markets[:limit]

    async def _fetch_coins_async(self, coin_ids: Sequence[str]) -> dict[str, CoinGeckoCoin]:
        coins: dict[str, CoinGeckoCoin] = {}
        async with self._client_factory(self._resilience) as client:
            for position, coin_id in enumerate(coin_ids, start=1):
                self._check_cancelled()
                log.debug("Fetching CoinGecko coin %s (%s/%s)", coin_id, position, len(coin_ids))
                try:
                    payload = await self._perform_request(
                        client=client,
                        path=f"coins/{coin_id}",
                        params=COIN_DETAIL_PARAMS,
                    )
                    coins[coin_id] = CoinGeckoCoin.model_validate(payload)
                except (CoinGeckoAPIError, ValidationError) as exc:
                    log.warning("CoinGecko details failed for %s: %s", coin_id, exc)
        return coins

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
        params: dict[str, str],
    ) -> object:
        if self._resilience.base_url is None:
            raise CoinGeckoAPIError("Missing CoinGecko base_url in resilience configuration")
        try:
            response = await client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise CoinGeckoAPIError(f"CoinGecko request {path} failed: {exc}") from exc

        if not response.is_success:
            raise CoinGeckoAPIError(
                f"CoinGecko returned status {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise CoinGeckoAPIError(f"Undecodable CoinGecko response for {path}") from exc

    def _check_cancelled(self) -> None:
        if self._cancel_token is not None:
            self._cancel_token.raise_if_cancelled()
