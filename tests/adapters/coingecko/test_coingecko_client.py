from __future__ import annotations

import json

import httpx
import pytest

from chainseed.adapters.coingecko import CoinGeckoAPIError, CoinGeckoClient, should_cache_payload
from chainseed.config.coingecko import CoinGeckoConfig
from chainseed.config.http_resilience import ResilienceConfig, RetryPolicy
from chainseed.domain.cancellation import CancelToken
from chainseed.domain.errors import SeedCancelledError
from tests.helpers.http import Handler, mock_client_factory

COINGECKO_URL = "https://coingecko.test/api/v3"


def _client(handler: Handler, *, cancel_token: CancelToken | None = None) -> CoinGeckoClient:
    config = CoinGeckoConfig(
        resilience=ResilienceConfig(
            name="coingecko",
            base_url=COINGECKO_URL,
            retry=RetryPolicy(total=0),
            cache=None,
        ),
    )
    return CoinGeckoClient(
        config=config,
        cancel_token=cancel_token,
        client_factory=mock_client_factory(handler),
    )


def _market_row(index: int) -> dict[str, object]:
    return {"id": f"coin-{index}", "symbol": f"c{index}", "name": f"Coin {index}"}


def test_fetch_top_markets_pages_until_limit() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        page = int(request.url.params["page"])
        per_page = int(request.url.params["per_page"])
        start = (page - 1) * 250
        return httpx.Response(200, json=[_market_row(start + i) for i in range(per_page)])

    markets = _client(handler).fetch_top_markets(limit=300)

    assert len(markets) == 300
    assert markets[-1].id == "coin-299"
    assert [(r.url.params["page"], r.url.params["per_page"]) for r in requests] == [
        ("1", "250"),
        ("2", "50"),
    ]
    assert requests[0].url.path == "/api/v3/coins/markets"
    assert requests[0].url.params["order"] == "market_cap_desc"
    assert requests[0].url.params["vs_currency"] == "usd"


def test_fetch_top_markets_stops_on_short_page() -> None:
    calls = 0

    def handler(_request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=[_market_row(0), _market_row(1)])

    markets = _client(handler).fetch_top_markets(limit=10)

    assert [market.id for market in markets] == ["coin-0", "coin-1"]
    assert calls == 1


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(429, json={"status": {"error_code": 429, "error_message": "slow down"}}),
        httpx.Response(200, json={"status": {"error_code": 429}}),
        httpx.Response(200, text="<html>"),
    ],
)
def test_fetch_top_markets_raises_on_unusable_responses(response: httpx.Response) -> None:
    client = _client(lambda _request: response)

    with pytest.raises(CoinGeckoAPIError):
        client.fetch_top_markets(limit=5)


def test_fetch_top_markets_maps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CoinGeckoAPIError, match="connection refused"):
        _client(handler).fetch_top_markets(limit=5)


def test_fetch_coins_skips_failed_lookups() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/missing"):
            return httpx.Response(404, json={"error": "coin not found"})
        return httpx.Response(
            200,
            json={
                "id": "tether",
                "symbol": "usdt",
                "name": "Tether",
                "platforms": {"ethereum": "0xdac17f958d2ee523a2206206994597c13d831ec7"},
            },
        )

    coins = _client(handler).fetch_coins(["tether", "missing"])

    assert list(coins) == ["tether"]
    assert coins["tether"].platforms == {"ethereum": "0xdac17f958d2ee523a2206206994597c13d831ec7"}
    assert requests[0].url.path == "/api/v3/coins/tether"
    assert requests[0].url.params["tickers"] == "false"
    assert requests[0].url.params["market_data"] == "false"


def test_cancelled_token_stops_before_the_next_request() -> None:
    token = CancelToken()
    requests: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request.url.path)
        token.cancel()
        return httpx.Response(200, json={"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"})

    with pytest.raises(SeedCancelledError):
        _client(handler, cancel_token=token).fetch_coins(["bitcoin", "ethereum"])

    assert requests == ["/api/v3/coins/bitcoin"]


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ([{"id": "bitcoin"}], True),
        ({"id": "bitcoin", "symbol": "btc"}, True),
        ({"status": {"error_code": 429, "error_message": "rate limited"}}, False),
    ],
)
def test_should_cache_payload(payload: object, expected: bool) -> None:
    assert should_cache_payload(json.loads(json.dumps(payload))) is expected
