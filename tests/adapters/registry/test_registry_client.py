"""Connect JSON client behaviour against a mocked transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from chainseed.domain.cancellation import CancelToken
from chainseed.domain.errors import RegistryError, SeedCancelledError
from chainseed.domain.model import RegistryAssetType
from chainseed.domain.ports.registry import (
    Conflict,
    CreateAssetDeploymentRequest,
    CreateAssetRequest,
    CreateChainRequest,
    Created,
    Failed,
    ListedAsset,
)
from tests.helpers.http import SERVICE_PATH, registry_client_for

CHAIN_REQUEST = CreateChainRequest(
    chain_type="ethereum",
    name="Ethereum",
    block_explorer_url="https://etherscan.io",
)


def test_create_chain_posts_connect_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"chain": {"chainId": "chain-1", "chainType": "ethereum"}})

    result = registry_client_for(handler).create_chain(CHAIN_REQUEST)

    assert result == Created(identifier="chain-1")
    (request,) = seen
    assert request.method == "POST"
    assert request.url.path == f"{SERVICE_PATH}/CreateChain"
    assert request.headers["Authorization"] == "Bearer secret-token"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "chainType": "ethereum",
        "name": "Ethereum",
        "blockExplorerUrl": "https://etherscan.io",
    }


@pytest.mark.parametrize(
    "body",
    [
        {"chain": {"chainId": 1}},
        {"chain": "ethereum"},
        {"chain": {"chainId": ["chain-1"]}},
    ],
)
def test_unexpected_success_body_still_counts_as_created(body: dict[str, object]) -> None:
    client = registry_client_for(lambda _request: httpx.Response(200, json=body))

    assert client.create_chain(CHAIN_REQUEST) == Created(identifier=None)


def test_create_asset_omits_unset_optionals() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"asset": {"assetId": "asset-9"}})

    result = registry_client_for(handler).create_asset(
        CreateAssetRequest(
            symbol="USDC",
            name="USD Coin",
            asset_type=RegistryAssetType.ERC20,
            category="fiat-backed-stablecoin",
        )
    )

    assert result == Created(identifier="asset-9")
    assert bodies == [
        {
            "symbol": "USDC",
            "name": "USD Coin",
            "assetType": "ASSET_TYPE_ERC20",
            "category": "fiat-backed-stablecoin",
        }
    ]


def test_create_deployment_without_identifier_in_response() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    result = registry_client_for(handler).create_asset_deployment(
        CreateAssetDeploymentRequest(
            asset_id="asset-1",
            chain_id="ethereum",
            contract_address="native",
            decimals=18,
            is_native=True,
        )
    )

    assert result == Created(identifier=None)
    assert bodies[0]["isNative"] is True
    assert bodies[0]["contractAddress"] == "native"


def test_already_exists_maps_to_conflict() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"code": "already_exists", "message": "chain exists"})

    result = registry_client_for(handler).create_chain(CHAIN_REQUEST)

    assert result == Conflict(detail="chain exists")


@pytest.mark.parametrize(
    ("response", "expected_code", "expected_detail"),
    [
        (
            httpx.Response(400, json={"code": "invalid_argument", "message": "name required"}),
            "invalid_argument",
            "invalid_argument: name required",
        ),
        (
            httpx.Response(404, json={"code": "not_found", "message": "no such chain"}),
            "not_found",
            "not_found: no such chain",
        ),
        (
            httpx.Response(503, text="upstream connect error"),
            "unavailable",
            "unavailable: HTTP 503",
        ),
        (httpx.Response(500, json={"message": "boom"}), "unknown", "unknown: boom"),
    ],
)
def test_other_errors_map_to_failed(
    response: httpx.Response,
    expected_code: str,
    expected_detail: str,
) -> None:
    result = registry_client_for(lambda _: response).create_chain(CHAIN_REQUEST)

    assert isinstance(result, Failed)
    assert result.code == expected_code
    assert result.detail == expected_detail


def test_transport_error_maps_to_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = registry_client_for(handler).create_chain(CHAIN_REQUEST)

    assert isinstance(result, Failed)
    assert result.code == "unavailable"
    assert "connection refused" in result.detail


def test_undecodable_success_body_is_internal_failure() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>proxy</html>")

    result = registry_client_for(handler).create_chain(CHAIN_REQUEST)

    assert isinstance(result, Failed)
    assert result.code == "internal"


def test_list_assets_follows_page_tokens() -> None:
    bodies: list[dict[str, object]] = []
    pages = [
        {
            "assets": [
                {"assetId": "a-1", "symbol": "ETH"},
                {"assetId": "a-2"},
            ],
            "nextPageToken": "page-2",
        },
        {"assets": [{"assetId": "a-3", "symbol": "USDC", "name": "USD Coin"}]},
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == f"{SERVICE_PATH}/ListAssets"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=pages[len(bodies) - 1])

    listed = registry_client_for(handler).list_assets()

    assert listed == [
        ListedAsset(symbol="ETH", asset_id="a-1"),
        ListedAsset(symbol="USDC", asset_id="a-3"),
    ]
    assert "pageToken" not in bodies[0]
    assert bodies[1]["pageToken"] == "page-2"


def test_list_assets_failure_raises_registry_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"code": "unavailable", "message": "maintenance"})

    with pytest.raises(RegistryError, match="unavailable: maintenance"):
        registry_client_for(handler).list_assets()


def test_list_chains_returns_chain_keys() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == f"{SERVICE_PATH}/ListChains"
        return httpx.Response(
            200,
            json={"chains": [{"chainId": "c-1", "chainType": "ethereum"}, {"chainType": "solana"}]},
        )

    assert registry_client_for(handler).list_chains() == ["c-1", "solana"]


def test_cancelled_token_stops_before_sending() -> None:
    token = CancelToken()
    token.cancel()
    sent: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(SeedCancelledError):
        registry_client_for(handler, cancel_token=token).create_chain(CHAIN_REQUEST)

    assert sent == []


def test_cancellation_interrupts_in_flight_request() -> None:
    token = CancelToken()

    async def handler(_: httpx.Request) -> httpx.Response:
        token.cancel()
        await asyncio.sleep(10)
        return httpx.Response(200, json={})

    with pytest.raises(SeedCancelledError):
        registry_client_for(handler, cancel_token=token).create_chain(CHAIN_REQUEST)
