"""Translate between domain registry requests and Connect JSON payloads."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from chainseed.domain.ports.registry import Conflict, Failed, ListedAsset

from .schema import (
    ConnectCode,
    CreateAssetDeploymentPayload,
    CreateAssetDeploymentResponse,
    CreateAssetPayload,
    CreateAssetResponse,
    CreateChainPayload,
    CreateChainResponse,
    ListAssetsResponse,
    RegistryBaseModel,
)

if TYPE_CHECKING:
    from chainseed.domain.ports.registry import (
        CreateAssetDeploymentRequest,
        CreateAssetRequest,
        CreateChainRequest,
    )

    from .client import RegistryAPIError

log = getLogger(__name__)

type JsonObject = dict[str, object]


def _dump(
    payload: CreateChainPayload | CreateAssetPayload | CreateAssetDeploymentPayload,
) -> JsonObject:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def translate_chain_request(request: CreateChainRequest) -> JsonObject:
    return _dump(
        CreateChainPayload(
            chain_type=request.chain_type,
            name=request.name,
            block_explorer_url=request.block_explorer_url or None,
        )
    )


def translate_asset_request(request: CreateAssetRequest) -> JsonObject:
    return _dump(
        CreateAssetPayload(
            symbol=request.symbol,
            name=request.name,
            asset_type=str(request.asset_type),
            category=request.category,
            description=request.description,
            logo_url=request.logo_url,
        )
    )


def translate_deployment_request(request: CreateAssetDeploymentRequest) -> JsonObject:
    return _dump(
        CreateAssetDeploymentPayload(
            asset_id=request.asset_id,
            chain_id=request.chain_id,
            contract_address=request.contract_address,
            decimals=request.decimals,
            is_native=request.is_native,
        )
    )


def translate_error(error: RegistryAPIError) -> Conflict | Failed:
    """Map a registry error onto the two-valued item classification."""

    if error.code == ConnectCode.ALREADY_EXISTS:
        return Conflict(detail=error.message)
    return Failed(detail=f"{error.code}: {error.message}", code=error.code)


def _validated[ResponseT: RegistryBaseModel](
    model: type[ResponseT],
    payload: JsonObject,
) -> ResponseT | None:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        log.warning("Ignoring unexpected %s body: %s", model.__name__, exc)
        return None


# Identifiers are informational; an unreadable success body still counts as created.
def created_chain_id(payload: JsonObject) -> str | None:
    response = _validated(CreateChainResponse, payload)
    if response is None or response.chain is None:
        return None
    return response.chain.chain_id


def created_asset_id(payload: JsonObject) -> str | None:
    response = _validated(CreateAssetResponse, payload)
    if response is None or response.asset is None:
        return None
    return response.asset.asset_id


def created_deployment_id(payload: JsonObject) -> str | None:
    response = _validated(CreateAssetDeploymentResponse, payload)
    if response is None or response.deployment is None:
        return None
    return response.deployment.deployment_id


def translate_listed_assets(response: ListAssetsResponse) -> list[ListedAsset]:
    """Keep only listed assets that carry both a symbol and an id."""

    listed: list[ListedAsset] = []
    for asset in response.assets:
        if not asset.symbol or not asset.asset_id:
            continue
        listed.append(ListedAsset(symbol=asset.symbol, asset_id=asset.asset_id))
    return listed
