"""Candidate to registry-request transforms."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from chainseed.domain.model import (
    NATIVE_PLACEHOLDER_ADDRESS,
    NATIVE_SENTINEL_ADDRESS,
    RegistryAssetType,
)
from chainseed.domain.ports.registry import (
    CreateAssetDeploymentRequest,
    CreateAssetRequest,
    CreateChainRequest,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chainseed.domain.model import AssetCandidate, ChainCandidate, DeploymentCandidate

# Every token standard collapses onto the registry's generic fungible-token
# type. Unknown kinds fall through to UNSPECIFIED.
ASSET_KIND_TABLE: Final[Mapping[str, RegistryAssetType]] = MappingProxyType(
    {
        "ASSET_TYPE_NATIVE": RegistryAssetType.NATIVE,
        "ASSET_TYPE_ERC20": RegistryAssetType.ERC20,
        "ASSET_TYPE_BEP20": RegistryAssetType.ERC20,
        "ASSET_TYPE_SPL": RegistryAssetType.ERC20,
    }
)


def registry_asset_type(asset_kind: str) -> RegistryAssetType:
    return ASSET_KIND_TABLE.get(asset_kind, RegistryAssetType.UNSPECIFIED)


def normalize_contract_address(deployment: DeploymentCandidate) -> str:
    """Return the address to submit, replacing the native placeholder."""

    if deployment.is_native and deployment.contract_address == NATIVE_PLACEHOLDER_ADDRESS:
        return NATIVE_SENTINEL_ADDRESS
    return deployment.contract_address


def chain_request(chain: ChainCandidate) -> CreateChainRequest:
    # the registry keys chains by their type field
    return CreateChainRequest(
        chain_type=chain.chain_id,
        name=chain.display_name,
        block_explorer_url=chain.block_explorer_url,
    )


def asset_request(asset: AssetCandidate) -> CreateAssetRequest:
    return CreateAssetRequest(
        symbol=asset.symbol,
        name=asset.display_name,
        asset_type=registry_asset_type(asset.asset_kind),
        category=asset.category or None,
        description=asset.description or None,
        logo_url=asset.logo_url or None,
    )


def deployment_request(
    deployment: DeploymentCandidate,
    *,
    asset_id: str,
) -> CreateAssetDeploymentRequest:
    return CreateAssetDeploymentRequest(
        asset_id=asset_id,
        chain_id=deployment.chain_id,
        contract_address=normalize_contract_address(deployment),
        decimals=deployment.decimals,
        is_native=deployment.is_native,
    )
