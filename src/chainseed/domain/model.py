"""Candidate records and registry vocabulary understood by the seeding engine.

Candidates are read once per run from a record source and never mutated. They
carry natural keys only; registry-assigned identifiers are looked up at
submission time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

NATIVE_PLACEHOLDER_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"
NATIVE_SENTINEL_ADDRESS: Final[str] = "native"


class RegistryAssetType(StrEnum):
    """Asset types accepted by the registry (proto enum names)."""

    UNSPECIFIED = "ASSET_TYPE_UNSPECIFIED"
    NATIVE = "ASSET_TYPE_NATIVE"
    ERC20 = "ASSET_TYPE_ERC20"


@dataclass(frozen=True, slots=True)
class ChainCandidate:
    chain_id: str
    display_name: str
    chain_type: str = ""
    native_asset_symbol: str = ""
    rpc_urls: tuple[str, ...] = ()
    block_explorer_url: str = ""

    @property
    def natural_key(self) -> str:
        return self.chain_id


@dataclass(frozen=True, slots=True)
class AssetCandidate:
    """Asset as presented by a record source.

    ``asset_kind`` keeps the source vocabulary (for example ``ASSET_TYPE_SPL``);
    the asset stage collapses it onto :class:`RegistryAssetType`.
    """

    symbol: str
    display_name: str
    asset_kind: str
    id: str = ""
    category: str = ""
    description: str = ""
    logo_url: str = ""
    website_url: str = ""
    external_reference_id: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict[str, Any])

    def __post_init__(self) -> None:
        if not self.symbol:
            raise ValueError("Asset symbol must be non-empty")

    @property
    def natural_key(self) -> str:
        return self.symbol


@dataclass(frozen=True, slots=True)
class DeploymentCandidate:
    """Per-chain contract deployment of an asset referenced by symbol."""

    asset_symbol: str
    chain_id: str
    contract_address: str
    decimals: int
    is_native: bool = False

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError(f"Deployment decimals must be >= 0, got {self.decimals}")

    @property
    def natural_key(self) -> str:
        return f"{self.asset_symbol}@{self.chain_id}"
