"""Candidate builders and an in-memory record source."""

from __future__ import annotations

from dataclasses import dataclass, field

from chainseed.domain.errors import RecordSourceError
from chainseed.domain.model import (
    NATIVE_PLACEHOLDER_ADDRESS,
    AssetCandidate,
    ChainCandidate,
    DeploymentCandidate,
)

USDC_ETHEREUM = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def make_chain(chain_id: str = "ethereum", *, name: str | None = None) -> ChainCandidate:
    return ChainCandidate(
        chain_id=chain_id,
        display_name=name or chain_id.title(),
        chain_type="EVM",
        block_explorer_url=f"https://{chain_id}.example",
    )


def make_asset(
    symbol: str = "ETH",
    *,
    kind: str = "ASSET_TYPE_ERC20",
    **extra: str,
) -> AssetCandidate:
    return AssetCandidate(
        symbol=symbol,
        display_name=extra.pop("display_name", f"{symbol} token"),
        asset_kind=kind,
        **extra,
    )


def make_deployment(
    symbol: str = "USDC",
    chain_id: str = "ethereum",
    *,
    address: str = USDC_ETHEREUM,
    decimals: int = 6,
    is_native: bool = False,
) -> DeploymentCandidate:
    return DeploymentCandidate(
        asset_symbol=symbol,
        chain_id=chain_id,
        contract_address=address,
        decimals=decimals,
        is_native=is_native,
    )


@dataclass
class InMemoryRecordSource:
    chains: list[ChainCandidate] = field(default_factory=list[ChainCandidate])
    assets: list[AssetCandidate] = field(default_factory=list[AssetCandidate])
    deployments: list[DeploymentCandidate] = field(default_factory=list[DeploymentCandidate])
    broken: frozenset[str] = frozenset()
    loads: list[str] = field(default_factory=list[str])

    def load_chains(self) -> list[ChainCandidate]:
        return self._load("chains", self.chains)

    def load_assets(self) -> list[AssetCandidate]:
        return self._load("assets", self.assets)

    def load_deployments(self) -> list[DeploymentCandidate]:
        return self._load("deployments", self.deployments)

    def _load[T](self, name: str, records: list[T]) -> list[T]:
        self.loads.append(name)
        if name in self.broken:
            raise RecordSourceError(f"{name}.json is not valid JSON")
        return list(records)


def sample_source() -> InMemoryRecordSource:
    """Two chains, three assets and three deployments that all resolve."""

    return InMemoryRecordSource(
        chains=[make_chain("ethereum"), make_chain("polygon_pos", name="Polygon")],
        assets=[
            make_asset("ETH", kind="ASSET_TYPE_NATIVE", display_name="Ether"),
            make_asset("USDC", kind="ASSET_TYPE_ERC20", category="fiat-backed-stablecoin"),
            make_asset("BONK", kind="ASSET_TYPE_SPL"),
        ],
        deployments=[
            make_deployment(
                "ETH",
                "ethereum",
                address=NATIVE_PLACEHOLDER_ADDRESS,
                decimals=18,
                is_native=True,
            ),
            make_deployment("USDC", "ethereum"),
            make_deployment(
                "USDC",
                "polygon_pos",
                address="0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359",
            ),
        ],
    )
