"""Symbol to registry-identifier resolution for deployments.

The index is rebuilt from a full registry listing on every run, after the
asset stage. It therefore also covers assets that existed before the run,
which is what makes re-runs against a partially seeded registry correct.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chainseed.domain.ports.registry import RegistryClient

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedAssetIndex:
    """Read-only mapping from asset symbol to registry asset id."""

    ids_by_symbol: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def lookup(self, symbol: str) -> str | None:
        return self.ids_by_symbol.get(symbol)

    def __len__(self) -> int:
        return len(self.ids_by_symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.ids_by_symbol


def resolve_asset_index(client: RegistryClient) -> ResolvedAssetIndex:
    """List every registered asset and index it by symbol.

    Listing failures propagate as ``RegistryError``; an empty listing is valid.
    """

    ids_by_symbol: dict[str, str] = {}
    for asset in client.list_assets():
        if not asset.symbol or not asset.asset_id:
            continue
        ids_by_symbol[asset.symbol] = asset.asset_id

    log.info("Built asset symbol->id index with %s entries", len(ids_by_symbol))
    return ResolvedAssetIndex(ids_by_symbol=MappingProxyType(ids_by_symbol))
