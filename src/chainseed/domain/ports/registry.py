"""Port definitions for the remote asset registry.

Create calls never raise for item-level problems. They return one of three
tagged results so the stage runner can branch exhaustively:

- ``Created``: the record was stored
- ``Conflict``: the natural key already exists (idempotent skip)
- ``Failed``: any other outcome, carrying the upstream detail

``list_assets`` and ``list_chains`` raise ``RegistryError`` on failure. Every
call raises ``SeedCancelledError`` once cancellation has been observed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chainseed.domain.model import RegistryAssetType


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateChainRequest:
    chain_type: str
    name: str
    block_explorer_url: str


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateAssetRequest:
    """Asset creation payload; ``None`` optionals are omitted on the wire."""

    symbol: str
    name: str
    asset_type: RegistryAssetType
    category: str | None = None
    description: str | None = None
    logo_url: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateAssetDeploymentRequest:
    asset_id: str
    chain_id: str
    contract_address: str
    decimals: int
    is_native: bool


class CreateStatus(StrEnum):
    CREATED = "created"
    CONFLICT = "conflict"
    FAILED = "failed"


@dataclass(frozen=True, slots=True, kw_only=True)
class Created:
    identifier: str | None = None
    status: Literal[CreateStatus.CREATED] = CreateStatus.CREATED


@dataclass(frozen=True, slots=True, kw_only=True)
class Conflict:
    detail: str | None = None
    status: Literal[CreateStatus.CONFLICT] = CreateStatus.CONFLICT


@dataclass(frozen=True, slots=True, kw_only=True)
class Failed:
    detail: str
    code: str | None = None
    status: Literal[CreateStatus.FAILED] = CreateStatus.FAILED


type CreateResult = Created | Conflict | Failed


@dataclass(frozen=True, slots=True)
class ListedAsset:
    symbol: str
    asset_id: str


@runtime_checkable
class RegistryClient(Protocol):
    """Synchronous request/response interface to the asset registry."""

    def create_chain(self, request: CreateChainRequest) -> CreateResult: ...

    def create_asset(self, request: CreateAssetRequest) -> CreateResult: ...

    def create_asset_deployment(self, request: CreateAssetDeploymentRequest) -> CreateResult: ...

    def list_assets(self) -> Sequence[ListedAsset]: ...

    def list_chains(self) -> Sequence[str]: ...


__all__ = [
    "Conflict",
    "CreateAssetDeploymentRequest",
    "CreateAssetRequest",
    "CreateChainRequest",
    "CreateResult",
    "CreateStatus",
    "Created",
    "Failed",
    "ListedAsset",
    "RegistryClient",
]
