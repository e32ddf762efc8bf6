"""Registry client wrapper that logs creates instead of sending them."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from chainseed.domain.ports.registry import Created

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chainseed.domain.cancellation import CancelToken

    from chainseed.domain.ports.registry import (
        CreateAssetDeploymentRequest,
        CreateAssetRequest,
        CreateChainRequest,
        CreateResult,
        ListedAsset,
        RegistryClient,
    )

log = getLogger(__name__)


class DryRunRegistryClient:
    """Report every create as ``Created`` without contacting the registry.

    Listings are delegated to ``inner`` so deployment resolution still sees
    what the registry actually holds.
    """

    def __init__(self, inner: RegistryClient, *, cancel_token: CancelToken | None = None) -> None:
        self._inner = inner
        self._cancel_token = cancel_token
        self.skipped_creates = 0

    def create_chain(self, request: CreateChainRequest) -> CreateResult:
        log.info("[dry-run] would create chain %s (%s)", request.chain_type, request.name)
        return self._skip()

    def create_asset(self, request: CreateAssetRequest) -> CreateResult:
        log.info("[dry-run] would create asset %s as %s", request.symbol, request.asset_type)
        return self._skip()

    def create_asset_deployment(self, request: CreateAssetDeploymentRequest) -> CreateResult:
        log.info(
            "[dry-run] would deploy asset %s on %s at %s",
            request.asset_id,
            request.chain_id,
            request.contract_address,
        )
        return self._skip()

    def list_assets(self) -> Sequence[ListedAsset]:
        return self._inner.list_assets()

    def list_chains(self) -> Sequence[str]:
        return self._inner.list_chains()

    def _skip(self) -> Created:
        if self._cancel_token is not None:
            self._cancel_token.raise_if_cancelled()
        self.skipped_creates += 1
        return Created()
