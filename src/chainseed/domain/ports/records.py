"""Port for obtaining candidate records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chainseed.domain.model import AssetCandidate, ChainCandidate, DeploymentCandidate


@runtime_checkable
class RecordSource(Protocol):
    """Supplies fully materialised candidate collections.

    Each loader either returns the complete ordered collection or raises
    ``RecordSourceError``; partial results are never returned.
    """

    def load_chains(self) -> Sequence[ChainCandidate]: ...

    def load_assets(self) -> Sequence[AssetCandidate]: ...

    def load_deployments(self) -> Sequence[DeploymentCandidate]: ...


__all__ = ["RecordSource"]
