"""Stage runners for chains, assets and deployments.

Responsibilities of this module:
- fold a candidate sequence into a ``StageOutcome``
- transform each candidate into its registry request shape
- classify each ``CreateResult`` as created, skipped or failed

Item-level failures never stop a stage. Only fatal errors (cancellation,
listing failures) propagate out of the fold, discarding the partial outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from logging import getLogger
from typing import TYPE_CHECKING, Final, Protocol, assert_never

from chainseed.domain.errors import RegistryError
from chainseed.domain.ports.registry import Conflict, Created, Failed

from .outcome import StageName, StageOutcome
from .resolver import resolve_asset_index
from .transforms import asset_request, chain_request, deployment_request

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from chainseed.domain.model import AssetCandidate, ChainCandidate, DeploymentCandidate
    from chainseed.domain.ports.records import RecordSource
    from chainseed.domain.ports.registry import CreateResult, RegistryClient

    from .resolver import ResolvedAssetIndex

log = getLogger(__name__)

ASSET_NOT_FOUND_DETAIL: Final[str] = "asset not found by symbol"


def classify_result(
    outcome: StageOutcome,
    result: CreateResult,
    *,
    key: str,
) -> StageOutcome:
    """Fold one submission result into ``outcome``."""

    if isinstance(result, Created):
        log.info("Created %s item %s", outcome.stage, key)
        return outcome.with_created()
    if isinstance(result, Conflict):
        log.debug("%s item %s already exists, skipping", outcome.stage, key)
        return outcome.with_skipped_duplicate()
    if isinstance(result, Failed):
        log.error("Failed to create %s item %s: %s", outcome.stage, key, result.detail)
        return outcome.with_failure(key, result.detail)
    assert_never(result)


def run_stage[T](
    stage: str,
    candidates: Iterable[T],
    *,
    submit: Callable[[T], CreateResult],
    key: Callable[[T], str],
) -> StageOutcome:
    """Submit every candidate in order and return the stage outcome."""

    def step(outcome: StageOutcome, candidate: T) -> StageOutcome:
        return classify_result(outcome, submit(candidate), key=key(candidate))

    outcome = reduce(step, candidates, StageOutcome(stage=stage))
    log.info(
        "%s seeding complete: attempted=%s, created=%s, skipped=%s, failed=%s",
        stage,
        outcome.attempted,
        outcome.created,
        outcome.skipped_duplicate,
        outcome.failed,
    )
    return outcome


def seed_chains(chains: Iterable[ChainCandidate], client: RegistryClient) -> StageOutcome:
    return run_stage(
        StageName.CHAINS,
        chains,
        submit=lambda chain: client.create_chain(chain_request(chain)),
        key=lambda chain: chain.natural_key,
    )


def seed_assets(assets: Iterable[AssetCandidate], client: RegistryClient) -> StageOutcome:
    return run_stage(
        StageName.ASSETS,
        assets,
        submit=lambda asset: client.create_asset(asset_request(asset)),
        key=lambda asset: asset.natural_key,
    )


def seed_deployments(
    deployments: Iterable[DeploymentCandidate],
    client: RegistryClient,
    *,
    index: ResolvedAssetIndex,
) -> StageOutcome:
    def submit(deployment: DeploymentCandidate) -> CreateResult:
        asset_id = index.lookup(deployment.asset_symbol)
        if asset_id is None:
            return Failed(detail=ASSET_NOT_FOUND_DETAIL, code="unresolved_reference")
        return client.create_asset_deployment(deployment_request(deployment, asset_id=asset_id))

    return run_stage(
        StageName.DEPLOYMENTS,
        deployments,
        submit=submit,
        key=lambda deployment: deployment.natural_key,
    )


class SeedingStage(Protocol):
    """Contract implemented by each pipeline stage."""

    name: StageName

    def run(self, source: RecordSource, client: RegistryClient) -> StageOutcome: ...


@dataclass(frozen=True, slots=True)
class ChainStage:
    name: StageName = StageName.CHAINS

    def run(self, source: RecordSource, client: RegistryClient) -> StageOutcome:
        chains = source.load_chains()
        log.info("Loaded %s chains", len(chains))
        return seed_chains(chains, client)


@dataclass(frozen=True, slots=True)
class AssetStage:
    name: StageName = StageName.ASSETS

    def run(self, source: RecordSource, client: RegistryClient) -> StageOutcome:
        assets = source.load_assets()
        log.info("Loaded %s assets", len(assets))
        return seed_assets(assets, client)


@dataclass(frozen=True, slots=True)
class DeploymentStage:
    """Deployment stage preceded by the asset-index barrier."""

    name: StageName = StageName.DEPLOYMENTS

    def run(self, source: RecordSource, client: RegistryClient) -> StageOutcome:
        deployments = source.load_deployments()
        log.info("Loaded %s deployments", len(deployments))
        try:
            index = resolve_asset_index(client)
        except RegistryError as exc:
            raise RegistryError(f"listing assets failed: {exc}") from exc
        return seed_deployments(deployments, client, index=index)
