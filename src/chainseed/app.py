"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from chainseed.adapters.coingecko import (
    CoinGeckoClient,
    CoinGeckoRecordSource,
    should_cache_payload,
)
from chainseed.adapters.files import FileRecordSource
from chainseed.adapters.registry import ConnectRegistryClient, DryRunRegistryClient
from chainseed.config import get_coingecko_config, get_registry_config, get_seeding_config
from chainseed.domain.errors import RegistryError, SeedCancelledError
from chainseed.domain.seeding import RunOutcome, SeedingPipeline

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from chainseed.domain.cancellation import CancelToken
    from chainseed.domain.ports.records import RecordSource
    from chainseed.domain.ports.registry import RegistryClient

log = getLogger(__name__)

CONNECTIVITY_STEP = "connectivity"


def build_registry_client(*, cancel_token: CancelToken | None = None) -> ConnectRegistryClient:
    config = get_registry_config()
    log.info("Using asset registry at %s", config.base_url)
    return ConnectRegistryClient(config=config, cancel_token=cancel_token)


def build_file_source(data_dir: Path | None = None) -> FileRecordSource:
    directory = data_dir or get_seeding_config().data_dir
    log.info("Reading seed files from %s", directory)
    return FileRecordSource(directory)


def build_coingecko_source(
    *,
    limit: int | None = None,
    cancel_token: CancelToken | None = None,
) -> CoinGeckoRecordSource:
    config = get_coingecko_config(cache_predicate=should_cache_payload)
    effective_limit = limit or get_seeding_config().asset_limit
    log.info(
        "Using CoinGecko at %s: limit=%s, chains=%s",
        config.resilience.base_url,
        effective_limit,
        ",".join(config.chains),
    )
    client = CoinGeckoClient(config=config, cancel_token=cancel_token)
    return CoinGeckoRecordSource(client, limit=effective_limit, chains=config.chains)


def check_connectivity(client: RegistryClient) -> int:
    """Verify the registry answers a listing call and return its chain count."""

    chains = client.list_chains()
    log.info("Registry reachable, %s chains registered", len(chains))
    return len(chains)


def seed_registry(
    *,
    source: RecordSource,
    client: RegistryClient,
    cancel_token: CancelToken | None = None,
    stages: Iterable[str] | None = None,
    dry_run: bool = False,
    check_registry: bool = True,
) -> RunOutcome:
    """Run the seeding pipeline for ``source`` against ``client``."""

    effective_client: RegistryClient = (
        DryRunRegistryClient(client, cancel_token=cancel_token) if dry_run else client
    )
    pipeline = SeedingPipeline() if stages is None else SeedingPipeline.for_stages(stages)
    log.info(
        "Starting seeding: stages=%s, dry_run=%s",
        ",".join(stage.name for stage in pipeline.stages),
        dry_run,
    )

    if check_registry:
        try:
            check_connectivity(effective_client)
        except (RegistryError, SeedCancelledError) as exc:
            log.error("Registry connectivity check failed: %s", exc)  # noqa: TRY400
            return RunOutcome(fatal=True, fatal_stage=CONNECTIVITY_STEP, fatal_detail=str(exc))

    outcome = pipeline.run(source, effective_client)

    log.info(
        "Finished seeding: stages=%s, item_failures=%s, fatal=%s",
        len(outcome.stages),
        len(outcome.failures),
        outcome.fatal,
    )
    return outcome


def seed_from_files(
    *,
    data_dir: Path | None = None,
    source: RecordSource | None = None,
    client: RegistryClient | None = None,
    cancel_token: CancelToken | None = None,
    stages: Iterable[str] | None = None,
    dry_run: bool = False,
    check_registry: bool = True,
) -> RunOutcome:
    """Seed the registry from ``chains.json``, ``assets.json`` and ``deployments.json``."""

    return seed_registry(
        source=source or build_file_source(data_dir),
        client=client or build_registry_client(cancel_token=cancel_token),
        cancel_token=cancel_token,
        stages=stages,
        dry_run=dry_run,
        check_registry=check_registry,
    )


def seed_from_coingecko(
    *,
    limit: int | None = None,
    source: RecordSource | None = None,
    client: RegistryClient | None = None,
    cancel_token: CancelToken | None = None,
    stages: Iterable[str] | None = None,
    dry_run: bool = False,
    check_registry: bool = True,
) -> RunOutcome:
    """Seed the registry from CoinGecko's top assets by market capitalisation."""

    return seed_registry(
        source=source or build_coingecko_source(limit=limit, cancel_token=cancel_token),
        client=client or build_registry_client(cancel_token=cancel_token),
        cancel_token=cancel_token,
        stages=stages,
        dry_run=dry_run,
        check_registry=check_registry,
    )
