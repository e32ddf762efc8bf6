"""Seeding engine: stage runners, asset-index resolver and orchestrator."""

from __future__ import annotations

from .outcome import (
    STAGE_ORDER,
    ItemFailure,
    RunOutcome,
    StageName,
    StageOutcome,
    format_summary,
)
from .pipeline import SeedingPipeline, default_stages
from .resolver import ResolvedAssetIndex, resolve_asset_index
from .stages import (
    ASSET_NOT_FOUND_DETAIL,
    AssetStage,
    ChainStage,
    DeploymentStage,
    SeedingStage,
    classify_result,
    run_stage,
    seed_assets,
    seed_chains,
    seed_deployments,
)
from .transforms import (
    ASSET_KIND_TABLE,
    asset_request,
    chain_request,
    deployment_request,
    normalize_contract_address,
    registry_asset_type,
)

__all__ = [
    "ASSET_KIND_TABLE",
    "ASSET_NOT_FOUND_DETAIL",
    "STAGE_ORDER",
    "AssetStage",
    "ChainStage",
    "DeploymentStage",
    "ItemFailure",
    "ResolvedAssetIndex",
    "RunOutcome",
    "SeedingPipeline",
    "SeedingStage",
    "StageName",
    "StageOutcome",
    "asset_request",
    "chain_request",
    "classify_result",
    "default_stages",
    "deployment_request",
    "format_summary",
    "normalize_contract_address",
    "registry_asset_type",
    "resolve_asset_index",
    "run_stage",
    "seed_assets",
    "seed_chains",
    "seed_deployments",
]
