"""Domain port definitions for adapters."""

from __future__ import annotations

from .records import RecordSource
from .registry import (
    Conflict,
    CreateAssetDeploymentRequest,
    CreateAssetRequest,
    CreateChainRequest,
    CreateResult,
    CreateStatus,
    Created,
    Failed,
    ListedAsset,
    RegistryClient,
)

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
    "RecordSource",
    "RegistryClient",
]
