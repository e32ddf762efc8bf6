"""JSON file record source."""

from __future__ import annotations

from .source import (
    ASSETS_FILENAME,
    CHAINS_FILENAME,
    DEPLOYMENTS_FILENAME,
    FileRecordSource,
)

__all__ = ["ASSETS_FILENAME", "CHAINS_FILENAME", "DEPLOYMENTS_FILENAME", "FileRecordSource"]
