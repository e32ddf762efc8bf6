"""Seeding run defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = "bootstrap_data"
DEFAULT_COINGECKO_ASSET_LIMIT = 100


@dataclass(frozen=True, slots=True)
class SeedingConfig:
    data_dir: Path
    asset_limit: int = DEFAULT_COINGECKO_ASSET_LIMIT


def get_seeding_config() -> SeedingConfig:
    env_dir = os.getenv("CHAINSEED_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else Path(DEFAULT_DATA_DIR)
    return SeedingConfig(data_dir=data_dir.expanduser().resolve())
