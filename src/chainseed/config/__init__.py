"""Application configuration helpers."""

from __future__ import annotations

from .coingecko import DEFAULT_CHAINS, CoinGeckoConfig, get_coingecko_config
from .env import env_float, env_int, env_list, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .registry import RegistryConfig, build_registry_resilience, get_registry_config
from .seeding import SeedingConfig, get_seeding_config
from .storage import get_http_cache_path

__all__ = [
    "DEFAULT_CHAINS",
    "CacheConfig",
    "CoinGeckoConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RegistryConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SeedingConfig",
    "build_registry_resilience",
    "configure_logging",
    "env_float",
    "env_int",
    "env_list",
    "get_coingecko_config",
    "get_http_cache_path",
    "get_registry_config",
    "get_seeding_config",
    "optional_env_var",
    "require_env_vars",
]
