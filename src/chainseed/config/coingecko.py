"""CoinGecko configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_list, optional_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy, ShouldCacheHook

DEFAULT_COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_COINGECKO_RATE_LIMIT = 10
DEFAULT_COINGECKO_CACHE_TTL_SECONDS = 3600.0
DEFAULT_CHAINS = (
    "ethereum",
    "polygon_pos",
    "binance_smart_chain",
    "solana",
    "bitcoin",
    "arbitrum_one",
    "optimistic_ethereum",
)


@dataclass(frozen=True, slots=True)
class CoinGeckoConfig:
    resilience: ResilienceConfig
    chains: tuple[str, ...] = DEFAULT_CHAINS
    api_key: str | None = None


def get_coingecko_config(*, cache_predicate: ShouldCacheHook | None = None) -> CoinGeckoConfig:
    base_url = optional_env_var("COINGECKO_BASE_URL") or DEFAULT_COINGECKO_BASE_URL
    api_key = optional_env_var("COINGECKO_API_KEY")
    rate_limit = env_int("COINGECKO_RATE_LIMIT_PER_SECOND", default=DEFAULT_COINGECKO_RATE_LIMIT)
    if not 1 <= rate_limit <= 100:
        raise ConfigurationError(
            f"CoinGecko rate limit must be between 1-100 requests/second, got: {rate_limit}"
        )
    cache_ttl = env_float(
        "COINGECKO_CACHE_TTL_SECONDS",
        default=DEFAULT_COINGECKO_CACHE_TTL_SECONDS,
    )
    chains = env_list("CHAINSEED_CHAINS", default=DEFAULT_CHAINS)
    if not chains:
        raise ConfigurationError("At least one chain must be configured")

    headers = {"Accept": "application/json"}
    if api_key:
        headers["x-cg-pro-api-key"] = api_key

    resilience = ResilienceConfig(
        name="coingecko",
        base_url=base_url.rstrip("/"),
        ratelimit=RateLimit(max_calls=rate_limit, per_seconds=1.0),
        retry=RetryPolicy(total=4),
        # persisted under CHAINSEED_CACHE_DIR so repeated runs reuse coin details
        cache=CacheConfig(
            enabled=cache_ttl > 0,
            default_ttl_seconds=cache_ttl,
            should_cache=cache_predicate,
        ),
        default_headers=headers,
    )
    return CoinGeckoConfig(resilience=resilience, chains=chains, api_key=api_key)
