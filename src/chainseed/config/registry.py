"""Asset registry connection settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

REGISTRY_SERVICE = "cqc.services.v1.AssetRegistry"
DEFAULT_REGISTRY_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Holds registry endpoint and credential values."""

    base_url: str
    resilience: ResilienceConfig
    api_key: str | None = None
    service: str = REGISTRY_SERVICE


def build_registry_resilience(
    base_url: str,
    *,
    api_key: str | None = None,
    timeout_seconds: float = DEFAULT_REGISTRY_TIMEOUT_SECONDS,
) -> ResilienceConfig:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    # creates are never retried by the transport; item failures are reported as-is
    return ResilienceConfig(
        name="registry",
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy.disabled(),
        cache=None,
        default_headers=headers,
    )


def get_registry_config() -> RegistryConfig:
    values = require_env_vars(("REGISTRY_BASE_URL",))
    base_url = values["REGISTRY_BASE_URL"].strip().rstrip("/")
    api_key = optional_env_var("REGISTRY_API_KEY")
    timeout_seconds = env_float(
        "REGISTRY_TIMEOUT_SECONDS",
        default=DEFAULT_REGISTRY_TIMEOUT_SECONDS,
    )
    return RegistryConfig(
        base_url=base_url,
        api_key=api_key,
        resilience=build_registry_resilience(
            base_url,
            api_key=api_key,
            timeout_seconds=timeout_seconds,
        ),
    )
