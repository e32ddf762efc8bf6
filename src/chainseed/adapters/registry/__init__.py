"""Asset registry adapter (Connect JSON over HTTP)."""

from __future__ import annotations

from .client import ConnectRegistryClient, RegistryAPIError
from .dry_run import DryRunRegistryClient

__all__ = ["ConnectRegistryClient", "DryRunRegistryClient", "RegistryAPIError"]
