"""Pydantic schemas for the JSON seed files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class SeedFileModel(BaseModel):
    """Chain and deployment fields are all required; assets only need symbol, name and type."""

    model_config = ConfigDict(extra="ignore")


class ChainRecord(SeedFileModel):
    chain_id: str = Field(min_length=1)
    name: str
    chain_type: str
    native_asset_symbol: str
    rpc_urls: list[str]
    block_explorer_url: str


class AssetRecord(SeedFileModel):
    symbol: str = Field(min_length=1)
    name: str
    type: str
    id: str = ""
    category: str = ""
    description: str = ""
    logo_url: str = ""
    website_url: str = ""
    coingecko_id: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict[str, Any])


class DeploymentRecord(SeedFileModel):
    asset_symbol: str = Field(min_length=1)
    chain_id: str = Field(min_length=1)
    contract_address: str
    decimals: int = Field(ge=0)
    is_native: bool


CHAIN_FILE = TypeAdapter(list[ChainRecord])
ASSET_FILE = TypeAdapter(list[AssetRecord])
DEPLOYMENT_FILE = TypeAdapter(list[DeploymentRecord])
