"""Pydantic models for the registry's Connect JSON payloads."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConnectCode(StrEnum):
    CANCELED = "canceled"
    UNKNOWN = "unknown"
    INVALID_ARGUMENT = "invalid_argument"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    FAILED_PRECONDITION = "failed_precondition"
    ABORTED = "aborted"
    OUT_OF_RANGE = "out_of_range"
    UNIMPLEMENTED = "unimplemented"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    DATA_LOSS = "data_loss"
    UNAUTHENTICATED = "unauthenticated"


# Used when an error response carries no Connect error body.
HTTP_STATUS_CODES: dict[int, ConnectCode] = {
    400: ConnectCode.INTERNAL,
    401: ConnectCode.UNAUTHENTICATED,
    403: ConnectCode.PERMISSION_DENIED,
    404: ConnectCode.UNIMPLEMENTED,
    429: ConnectCode.UNAVAILABLE,
    502: ConnectCode.UNAVAILABLE,
    503: ConnectCode.UNAVAILABLE,
    504: ConnectCode.UNAVAILABLE,
}


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ConnectError(RegistryBaseModel):
    code: str = ConnectCode.UNKNOWN
    message: str = ""


class CreateChainPayload(RegistryBaseModel):
    chain_type: str
    name: str
    block_explorer_url: str | None = None


class CreateAssetPayload(RegistryBaseModel):
    symbol: str
    name: str
    asset_type: str
    category: str | None = None
    description: str | None = None
    logo_url: str | None = None


class CreateAssetDeploymentPayload(RegistryBaseModel):
    asset_id: str
    chain_id: str
    contract_address: str
    decimals: int
    is_native: bool


class ListAssetsPayload(RegistryBaseModel):
    page_size: int | None = None
    page_token: str | None = None


class RegistryAsset(RegistryBaseModel):
    asset_id: str | None = None
    symbol: str | None = None
    name: str | None = None


class RegistryChain(RegistryBaseModel):
    chain_id: str | None = None
    chain_type: str | None = None
    name: str | None = None


class RegistryDeployment(RegistryBaseModel):
    deployment_id: str | None = None
    asset_id: str | None = None
    chain_id: str | None = None


class CreateChainResponse(RegistryBaseModel):
    chain: RegistryChain | None = None


class CreateAssetResponse(RegistryBaseModel):
    asset: RegistryAsset | None = None


class CreateAssetDeploymentResponse(RegistryBaseModel):
    deployment: RegistryDeployment | None = None


class ListAssetsResponse(RegistryBaseModel):
    assets: list[RegistryAsset] = Field(default_factory=list["RegistryAsset"])
    next_page_token: str | None = None


class ListChainsResponse(RegistryBaseModel):
    chains: list[RegistryChain] = Field(default_factory=list["RegistryChain"])
