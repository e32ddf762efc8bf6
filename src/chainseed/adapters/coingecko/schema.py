"""CoinGecko response schemas for market listings and coin details."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

type CoinGeckoId = str
type PlatformId = str


class CoinGeckoBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CoinGeckoMarket(CoinGeckoBaseModel):
    """One row of ``/coins/markets``."""

    id: CoinGeckoId
    symbol: str
    name: str
    image: str | None = None
    market_cap_rank: int | None = None


class CoinGeckoImage(CoinGeckoBaseModel):
    thumb: str | None = None
    small: str | None = None
    large: str | None = None


class CoinGeckoLinks(CoinGeckoBaseModel):
    homepage: list[str | None] = Field(default_factory=list[str | None])


class CoinGeckoDetailPlatform(CoinGeckoBaseModel):
    decimal_place: int | None = None
    contract_address: str | None = None


class CoinGeckoCoin(CoinGeckoBaseModel):
    """Subset of ``/coins/{id}`` used for assets and deployments."""

    id: CoinGeckoId
    symbol: str
    name: str
    description: dict[str, str | None] = Field(default_factory=dict[str, str | None])
    image: CoinGeckoImage | None = None
    links: CoinGeckoLinks | None = None
    platforms: dict[PlatformId, str | None] = Field(default_factory=dict[str, str | None])
    detail_platforms: dict[PlatformId, CoinGeckoDetailPlatform | None] = Field(
        default_factory=dict[str, CoinGeckoDetailPlatform | None]
    )
    market_cap_rank: int | None = None

    @classmethod
    def from_market(cls, market: CoinGeckoMarket) -> CoinGeckoCoin:
        """Build a detail record carrying only what the market row knows."""

        return cls(
            id=market.id,
            symbol=market.symbol,
            name=market.name,
            image=CoinGeckoImage(large=market.image),
            market_cap_rank=market.market_cap_rank,
        )


class CoinGeckoErrorStatus(CoinGeckoBaseModel):
    error_code: int | None = None
    error_message: str | None = None


class CoinGeckoErrorResponse(CoinGeckoBaseModel):
    status: CoinGeckoErrorStatus
