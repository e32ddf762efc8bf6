"""Translate CoinGecko payloads into seeding candidates.

Responsibilities of this module:
- classify coins as native or token assets and pick a category
- map CoinGecko platform ids onto registry chain ids
- validate contract addresses per chain family and drop the ones that fail
- provide the built-in chain table used by the CoinGecko source
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from chainseed.domain.model import (
    NATIVE_PLACEHOLDER_ADDRESS,
    AssetCandidate,
    ChainCandidate,
    DeploymentCandidate,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .schema import CoinGeckoCoin

log = getLogger(__name__)

ASSET_KIND_NATIVE: Final[str] = "ASSET_TYPE_NATIVE"
ASSET_KIND_TOKEN: Final[str] = "ASSET_TYPE_ERC20"
DEFAULT_TOKEN_DECIMALS: Final[int] = 18
MAX_TOKEN_DECIMALS: Final[int] = 18
MAX_DESCRIPTION_LENGTH: Final[int] = 500

NATIVE_SYMBOLS: Final[frozenset[str]] = frozenset(
    {
        "BTC",
        "ETH",
        "BNB",
        "SOL",
        "ADA",
        "AVAX",
        "MATIC",
        "DOT",
        "ATOM",
        "XRP",
        "LTC",
        "BCH",
        "XLM",
        "ALGO",
        "NEAR",
        "FTM",
        "ONE",
    }
)
STABLECOIN_SYMBOLS: Final[frozenset[str]] = frozenset(
    {"USDT", "USDC", "DAI", "BUSD", "TUSD", "USDP", "GUSD", "FRAX", "LUSD"}
)

DEFAULT_CATEGORY: Final[str] = "cryptocurrency"
# checked in order against the lower-cased coin name
CATEGORY_KEYWORDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("defi", ("defi", "decentralized finance")),
    ("exchange", ("exchange", "dex", "swap")),
    ("gaming-metaverse", ("gaming", "game", "metaverse", "nft")),
    ("meme", ("meme", "dog", "cat", "pepe", "shib")),
)


class ChainFamily(StrEnum):
    EVM = "EVM"
    SOLANA = "SOLANA"
    UTXO = "UTXO"


@dataclass(frozen=True, slots=True)
class ChainDefinition:
    chain_id: str
    name: str
    chain_type: str
    family: ChainFamily
    native_asset_symbol: str
    native_decimals: int
    rpc_urls: tuple[str, ...]
    block_explorer_url: str

    def to_candidate(self) -> ChainCandidate:
        return ChainCandidate(
            chain_id=self.chain_id,
            display_name=self.name,
            chain_type=self.chain_type,
            native_asset_symbol=self.native_asset_symbol,
            rpc_urls=self.rpc_urls,
            block_explorer_url=self.block_explorer_url,
        )


DEFAULT_CHAIN_TABLE: Final[tuple[ChainDefinition, ...]] = (
    ChainDefinition(
        chain_id="ethereum",
        name="Ethereum",
        chain_type="EVM",
        family=ChainFamily.EVM,
        native_asset_symbol="ETH",
        native_decimals=18,
        rpc_urls=("https://eth.llamarpc.com", "https://rpc.ankr.com/eth"),
        block_explorer_url="https://etherscan.io",
    ),
    ChainDefinition(
        chain_id="polygon_pos",
        name="Polygon",
        chain_type="EVM",
        family=ChainFamily.EVM,
        native_asset_symbol="MATIC",
        native_decimals=18,
        rpc_urls=("https://polygon-rpc.com", "https://rpc.ankr.com/polygon"),
        block_explorer_url="https://polygonscan.com",
    ),
    ChainDefinition(
        chain_id="binance_smart_chain",
        name="BSC",
        chain_type="EVM",
        family=ChainFamily.EVM,
        native_asset_symbol="BNB",
        native_decimals=18,
        rpc_urls=("https://bsc-dataseed.binance.org", "https://rpc.ankr.com/bsc"),
        block_explorer_url="https://bscscan.com",
    ),
    ChainDefinition(
        chain_id="solana",
        name="Solana",
        chain_type="NON_EVM",
        family=ChainFamily.SOLANA,
        native_asset_symbol="SOL",
        native_decimals=9,
        rpc_urls=("https://api.mainnet-beta.solana.com",),
        block_explorer_url="https://solscan.io",
    ),
    ChainDefinition(
        chain_id="bitcoin",
        name="Bitcoin",
        chain_type="UTXO",
        family=ChainFamily.UTXO,
        native_asset_symbol="BTC",
        native_decimals=8,
        rpc_urls=("https://blockstream.info/api",),
        block_explorer_url="https://blockstream.info",
    ),
    ChainDefinition(
        chain_id="arbitrum_one",
        name="Arbitrum",
        chain_type="EVM",
        family=ChainFamily.EVM,
        native_asset_symbol="ETH",
        native_decimals=18,
        rpc_urls=("https://arb1.arbitrum.io/rpc", "https://rpc.ankr.com/arbitrum"),
        block_explorer_url="https://arbiscan.io",
    ),
    ChainDefinition(
        chain_id="optimistic_ethereum",
        name="Optimism",
        chain_type="EVM",
        family=ChainFamily.EVM,
        native_asset_symbol="ETH",
        native_decimals=18,
        rpc_urls=("https://mainnet.optimism.io", "https://rpc.ankr.com/optimism"),
        block_explorer_url="https://optimistic.etherscan.io",
    ),
)

# CoinGecko platform id -> (registry chain id, address family)
PLATFORM_CHAINS: Final[Mapping[str, tuple[str, ChainFamily]]] = MappingProxyType(
    {
        "ethereum": ("ethereum", ChainFamily.EVM),
        "polygon-pos": ("polygon_pos", ChainFamily.EVM),
        "binance-smart-chain": ("binance_smart_chain", ChainFamily.EVM),
        "solana": ("solana", ChainFamily.SOLANA),
        "bitcoin": ("bitcoin", ChainFamily.UTXO),
        "arbitrum-one": ("arbitrum_one", ChainFamily.EVM),
        "optimistic-ethereum": ("optimistic_ethereum", ChainFamily.EVM),
        "avalanche": ("avalanche", ChainFamily.EVM),
        "base": ("base", ChainFamily.EVM),
    }
)

_EVM_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")
_SOLANA_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
_HTML_TAGS = re.compile(r"<[^>]+>")


def chains_for(chain_ids: Iterable[str]) -> list[ChainCandidate]:
    """Return the built-in chains whose id is in ``chain_ids``, in table order."""

    wanted = set(chain_ids)
    unknown = wanted.difference(chain.chain_id for chain in DEFAULT_CHAIN_TABLE)
    if unknown:
        log.warning("No built-in definition for chains: %s", ", ".join(sorted(unknown)))
    return [chain.to_candidate() for chain in DEFAULT_CHAIN_TABLE if chain.chain_id in wanted]


def asset_kind_for(symbol: str) -> str:
    return ASSET_KIND_NATIVE if symbol in NATIVE_SYMBOLS else ASSET_KIND_TOKEN


def category_for(symbol: str, name: str) -> str:
    """Classify by symbol first, then by the first keyword found in ``name``."""

    name_lower = name.lower()
    if symbol in STABLECOIN_SYMBOLS:
        if "algorithmic" in name_lower:
            return "algorithmic-stablecoin"
        return "fiat-backed-stablecoin"
    if symbol in NATIVE_SYMBOLS:
        return "layer-1"
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name_lower for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def clean_description(text: str) -> str:
    cleaned = _HTML_TAGS.sub("", text).strip()
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        return cleaned[:MAX_DESCRIPTION_LENGTH] + "..."
    return cleaned


def translate_asset(coin: CoinGeckoCoin) -> AssetCandidate | None:
    """Map a coin onto an asset candidate, or ``None`` when symbol or name is blank."""

    symbol = coin.symbol.strip().upper()
    name = coin.name.strip()
    if not symbol or not name:
        log.warning("Skipping CoinGecko coin %s without symbol or name", coin.id)
        return None

    image = coin.image
    logo_url = (image.large or image.small or "") if image is not None else ""
    homepage = next((url for url in (coin.links.homepage if coin.links else []) if url), "")
    metadata: dict[str, object] = {"coingecko_id": coin.id}
    if coin.market_cap_rank is not None:
        metadata["market_cap_rank"] = coin.market_cap_rank

    return AssetCandidate(
        id=coin.id,
        symbol=symbol,
        display_name=name,
        asset_kind=asset_kind_for(symbol),
        category=category_for(symbol, name),
        description=clean_description(coin.description.get("en") or ""),
        logo_url=logo_url,
        website_url=homepage,
        external_reference_id=coin.id,
        metadata=metadata,
    )


def is_valid_address(address: str, family: ChainFamily) -> bool:
    match family:
        case ChainFamily.EVM:
            return bool(_EVM_ADDRESS.match(address))
        case ChainFamily.SOLANA:
            return bool(_SOLANA_ADDRESS.match(address))
        case ChainFamily.UTXO:
            # UTXO chains have no token contracts
            return False


def translate_deployments(
    coin: CoinGeckoCoin,
    *,
    chain_ids: Iterable[str],
) -> list[DeploymentCandidate]:
    """Return the deployments of ``coin`` on the configured chains.

    Platform entries that do not map to a configured chain or fail the address
    check are dropped with a warning. Native coins also get a deployment on
    every configured chain whose native asset they are.
    """

    symbol = coin.symbol.strip().upper()
    if not symbol:
        return []
    allowed = set(chain_ids)
    deployments: list[DeploymentCandidate] = []

    if symbol in NATIVE_SYMBOLS:
        deployments.extend(
            DeploymentCandidate(
                asset_symbol=symbol,
                chain_id=chain.chain_id,
                contract_address=NATIVE_PLACEHOLDER_ADDRESS,
                decimals=chain.native_decimals,
                is_native=True,
            )
            for chain in DEFAULT_CHAIN_TABLE
            if chain.chain_id in allowed and chain.native_asset_symbol == symbol
        )

    for platform, raw_address in coin.platforms.items():
        if not platform or not raw_address:
            continue
        mapping = PLATFORM_CHAINS.get(platform.lower())
        if mapping is None:
            log.warning("Skipping %s on unknown platform %s", symbol, platform)
            continue
        chain_id, family = mapping
        if chain_id not in allowed:
            log.debug("Skipping %s on unconfigured chain %s", symbol, chain_id)
            continue
        # some platform entries carry a "platform:" prefix
        address = raw_address.split(":", 1)[-1].strip()
        if not is_valid_address(address, family):
            log.warning(
                "Skipping %s on %s: invalid %s address %r", symbol, chain_id, family, address
            )
            continue
        deployments.append(
            DeploymentCandidate(
                asset_symbol=symbol,
                chain_id=chain_id,
                contract_address=address,
                decimals=_platform_decimals(coin, platform),
            )
        )
    return deployments


def _platform_decimals(coin: CoinGeckoCoin, platform: str) -> int:
    detail = coin.detail_platforms.get(platform)
    if detail is None or detail.decimal_place is None:
        return DEFAULT_TOKEN_DECIMALS
    if not 0 <= detail.decimal_place <= MAX_TOKEN_DECIMALS:
        log.warning(
            "Invalid decimals %s for %s on %s, defaulting to %s",
            detail.decimal_place,
            coin.id,
            platform,
            DEFAULT_TOKEN_DECIMALS,
        )
        return DEFAULT_TOKEN_DECIMALS
    return detail.decimal_place
