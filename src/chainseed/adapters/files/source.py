"""Record source backed by ``chains.json``, ``assets.json`` and ``deployments.json``."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from chainseed.domain.errors import RecordSourceError
from chainseed.domain.model import AssetCandidate, ChainCandidate, DeploymentCandidate

from .schema import ASSET_FILE, CHAIN_FILE, DEPLOYMENT_FILE

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import TypeAdapter

    from .schema import AssetRecord, ChainRecord, DeploymentRecord

log = getLogger(__name__)

CHAINS_FILENAME = "chains.json"
ASSETS_FILENAME = "assets.json"
DEPLOYMENTS_FILENAME = "deployments.json"


class FileRecordSource:
    """Read candidates from a directory of JSON arrays.

    Files are read lazily, once per ``load_*`` call, so a run that stops
    after the chain stage never touches the other two files.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir

    def load_chains(self) -> list[ChainCandidate]:
        records = self._read(CHAINS_FILENAME, CHAIN_FILE)
        return [_chain_candidate(record) for record in records]

    def load_assets(self) -> list[AssetCandidate]:
        records = self._read(ASSETS_FILENAME, ASSET_FILE)
        return [_asset_candidate(record) for record in records]

    def load_deployments(self) -> list[DeploymentCandidate]:
        records = self._read(DEPLOYMENTS_FILENAME, DEPLOYMENT_FILE)
        return [_deployment_candidate(record) for record in records]

    def _read[RecordT](self, filename: str, adapter: TypeAdapter[list[RecordT]]) -> list[RecordT]:
        path = self.data_dir / filename
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise RecordSourceError(f"Failed to read {path}: {exc}") from exc
        try:
            records = adapter.validate_json(raw)
        except ValidationError as exc:
            raise RecordSourceError(f"Failed to parse {path}: {exc}") from exc
        log.debug("Read %s records from %s", len(records), path)
        return records


def _chain_candidate(record: ChainRecord) -> ChainCandidate:
    return ChainCandidate(
        chain_id=record.chain_id,
        display_name=record.name,
        chain_type=record.chain_type,
        native_asset_symbol=record.native_asset_symbol,
        rpc_urls=tuple(record.rpc_urls),
        block_explorer_url=record.block_explorer_url,
    )


def _asset_candidate(record: AssetRecord) -> AssetCandidate:
    return AssetCandidate(
        id=record.id,
        symbol=record.symbol,
        display_name=record.name,
        asset_kind=record.type,
        category=record.category,
        description=record.description,
        logo_url=record.logo_url,
        website_url=record.website_url,
        external_reference_id=record.coingecko_id,
        metadata=dict(record.metadata),
    )


def _deployment_candidate(record: DeploymentRecord) -> DeploymentCandidate:
    return DeploymentCandidate(
        asset_symbol=record.asset_symbol,
        chain_id=record.chain_id,
        contract_address=record.contract_address,
        decimals=record.decimals,
        is_native=record.is_native,
    )
