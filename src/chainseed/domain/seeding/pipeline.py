"""Orchestrator running the seeding stages in dependency order."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from chainseed.domain.errors import SeedError

from .outcome import STAGE_ORDER, RunOutcome, StageName
from .stages import AssetStage, ChainStage, DeploymentStage

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from chainseed.domain.ports.records import RecordSource
    from chainseed.domain.ports.registry import RegistryClient

    from .outcome import StageOutcome
    from .stages import SeedingStage

log = getLogger(__name__)


def default_stages() -> tuple[SeedingStage, ...]:
    return (ChainStage(), AssetStage(), DeploymentStage())


@dataclass(frozen=True, slots=True)
class SeedingPipeline:
    """Compose and execute the seeding stages.

    Stages always run in ``chains -> assets -> deployments`` order; the
    deployment stage carries the asset-index barrier. Any ``SeedError`` aborts
    the run and is reported on the returned ``RunOutcome`` instead of raised.
    """

    stages: Sequence[SeedingStage] = field(default_factory=default_stages)

    def __post_init__(self) -> None:
        positions = [STAGE_ORDER.index(stage.name) for stage in self.stages]
        if positions != sorted(set(positions)):
            names = ", ".join(stage.name for stage in self.stages)
            raise ValueError(f"Stages must be unique and in dependency order, got: {names}")

    @classmethod
    def for_stages(cls, names: Iterable[str]) -> SeedingPipeline:
        """Return a pipeline restricted to ``names``, kept in dependency order."""

        selected = {StageName(name) for name in names}
        return cls(stages=tuple(stage for stage in default_stages() if stage.name in selected))

    def run(self, source: RecordSource, client: RegistryClient) -> RunOutcome:
        completed: list[StageOutcome] = []
        for stage in self.stages:
            log.info("Starting %s stage", stage.name)
            try:
                outcome = stage.run(source, client)
            except SeedError as exc:
                log.error("Seeding aborted during %s stage: %s", stage.name, exc)  # noqa: TRY400
                return RunOutcome(
                    stages=tuple(completed),
                    fatal=True,
                    fatal_stage=str(stage.name),
                    fatal_detail=str(exc),
                )
            completed.append(outcome)

        log.info("Seeding completed: %s stages", len(completed))
        return RunOutcome(stages=tuple(completed))
