"""Per-stage and per-run outcome aggregation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from itertools import chain


class StageName(StrEnum):
    """Seeding stages in their mandatory execution order."""

    CHAINS = "chains"
    ASSETS = "assets"
    DEPLOYMENTS = "deployments"


STAGE_ORDER: tuple[StageName, ...] = (StageName.CHAINS, StageName.ASSETS, StageName.DEPLOYMENTS)


@dataclass(frozen=True, slots=True)
class ItemFailure:
    key: str
    detail: str


@dataclass(frozen=True, slots=True)
class StageOutcome:
    """Immutable counters for one stage.

    Every step returns a new instance so the fold over candidates cannot
    break ``created + skipped_duplicate + failed == attempted``.
    """

    stage: str
    attempted: int = 0
    created: int = 0
    skipped_duplicate: int = 0
    failed: int = 0
    failures: tuple[ItemFailure, ...] = ()

    def __post_init__(self) -> None:
        if self.created + self.skipped_duplicate + self.failed != self.attempted:
            raise ValueError(
                f"Stage {self.stage} counts do not add up: "
                f"{self.created} + {self.skipped_duplicate} + {self.failed} != {self.attempted}"
            )
        if len(self.failures) != self.failed:
            raise ValueError(f"Stage {self.stage} failure list does not match failed count")

    def with_created(self) -> StageOutcome:
        return replace(self, attempted=self.attempted + 1, created=self.created + 1)

    def with_skipped_duplicate(self) -> StageOutcome:
        return replace(
            self,
            attempted=self.attempted + 1,
            skipped_duplicate=self.skipped_duplicate + 1,
        )

    def with_failure(self, key: str, detail: str) -> StageOutcome:
        return replace(
            self,
            attempted=self.attempted + 1,
            failed=self.failed + 1,
            failures=(*self.failures, ItemFailure(key=key, detail=detail)),
        )


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Result of a pipeline run.

    ``stages`` only holds stages that ran to completion. On a fatal abort the
    failing stage is named in ``fatal_stage`` and has no outcome.
    """

    stages: tuple[StageOutcome, ...] = ()
    fatal: bool = False
    fatal_stage: str | None = None
    fatal_detail: str | None = None

    def stage(self, name: str) -> StageOutcome | None:
        for outcome in self.stages:
            if outcome.stage == name:
                return outcome
        return None

    def attempted(self, name: str) -> int:
        outcome = self.stage(name)
        return outcome.attempted if outcome is not None else 0

    @property
    def failures(self) -> tuple[ItemFailure, ...]:
        return tuple(chain.from_iterable(outcome.failures for outcome in self.stages))

    @property
    def has_item_failures(self) -> bool:
        return any(outcome.failed for outcome in self.stages)

    @property
    def succeeded(self) -> bool:
        return not self.fatal


_SUMMARY_COLUMNS = ("stage", "attempted", "created", "skipped", "failed")


def format_summary(run: RunOutcome) -> str:
    """Render the operator-facing summary table."""

    rows = [
        (
            outcome.stage,
            str(outcome.attempted),
            str(outcome.created),
            str(outcome.skipped_duplicate),
            str(outcome.failed),
        )
        for outcome in run.stages
    ]
    widths = [
        max(len(column), *(len(row[index]) for row in rows)) if rows else len(column)
        for index, column in enumerate(_SUMMARY_COLUMNS)
    ]

    def render(cells: tuple[str, ...]) -> str:
        first, *rest = cells
        parts = [first.ljust(widths[0])]
        parts.extend(cell.rjust(width) for cell, width in zip(rest, widths[1:], strict=True))
        return "  ".join(parts)

    lines = [render(_SUMMARY_COLUMNS)]
    lines.extend(render(row) for row in rows)
    for failure in run.failures:
        lines.append(f"failed: {failure.key}: {failure.detail}")
    if run.fatal:
        lines.append(f"aborted during {run.fatal_stage}: {run.fatal_detail}")
    return "\n".join(lines)
