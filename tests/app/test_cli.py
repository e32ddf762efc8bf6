from __future__ import annotations

from pathlib import Path
from signal import SIG_DFL, SIGINT

import pytest

from chainseed.config import ConfigurationError
from chainseed.domain.cancellation import CancelToken
from chainseed.domain.seeding import ItemFailure, RunOutcome, StageName, StageOutcome
from chainseed.ui import cli

CLEAN_RUN = RunOutcome(stages=(StageOutcome(stage="chains", attempted=1, created=1),))
FAILED_ITEM_RUN = RunOutcome(
    stages=(
        StageOutcome(
            stage="assets",
            attempted=1,
            failed=1,
            failures=(ItemFailure(key="USDC", detail="invalid_argument: bad logo"),),
        ),
    )
)


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    calls: dict[str, object] = {}

    def fake_seed(**kwargs: object) -> RunOutcome:
        calls.update(kwargs)
        return CLEAN_RUN

    monkeypatch.setattr(cli, "seed_from_files", fake_seed)
    monkeypatch.setattr(cli, "seed_from_coingecko", fake_seed)
    monkeypatch.setattr(cli, "_install_signal_handlers", lambda _token: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    return calls


def test_files_command_defaults(captured: dict[str, object]) -> None:
    cli.main(["files"])

    assert captured["data_dir"] is None
    assert captured["stages"] is None
    assert captured["dry_run"] is False
    assert captured["check_registry"] is True


def test_files_command_with_flags(captured: dict[str, object]) -> None:
    cli.main(
        [
            "files",
            "--data-dir",
            "seed",
            "--dry-run",
            "--only",
            "assets, deployments",
            "--skip-connectivity-check",
        ]
    )

    assert captured["data_dir"] == Path("seed")
    assert captured["stages"] == (StageName.ASSETS, StageName.DEPLOYMENTS)
    assert captured["dry_run"] is True
    assert captured["check_registry"] is False


def test_coingecko_command_passes_limit(captured: dict[str, object]) -> None:
    cli.main(["coingecko", "--limit", "25"])

    assert captured["limit"] == 25
    assert "data_dir" not in captured


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["files", "--only", "tokens"],
        ["files", "--only", " , "],
        ["coingecko", "--limit", "0"],
        ["coingecko", "--limit", "many"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(
    captured: dict[str, object],
    argv: list[str],
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == cli.EXIT_USAGE
    assert captured == {}


def test_fatal_outcome_exits_with_status_one(monkeypatch: pytest.MonkeyPatch) -> None:
    fatal = RunOutcome(fatal=True, fatal_stage="deployments", fatal_detail="listing failed")
    monkeypatch.setattr(cli, "seed_from_files", lambda **_kwargs: fatal)
    monkeypatch.setattr(cli, "_install_signal_handlers", lambda _token: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["files"])

    assert excinfo.value.code == cli.EXIT_FATAL


def test_item_failures_only_fail_when_requested(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "seed_from_files", lambda **_kwargs: FAILED_ITEM_RUN)
    monkeypatch.setattr(cli, "_install_signal_handlers", lambda _token: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)

    cli.main(["files"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["files", "--fail-on-item-errors"])

    assert excinfo.value.code == cli.EXIT_ITEM_FAILURES


def test_configuration_error_exits_with_usage_status(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_seed(**_kwargs: object) -> RunOutcome:
        raise ConfigurationError("Missing configuration for: REGISTRY_BASE_URL")

    monkeypatch.setattr(cli, "seed_from_files", broken_seed)
    monkeypatch.setattr(cli, "_install_signal_handlers", lambda _token: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["files"])

    assert excinfo.value.code == cli.EXIT_USAGE


def test_unexpected_error_exits_with_fatal_status(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_seed(**_kwargs: object) -> RunOutcome:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "seed_from_files", broken_seed)
    monkeypatch.setattr(cli, "_install_signal_handlers", lambda _token: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["files"])

    assert excinfo.value.code == cli.EXIT_FATAL


def test_exit_code_prefers_fatal_over_item_failures() -> None:
    outcome = RunOutcome(stages=FAILED_ITEM_RUN.stages, fatal=True, fatal_stage="deployments")

    assert cli._exit_code(outcome, fail_on_item_errors=True) == cli.EXIT_FATAL
    assert cli._exit_code(CLEAN_RUN, fail_on_item_errors=True) == cli.EXIT_OK


def test_signal_handler_cancels_and_restores_default(monkeypatch: pytest.MonkeyPatch) -> None:
    installed: list[tuple[int, object]] = []
    monkeypatch.setattr(cli, "signal", lambda signum, handler: installed.append((signum, handler)))
    token = CancelToken()

    cli._install_signal_handlers(token)
    handler = dict(installed)[SIGINT]
    assert callable(handler)
    handler(SIGINT, None)

    assert token.is_cancelled
    assert installed[-1] == (SIGINT, SIG_DFL)
