from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIG_DFL, SIGINT, SIGTERM, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from chainseed.app import seed_from_coingecko, seed_from_files
from chainseed.config import ConfigurationError, configure_logging
from chainseed.domain.cancellation import CancelToken
from chainseed.domain.seeding import StageName, format_summary

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from chainseed.domain.seeding import RunOutcome

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2
EXIT_ITEM_FAILURES = 3


def _parse_stages(value: str) -> tuple[StageName, ...]:
    names = [part.strip() for part in value.split(",") if part.strip()]
    if not names:
        raise argparse.ArgumentTypeError("Expected at least one stage name")
    try:
        return tuple(StageName(name) for name in names)
    except ValueError as exc:
        valid = ", ".join(StageName)
        raise argparse.ArgumentTypeError(
            f"Unknown stage in {value!r}; valid stages: {valid}"
        ) from exc


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {number}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--dry-run",
        action="store_true",
        help="Log create calls instead of sending them (listings still hit the registry)",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    common.add_argument(
        "--only",
        type=_parse_stages,
        help="Comma separated subset of stages to run (chains,assets,deployments)",
    )
    common.add_argument(
        "--skip-connectivity-check",
        action="store_true",
        help="Do not call ListChains before seeding",
    )
    common.add_argument(
        "--fail-on-item-errors",
        action="store_true",
        help="Exit with status 3 when any item failed",
    )

    parser = argparse.ArgumentParser(description="Seed the asset registry with reference data")
    subparsers = parser.add_subparsers(dest="command", required=True)

    files = subparsers.add_parser(
        "files",
        parents=[common],
        help="Seed from chains.json, assets.json and deployments.json",
    )
    files.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the seed files (defaults to CHAINSEED_DATA_DIR)",
    )

    coingecko = subparsers.add_parser(
        "coingecko",
        parents=[common],
        help="Seed from CoinGecko's top assets by market cap",
    )
    coingecko.add_argument(
        "--limit",
        type=_positive_int,
        help="Number of top assets to fetch (default: 100)",
    )

    return parser.parse_args(list(argv))


def _run_command(args: argparse.Namespace, *, cancel_token: CancelToken) -> RunOutcome:
    if args.command == "files":
        return seed_from_files(
            data_dir=args.data_dir,
            cancel_token=cancel_token,
            stages=args.only,
            dry_run=args.dry_run,
            check_registry=not args.skip_connectivity_check,
        )
    if args.command == "coingecko":
        return seed_from_coingecko(
            limit=args.limit,
            cancel_token=cancel_token,
            stages=args.only,
            dry_run=args.dry_run,
            check_registry=not args.skip_connectivity_check,
        )
    raise ValueError(f"Unsupported command: {args.command}")


def _exit_code(outcome: RunOutcome, *, fail_on_item_errors: bool) -> int:
    if outcome.fatal:
        return EXIT_FATAL
    if fail_on_item_errors and outcome.has_item_failures:
        return EXIT_ITEM_FAILURES
    return EXIT_OK


def _install_signal_handlers(cancel_token: CancelToken) -> None:
    def handler(signal_received: int, _frame: FrameType | None) -> None:
        log.warning("Received signal %s, cancelling seeding run", signal_received)
        cancel_token.cancel()
        # a second signal terminates immediately
        signal(signal_received, SIG_DFL)

    signal(SIGINT, handler)
    signal(SIGTERM, handler)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    # argparse exits with status 2 on invalid arguments
    parsed_args = _parse_args(args_list)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    cancel_token = CancelToken()
    _install_signal_handlers(cancel_token)

    try:
        outcome = _run_command(parsed_args, cancel_token=cancel_token)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(EXIT_USAGE)
    except Exception:
        log.exception("Fatal error during seeding")
        sys.exit(EXIT_FATAL)

    log.info("Seeding summary:\n%s", format_summary(outcome))
    code = _exit_code(outcome, fail_on_item_errors=parsed_args.fail_on_item_errors)
    if code != EXIT_OK:
        sys.exit(code)


if __name__ == "__main__":
    main()
