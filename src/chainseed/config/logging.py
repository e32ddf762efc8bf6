"""Root logger setup for the chainseed CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# per-request transport logs drown out per-item seeding outcomes
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "hishel")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for a seeding run.

    ``force=True`` replaces handlers installed earlier, which the CLI uses
    when ``--verbose`` switches to DEBUG after the initial setup. Transport
    libraries stay at WARNING unless ``level`` is stricter.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=force)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
