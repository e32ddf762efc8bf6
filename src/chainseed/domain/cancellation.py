"""Cooperative cancellation shared between signal handlers and adapters."""

from __future__ import annotations

import asyncio
import threading

from .errors import SeedCancelledError

DEFAULT_POLL_INTERVAL_SECONDS = 0.05


class CancelToken:
    """Thread-safe flag observed by registry calls.

    Signal handlers call :meth:`cancel`; adapters call :meth:`raise_if_cancelled`
    before each request and race in-flight requests against :meth:`wait_async`.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SeedCancelledError

    async def wait_async(self, *, poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS) -> None:
        # threading.Event cannot be awaited; poll so the event loop stays responsive
        while not self._event.is_set():
            await asyncio.sleep(poll_interval)
