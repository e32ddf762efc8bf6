from __future__ import annotations

import asyncio

import pytest

from chainseed.domain.cancellation import CancelToken
from chainseed.domain.errors import SeedCancelledError, SeedError


def test_token_starts_uncancelled() -> None:
    token = CancelToken()

    token.raise_if_cancelled()

    assert not token.is_cancelled


def test_cancel_is_observed_by_raise_if_cancelled() -> None:
    token = CancelToken()
    token.cancel()

    with pytest.raises(SeedCancelledError) as excinfo:
        token.raise_if_cancelled()

    assert isinstance(excinfo.value, SeedError)
    assert str(excinfo.value) == "Seeding run was cancelled"


def test_wait_async_returns_once_cancelled() -> None:
    token = CancelToken()

    async def scenario() -> None:
        asyncio.get_running_loop().call_later(0.01, token.cancel)
        await asyncio.wait_for(token.wait_async(poll_interval=0.001), timeout=2)

    asyncio.run(scenario())

    assert token.is_cancelled


def test_wait_async_keeps_waiting_without_cancel() -> None:
    token = CancelToken()

    async def scenario() -> None:
        await asyncio.wait_for(token.wait_async(poll_interval=0.001), timeout=0.05)

    with pytest.raises(TimeoutError):
        asyncio.run(scenario())
