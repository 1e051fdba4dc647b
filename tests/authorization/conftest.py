"""Shared fixtures for authorization tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import pytest

from rootguard.authorization.models import QueueConfig
from rootguard.authorization.queue import AuthorizationQueue


class FakeClock:
    """Manually advanced UTC clock.

    Only affects timestamps; the per-request timers still run on the event
    loop's own clock.
    """

    def __init__(self) -> None:
        self.current = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def queue() -> AsyncIterator[AuthorizationQueue]:
    q = AuthorizationQueue(QueueConfig(default_timeout=30, cleanup_interval=60, retention=3600))
    yield q
    q.clear()


@pytest.fixture
async def clocked_queue(clock: FakeClock) -> AsyncIterator[AuthorizationQueue]:
    q = AuthorizationQueue(
        QueueConfig(default_timeout=30, cleanup_interval=60, retention=3600),
        clock=clock,
    )
    yield q
    q.clear()
