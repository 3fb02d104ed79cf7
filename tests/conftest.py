from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from pyfeedlot.alerts import AlertNotifier
from pyfeedlot.config import FeedlotConfig
from pyfeedlot.storage import MemoryStorage
from pyfeedlot.store import FeedlotStore


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 15, 12, 0, tzinfo=UTC))


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def store(storage: MemoryStorage, clock: FakeClock, id_factory: Callable[[], str]) -> FeedlotStore:
    return FeedlotStore(storage, clock=clock, id_factory=id_factory)


@pytest.fixture
def small_store(storage: MemoryStorage, clock: FakeClock, id_factory: Callable[[], str]) -> FeedlotStore:
    """Three lots of 100 head each."""
    config = FeedlotConfig(lot_count=3, lot_capacity=100)
    return FeedlotStore(storage, config=config, clock=clock, id_factory=id_factory)


@pytest.fixture
def notifier(small_store: FeedlotStore) -> AlertNotifier:
    return AlertNotifier(small_store)
