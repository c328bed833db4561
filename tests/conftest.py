"""
Shared fixtures for converter tests.
"""

from datetime import UTC, datetime, timedelta

import pytest

from application.services import CurrencyService
from config.currencies import SUPPORTED_CURRENCIES
from domain.exceptions.currency import PersistenceError
from domain.models.currency import RateSnapshot, RateTable

EXAMPLE_RATES = {'USD': 0.0011, 'EUR': 0.00095, 'GBP': 0.00082, 'JPY': 0.165}


class FakeStore:
    """Dict-backed KeyValueStore that can be told to fail."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})
        self.fail_reads = False
        self.fail_writes = False
        self.closed = False

    async def get(self, key):
        if self.fail_reads:
            raise PersistenceError('read failed')
        return self.data.get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise PersistenceError('write failed')
        self.data[key] = value

    async def remove(self, key):
        if self.fail_writes:
            raise PersistenceError('remove failed')
        self.data.pop(key, None)

    async def close(self):
        self.closed = True


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 11, 5, 10, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_table():
    return RateTable(base='ARS', rates=EXAMPLE_RATES)


@pytest.fixture
def snapshot(rate_table):
    return RateSnapshot(table=rate_table, timestamp=datetime(2025, 11, 1, 9, 0, 0, tzinfo=UTC))


@pytest.fixture
def currency_service():
    return CurrencyService(SUPPORTED_CURRENCIES)
