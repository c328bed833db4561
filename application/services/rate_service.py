import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import (
	FeedUnavailableError,
	NoRatesAvailableError,
	PersistenceError,
	ProviderError,
)
from domain.models.currency import RateSnapshot, RateTable
from infrastructure.persistence.base import KeyValueStore
from infrastructure.persistence.schemas import (
	RATES_KEY,
	PersistedDataError,
	decode_snapshot,
	encode_snapshot,
)
from infrastructure.providers.base import RateFeedProvider

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
	return datetime.now(UTC)


class RateService:
	"""Owns the live rate snapshot and decides what happens when the feed fails.

	Refreshing is always explicit. A failed refresh keeps whatever snapshot is
	already loaded; only the absence of any snapshot is reported as
	NoRatesAvailableError.
	"""

	def __init__(
		self,
		provider: RateFeedProvider,
		store: KeyValueStore,
		base_currency: str,
		retry_attempts: int = 1,
		retry_backoff: float = 1.0,
		max_age: timedelta | None = None,
		clock: Callable[[], datetime] = _utc_now,
	):
		self.provider = provider
		self.store = store
		self.base_currency = base_currency
		self.retry_attempts = max(1, retry_attempts)
		self.retry_backoff = retry_backoff
		self.max_age = max_age
		self.clock = clock
		self._snapshot: RateSnapshot | None = None

	def get_snapshot(self) -> RateSnapshot | None:
		return self._snapshot

	def hydrate(self, snapshot: RateSnapshot | None) -> None:
		self._snapshot = snapshot
		if snapshot is not None:
			logger.info(
				f'Hydrated {len(snapshot.table.rates)} {snapshot.table.base} rates '
				f'captured at {snapshot.timestamp.isoformat()}'
			)

	async def load(self) -> RateSnapshot | None:
		"""Read the persisted snapshot and hydrate from it. Never raises."""
		try:
			raw = await self.store.get(RATES_KEY)
		except PersistenceError as e:
			logger.error(f'Could not read saved rates: {e}')
			raw = None

		snapshot = None
		if raw is not None:
			try:
				snapshot = decode_snapshot(raw, default_base=self.base_currency)
			except PersistedDataError as e:
				logger.warning(f'Ignoring saved rates: {e}')

		if snapshot is not None and snapshot.table.base != self.base_currency:
			logger.warning(
				f'Ignoring saved rates for base {snapshot.table.base}, '
				f'configured base is {self.base_currency}'
			)
			snapshot = None

		self.hydrate(snapshot)
		return snapshot

	def is_stale(self, now: datetime | None = None) -> bool:
		if self._snapshot is None or self.max_age is None:
			return False
		return self._snapshot.age(now or self.clock()) > self.max_age

	async def refresh(self) -> RateSnapshot:
		try:
			table = await self._fetch()
		except ProviderError as e:
			if self._snapshot is None:
				logger.error(f'Rate refresh failed with no saved rates: {e}')
				raise NoRatesAvailableError(
					f'No {self.base_currency} rates available: {e}'
				) from e
			e.has_snapshot = True
			logger.warning(f'Rate refresh failed, keeping rates from {self._snapshot.timestamp}: {e}')
			raise

		timestamp = self.clock()
		if self._snapshot is not None and timestamp < self._snapshot.timestamp:
			timestamp = self._snapshot.timestamp

		self._snapshot = RateSnapshot(table=table, timestamp=timestamp)
		logger.info(f'Refreshed {len(table.rates)} {table.base} rates from {self.provider.name}')

		await self._persist(self._snapshot)
		return self._snapshot

	async def _fetch(self) -> RateTable:
		retrying = AsyncRetrying(
			stop=stop_after_attempt(self.retry_attempts),
			wait=wait_exponential(multiplier=self.retry_backoff, max=10),
			retry=retry_if_exception_type(FeedUnavailableError),
			reraise=True,
		)
		return await retrying(self.provider.fetch_rates, self.base_currency)

	async def _persist(self, snapshot: RateSnapshot) -> None:
		try:
			await self.store.set(RATES_KEY, encode_snapshot(snapshot))
		except PersistenceError as e:
			logger.error(f'Could not save rates, keeping them in memory only: {e}')
