import logging
from collections.abc import Callable
from datetime import UTC, datetime

from domain.exceptions.currency import PersistenceError
from domain.models.currency import ConversionRecord
from infrastructure.persistence.base import KeyValueStore
from infrastructure.persistence.schemas import (
	HISTORY_KEY,
	PersistedDataError,
	decode_history,
	encode_history,
)

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20


def _utc_now() -> datetime:
	return datetime.now(UTC)


class HistoryService:
	"""Newest-first, capacity-bounded ledger of past conversions."""

	def __init__(
		self,
		store: KeyValueStore,
		capacity: int = DEFAULT_CAPACITY,
		clock: Callable[[], datetime] = _utc_now,
	):
		if capacity < 1:
			raise ValueError('History capacity must be at least 1')
		self.store = store
		self.capacity = capacity
		self.clock = clock
		self._entries: tuple[ConversionRecord, ...] = ()
		self._last_id = 0

	@property
	def entries(self) -> tuple[ConversionRecord, ...]:
		return self._entries

	def __len__(self) -> int:
		return len(self._entries)

	def _next_id(self, timestamp: datetime) -> int:
		# Millisecond ids, bumped when two records land in the same millisecond.
		candidate = int(timestamp.timestamp() * 1000)
		self._last_id = max(candidate, self._last_id + 1)
		return self._last_id

	async def record(
		self,
		source: str,
		target: str,
		amount: float,
		result: float,
		timestamp: datetime | None = None,
	) -> ConversionRecord:
		timestamp = timestamp or self.clock()
		entry = ConversionRecord(
			id=self._next_id(timestamp),
			source=source,
			target=target,
			amount=amount,
			result=result,
			timestamp=timestamp,
		)
		self._entries = (entry, *self._entries)[: self.capacity]
		await self._persist()
		return entry

	async def clear(self) -> None:
		self._entries = ()
		try:
			await self.store.remove(HISTORY_KEY)
		except PersistenceError as e:
			logger.error(f'Could not remove saved history: {e}')
		logger.info('History cleared')

	async def load(self) -> tuple[ConversionRecord, ...]:
		"""Restore the ledger from storage. Missing or corrupt data yields an empty ledger."""
		entries: list[ConversionRecord] = []
		try:
			raw = await self.store.get(HISTORY_KEY)
			if raw is not None:
				entries = decode_history(raw)
		except PersistenceError as e:
			logger.error(f'Could not read saved history: {e}')
		except PersistedDataError as e:
			logger.warning(f'Discarding corrupt history: {e}')

		entries.sort(key=lambda r: r.id, reverse=True)
		self._entries = tuple(entries[: self.capacity])
		self._last_id = max((r.id for r in self._entries), default=self._last_id)
		logger.info(f'Loaded {len(self._entries)} history entries')
		return self._entries

	async def _persist(self) -> None:
		try:
			await self.store.set(HISTORY_KEY, encode_history(self._entries))
		except PersistenceError as e:
			logger.error(f'Could not save history, keeping it in memory only: {e}')
