import logging
from datetime import UTC, datetime

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from domain.exceptions.currency import PersistenceError
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.store import KeyValueEntryDB

logger = logging.getLogger(__name__)


class SqlKeyValueStore:
	def __init__(self, database: Database):
		self.database = database

	async def get(self, key: str) -> str | None:
		try:
			async with self.database.session() as session:
				entry = await session.get(KeyValueEntryDB, key)
				return entry.value if entry else None
		except SQLAlchemyError as e:
			raise PersistenceError(f'Failed to read {key}: {e}') from e

	async def set(self, key: str, value: str) -> None:
		try:
			async with self.database.session() as session:
				await session.merge(
					KeyValueEntryDB(key=key, value=value, updated_at=datetime.now(UTC))
				)
		except SQLAlchemyError as e:
			raise PersistenceError(f'Failed to write {key}: {e}') from e
		logger.debug(f'Stored {len(value)} bytes under {key}')

	async def remove(self, key: str) -> None:
		try:
			async with self.database.session() as session:
				await session.execute(delete(KeyValueEntryDB).where(KeyValueEntryDB.key == key))
		except SQLAlchemyError as e:
			raise PersistenceError(f'Failed to remove {key}: {e}') from e

	async def close(self) -> None:
		await self.database.close()
