from redis import asyncio as redis
from redis.exceptions import RedisError

from domain.exceptions.currency import PersistenceError


class RedisKeyValueStore:
	def __init__(self, redis_client: redis.Redis, prefix: str = 'currency-converter'):
		self.redis = redis_client
		self.prefix = prefix

	def _make_key(self, key: str) -> str:
		return f'{self.prefix}:{key}'

	async def get(self, key: str) -> str | None:
		try:
			data = await self.redis.get(self._make_key(key))
		except RedisError as e:
			raise PersistenceError(f'Failed to read {key}: {e}') from e

		if data is None:
			return None
		return data.decode('utf-8') if isinstance(data, bytes) else data

	async def set(self, key: str, value: str) -> None:
		try:
			await self.redis.set(self._make_key(key), value)
		except RedisError as e:
			raise PersistenceError(f'Failed to write {key}: {e}') from e

	async def remove(self, key: str) -> None:
		try:
			await self.redis.delete(self._make_key(key))
		except RedisError as e:
			raise PersistenceError(f'Failed to remove {key}: {e}') from e

	async def close(self) -> None:
		await self.redis.aclose()
