from typing import Protocol


class KeyValueStore(Protocol):
	"""Durable string key-value store.

	Implementations raise PersistenceError when the backing store fails.
	"""

	async def get(self, key: str) -> str | None: ...

	async def set(self, key: str, value: str) -> None: ...

	async def remove(self, key: str) -> None: ...

	async def close(self) -> None: ...
