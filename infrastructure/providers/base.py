from typing import Protocol

from domain.models.currency import RateTable


class RateFeedProvider(Protocol):
	@property
	def name(self) -> str: ...

	async def fetch_rates(self, base_currency: str) -> RateTable:
		"""Return the full rate table for ``base_currency``.

		Raises FeedUnavailableError for transport failures and
		FeedMalformedError for unusable payloads. Never retries.
		"""
		...

	async def close(self) -> None: ...
