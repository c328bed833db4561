import httpx

from domain.exceptions.currency import FeedMalformedError, FeedUnavailableError
from domain.models.currency import RateTable


class OpenERAPIProvider:
	BASE_URL = 'https://open.er-api.com/v6'

	def __init__(
		self,
		base_url: str | None = None,
		client: httpx.AsyncClient | None = None,
		timeout: int = 10,
	):
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'open.er-api'

	async def _request(self, endpoint: str) -> dict:
		url = f'{self.base_url}/{endpoint}'

		try:
			response = await self._client.get(url)
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise FeedUnavailableError(
				f'Rate feed HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise FeedUnavailableError(f'Rate feed request failed: {e.__class__.__name__}') from e

		try:
			data = response.json()
		except ValueError as e:
			raise FeedMalformedError(f'Rate feed returned invalid JSON: {e}') from e

		if not isinstance(data, dict) or data.get('result') != 'success':
			error_type = data.get('error-type', 'unknown') if isinstance(data, dict) else 'unknown'
			raise FeedMalformedError(f'Rate feed did not report success: {error_type}')

		return data

	async def fetch_rates(self, base_currency: str) -> RateTable:
		data = await self._request(f'latest/{base_currency}')

		base_code = data.get('base_code', base_currency)
		if base_code != base_currency:
			raise FeedMalformedError(
				f'Rate feed answered for base {base_code}, expected {base_currency}'
			)

		rates = data.get('rates')
		if not isinstance(rates, dict) or not rates:
			raise FeedMalformedError('Rate feed response has no rates')

		try:
			return RateTable(base=base_currency, rates=rates)
		except ValueError as e:
			raise FeedMalformedError(f'Rate feed response has invalid rates: {e}') from e

	async def close(self) -> None:
		await self._client.aclose()
