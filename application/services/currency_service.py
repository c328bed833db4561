from collections.abc import Iterable

from domain.exceptions.currency import UnknownCurrencyError
from domain.models.currency import Currency


class CurrencyService:
	"""Lookup over the fixed set of currencies the converter offers."""

	def __init__(self, currencies: Iterable[Currency]):
		self._currencies: dict[str, Currency] = {}
		for currency in currencies:
			if currency.code in self._currencies:
				raise ValueError(f'Duplicate currency code: {currency.code}')
			self._currencies[currency.code] = currency

	def get_supported_currencies(self) -> list[Currency]:
		return list(self._currencies.values())

	def get_supported_codes(self) -> frozenset[str]:
		return frozenset(self._currencies)

	def get_currency(self, code: str) -> Currency:
		try:
			return self._currencies[code]
		except KeyError:
			raise UnknownCurrencyError(f'Currency {code} is not supported') from None

	def validate_currency(self, code: str) -> None:
		self.get_currency(code)

	def get_symbol(self, code: str) -> str:
		currency = self._currencies.get(code)
		return currency.symbol if currency else ''

	def format_amount(self, amount: float, code: str) -> str:
		"""Render an amount the way the converter displays it, e.g. ``€ 1,234.50 EUR``."""
		symbol = self.get_symbol(code)
		text = f'{amount:,.2f} {code}'
		return f'{symbol} {text}' if symbol else text
