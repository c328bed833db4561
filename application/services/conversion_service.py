import math
from collections.abc import Collection

from config.currencies import SUPPORTED_CODES
from domain.exceptions.currency import InvalidAmountError, MissingRateError, UnknownCurrencyError
from domain.models.currency import RateTable


def _rate(rate_table: RateTable, code: str) -> float:
	rate = rate_table.rate_for(code)
	if rate is None:
		raise MissingRateError(f'No {code} rate in the {rate_table.base} table')
	return rate


def convert(
	amount: float,
	source: str,
	target: str,
	rate_table: RateTable,
	supported: Collection[str] = SUPPORTED_CODES,
) -> float:
	"""Convert ``amount`` of ``source`` into ``target`` using a single rate table.

	Pairs that do not involve the base currency always go through it:
	``amount / rate[source] * rate[target]``. No rounding is applied.
	"""
	if isinstance(amount, bool) or not isinstance(amount, int | float):
		raise InvalidAmountError(f'Amount must be a number, got {amount!r}')
	if not math.isfinite(amount) or amount < 0:
		raise InvalidAmountError(f'Amount must be finite and not negative, got {amount}')

	for code in (source, target):
		if code not in supported:
			raise UnknownCurrencyError(f'Currency {code} is not supported')

	amount = float(amount)
	base = rate_table.base

	if source == target:
		return amount
	if source == base:
		return amount * _rate(rate_table, target)
	if target == base:
		return amount / _rate(rate_table, source)

	in_base = amount / _rate(rate_table, source)
	return in_base * _rate(rate_table, target)
