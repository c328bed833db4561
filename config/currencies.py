from domain.models.currency import Currency

SUPPORTED_CURRENCIES: tuple[Currency, ...] = (
	Currency(code='ARS', name='Peso Argentino', symbol='$'),
	Currency(code='USD', name='Dólar', symbol='$'),
	Currency(code='EUR', name='Euro', symbol='€'),
	Currency(code='GBP', name='Libra', symbol='£'),
	Currency(code='JPY', name='Yen', symbol='¥'),
)

SUPPORTED_CODES: frozenset[str] = frozenset(c.code for c in SUPPORTED_CURRENCIES)
