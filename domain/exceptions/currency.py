class CurrencyException(Exception):
	pass


class InvalidCurrencyError(CurrencyException):
	pass


class ProviderError(CurrencyException):
	def __init__(self, message: str, has_snapshot: bool = False):
		super().__init__(message)
		self.has_snapshot = has_snapshot


class FeedUnavailableError(ProviderError):
	"""Network failure or non-success transport status from the rate feed."""


class FeedMalformedError(ProviderError):
	"""The feed answered, but the payload is not a usable rate table."""


class NoRatesAvailableError(CurrencyException):
	pass


class ConversionError(CurrencyException):
	pass


class InvalidAmountError(ConversionError):
	pass


class UnknownCurrencyError(ConversionError, InvalidCurrencyError):
	pass


class MissingRateError(ConversionError):
	pass


class PersistenceError(CurrencyException):
	pass
