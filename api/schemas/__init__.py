from .requests import ConversionRequest, SelectionRequest
from .responses import (
	ConversionRecordResponse,
	CurrencyResponse,
	HistoryResponse,
	RatesResponse,
	SessionStateResponse,
	SupportedCurrenciesResponse,
)

__all__ = [
	'ConversionRecordResponse',
	'ConversionRequest',
	'CurrencyResponse',
	'HistoryResponse',
	'RatesResponse',
	'SelectionRequest',
	'SessionStateResponse',
	'SupportedCurrenciesResponse',
]
