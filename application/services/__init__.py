from .conversion_service import convert
from .currency_service import CurrencyService
from .history_service import HistoryService
from .rate_service import RateService
from .session_service import ConverterSession, SessionState, SessionStatus

__all__ = [
	'ConverterSession',
	'CurrencyService',
	'HistoryService',
	'RateService',
	'SessionState',
	'SessionStatus',
	'convert',
]
