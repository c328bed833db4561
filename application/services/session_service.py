import logging
from datetime import datetime
from enum import Enum

from application.services.conversion_service import convert
from application.services.currency_service import CurrencyService
from application.services.history_service import HistoryService
from application.services.rate_service import RateService
from domain.exceptions.currency import FeedMalformedError, NoRatesAvailableError, ProviderError
from domain.models.currency import ConversionRecord, RateSnapshot

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = 'Could not reach the rate feed. Using saved rates.'
MALFORMED_MESSAGE = 'Rate feed returned an invalid response. Using saved rates.'
NO_RATES_MESSAGE = 'No connection and no saved rates.'


class SessionState(str, Enum):
	UNINITIALIZED = 'uninitialized'
	HYDRATING = 'hydrating'
	READY = 'ready'
	REFRESHING = 'refreshing'


class SessionStatus(str, Enum):
	ONLINE = 'online'
	OFFLINE = 'offline'
	NO_RATES = 'no_rates'


class ConverterSession:
	"""State of one converter session, driven by user actions.

	Everything a front end needs to render lives here: the selected pair, the
	last result, the online/offline status and the history. Feed and storage
	failures are turned into ``status`` and ``error_message``; only invalid
	conversion input raises.
	"""

	def __init__(
		self,
		rate_service: RateService,
		history_service: HistoryService,
		currency_service: CurrencyService,
		source: str = 'ARS',
		target: str = 'USD',
	):
		currency_service.validate_currency(source)
		currency_service.validate_currency(target)

		self.rates = rate_service
		self.history_service = history_service
		self.currencies = currency_service

		self.state = SessionState.UNINITIALIZED
		self.status = SessionStatus.ONLINE
		self.error_message: str | None = None
		self.busy = False
		self.source = source
		self.target = target
		self.result: ConversionRecord | None = None

	@property
	def snapshot(self) -> RateSnapshot | None:
		return self.rates.get_snapshot()

	@property
	def is_online(self) -> bool:
		return self.status is SessionStatus.ONLINE

	@property
	def last_update(self) -> datetime | None:
		snapshot = self.snapshot
		return snapshot.timestamp if snapshot else None

	@property
	def history(self) -> tuple[ConversionRecord, ...]:
		return self.history_service.entries

	@property
	def can_convert(self) -> bool:
		return self.state is SessionState.READY and not self.busy and self.snapshot is not None

	@property
	def can_refresh(self) -> bool:
		return self.state is SessionState.READY and not self.busy

	async def initialize(self) -> None:
		if self.state is not SessionState.UNINITIALIZED:
			logger.debug(f'initialize() ignored in state {self.state.value}')
			return

		self.state = SessionState.HYDRATING
		await self.rates.load()
		await self.history_service.load()
		self.state = SessionState.READY
		logger.info('Session ready')

		if self.snapshot is None:
			logger.info('No saved rates, fetching from the feed')
			await self.refresh()

	async def refresh(self) -> RateSnapshot | None:
		if not self.can_refresh:
			logger.debug(f'refresh() ignored: state={self.state.value} busy={self.busy}')
			return None

		self.busy = True
		self.state = SessionState.REFRESHING
		snapshot = None
		try:
			snapshot = await self.rates.refresh()
		except NoRatesAvailableError:
			self._set_status(SessionStatus.NO_RATES, NO_RATES_MESSAGE)
		except FeedMalformedError:
			self._set_status(SessionStatus.OFFLINE, MALFORMED_MESSAGE)
		except ProviderError:
			self._set_status(SessionStatus.OFFLINE, OFFLINE_MESSAGE)
		else:
			self._set_status(SessionStatus.ONLINE, None)
		finally:
			self.busy = False
			self.state = SessionState.READY

		return snapshot

	async def convert(
		self, amount: float, source: str | None = None, target: str | None = None
	) -> ConversionRecord | None:
		"""Convert with the current rates and record the result.

		Returns None without side effects while no rates are loaded or a
		refresh is running. Invalid input raises a ConversionError and leaves
		the displayed result and history untouched.
		"""
		source = self.source if source is None else source
		target = self.target if target is None else target

		snapshot = self.snapshot
		if not self.can_convert or snapshot is None:
			logger.info(f'convert() ignored: state={self.state.value} rates={snapshot is not None}')
			return None

		value = convert(amount, source, target, snapshot.table, self.currencies.get_supported_codes())

		self.source = source
		self.target = target
		self.result = await self.history_service.record(source, target, float(amount), value)
		logger.info(f'Converted {amount} {source} -> {value} {target}')
		return self.result

	def swap(self) -> None:
		self.source, self.target = self.target, self.source
		self.result = None

	def select_source(self, code: str) -> None:
		self.currencies.validate_currency(code)
		self.source = code
		self.result = None

	def select_target(self, code: str) -> None:
		self.currencies.validate_currency(code)
		self.target = code
		self.result = None

	async def clear_history(self) -> None:
		await self.history_service.clear()

	def _set_status(self, status: SessionStatus, message: str | None) -> None:
		if status is not self.status:
			logger.info(f'Status {self.status.value} -> {status.value}')
		self.status = status
		self.error_message = message
