import logging
from datetime import timedelta

from redis.asyncio import Redis
from sqlalchemy.exc import SQLAlchemyError

from application.services import ConverterSession, CurrencyService, HistoryService, RateService
from config.currencies import SUPPORTED_CURRENCIES
from config.settings import Settings, get_settings
from infrastructure.cache.redis_store import RedisKeyValueStore
from infrastructure.persistence.base import KeyValueStore
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.key_value import SqlKeyValueStore
from infrastructure.providers import OpenERAPIProvider, RateFeedProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	store: KeyValueStore | None = None
	provider: RateFeedProvider | None = None
	currency_service: CurrencyService | None = None
	session: ConverterSession | None = None


deps = AppDependencies()


def build_store(settings: Settings) -> KeyValueStore:
	if settings.STORAGE_BACKEND == 'redis':
		deps.db = None
		return RedisKeyValueStore(Redis.from_url(settings.REDIS_URL, decode_responses=True))

	deps.db = Database(settings.DATABASE_URL)
	return SqlKeyValueStore(deps.db)


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.store = build_store(settings)
	deps.provider = OpenERAPIProvider(base_url=settings.RATE_FEED_URL, timeout=settings.FEED_TIMEOUT)
	deps.currency_service = CurrencyService(SUPPORTED_CURRENCIES)

	max_age = (
		timedelta(seconds=settings.RATE_MAX_AGE_SECONDS)
		if settings.RATE_MAX_AGE_SECONDS is not None
		else None
	)
	rate_service = RateService(
		provider=deps.provider,
		store=deps.store,
		base_currency=settings.BASE_CURRENCY,
		retry_attempts=settings.FEED_RETRY_ATTEMPTS,
		retry_backoff=settings.FEED_RETRY_BACKOFF,
		max_age=max_age,
	)
	history_service = HistoryService(store=deps.store, capacity=settings.HISTORY_CAPACITY)

	deps.session = ConverterSession(
		rate_service=rate_service,
		history_service=history_service,
		currency_service=deps.currency_service,
		source=settings.BASE_CURRENCY,
		target='USD' if settings.BASE_CURRENCY != 'USD' else 'EUR',
	)
	logger.info('Dependencies initialized')


async def bootstrap() -> None:
	"""Create storage tables and hydrate the session. Called after init_dependencies()."""
	logger.info('Bootstrapping application...')

	if deps.session is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	if deps.db is not None:
		try:
			await deps.db.create_tables()
			logger.info('Database tables created')
		except SQLAlchemyError as e:
			logger.error(f'Could not prepare the database, starting without saved data: {e}')

	await deps.session.initialize()
	logger.info('Bootstrap complete')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.provider:
		await deps.provider.close()
	if deps.store:
		await deps.store.close()

	deps.db = None
	deps.store = None
	deps.provider = None
	deps.currency_service = None
	deps.session = None
	logger.info('Cleanup complete')


def get_session() -> ConverterSession:
	if deps.session is None:
		raise RuntimeError('Session not initialized')
	return deps.session


def get_currency_service() -> CurrencyService:
	if deps.currency_service is None:
		raise RuntimeError('Currency service not initialized')
	return deps.currency_service
