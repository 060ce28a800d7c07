import logging
from datetime import timedelta

from application.services import ConversionService, CurrencyService, RateFetcher, RateResolver
from config.settings import Settings, get_settings
from infrastructure.cache.rate_cache import RateTableCache
from infrastructure.cache.redis_store import RedisStore
from infrastructure.cache.store import InMemoryStore, KeyValueStore
from infrastructure.providers import ExchangeRateProvider, make_provider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	store: KeyValueStore | None = None
	provider: ExchangeRateProvider | None = None
	resolver: RateResolver | None = None
	conversion_service: ConversionService | None = None
	currency_service: CurrencyService | None = None


deps = AppDependencies()


def build_store(settings: Settings) -> KeyValueStore:
	if settings.CACHE_BACKEND == 'redis':
		logger.info(f'Using Redis rate cache at {settings.REDIS_URL}')
		return RedisStore.from_url(settings.REDIS_URL, timeout=settings.CACHE_TIMEOUT_SECONDS)
	logger.info('Using in-memory rate cache')
	return InMemoryStore()


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.store = build_store(settings)
	deps.provider = make_provider(settings.RATES_PROVIDER, settings)

	cache = RateTableCache(deps.store, ttl=timedelta(hours=settings.CACHE_TTL_HOURS))
	fetcher = RateFetcher(deps.provider, timeout=settings.FETCH_TIMEOUT_SECONDS)
	deps.resolver = RateResolver(cache=cache, fetcher=fetcher, cache_timeout=settings.CACHE_TIMEOUT_SECONDS)
	deps.conversion_service = ConversionService()
	deps.currency_service = CurrencyService()
	logger.info(f'Dependencies initialized (provider: {deps.provider.name})')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.resolver:
		deps.resolver.cancel_pending()
	if deps.provider:
		await deps.provider.close()
	if isinstance(deps.store, RedisStore):
		await deps.store.close()

	logger.info('Cleanup complete')


def get_rate_resolver() -> RateResolver:
	if deps.resolver is None:
		raise RuntimeError('Rate resolver not initialized')
	return deps.resolver


def get_conversion_service() -> ConversionService:
	if deps.conversion_service is None:
		raise RuntimeError('Conversion service not initialized')
	return deps.conversion_service


def get_currency_service() -> CurrencyService:
	if deps.currency_service is None:
		raise RuntimeError('Currency service not initialized')
	return deps.currency_service
