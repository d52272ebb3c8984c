import logging
from datetime import timedelta

import httpx
from redis.asyncio import Redis

from application.services import ExchangeRateService, RateAggregator
from application.workers import RateRefresher
from config.settings import get_settings
from infrastructure.cache.rate_cache import RateCache
from infrastructure.cache.redis_cache import RedisSnapshotStore
from infrastructure.providers import (
	BluelyticsProvider,
	DollarBlueProvider,
	ExchangeRateAPIProvider,
	ExchangeRateHostProvider,
	FXAPIProvider,
)

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	http_client: httpx.AsyncClient | None = None
	redis_client: Redis | None = None
	rate_service: ExchangeRateService | None = None
	refresher: RateRefresher | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Build the provider chain, cache and service. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.http_client = httpx.AsyncClient(
		timeout=httpx.Timeout(settings.PROVIDER_TIMEOUT_SECONDS),
		headers={'accept': 'application/json'},
	)

	aggregator = RateAggregator(
		preferred_ars=BluelyticsProvider(client=deps.http_client),
		preferred_eur=ExchangeRateHostProvider(client=deps.http_client),
		fallbacks=[
			DollarBlueProvider(client=deps.http_client),
			ExchangeRateAPIProvider(client=deps.http_client),
			FXAPIProvider(client=deps.http_client),
		],
	)

	freshness = timedelta(seconds=settings.RATE_FRESHNESS_SECONDS)

	shared_store = None
	if settings.REDIS_URL:
		deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
		shared_store = RedisSnapshotStore(deps.redis_client, ttl=freshness)
		logger.info('Shared rate store enabled')

	deps.rate_service = ExchangeRateService(
		aggregator=aggregator,
		cache=RateCache(freshness=freshness),
		shared_store=shared_store,
		default_ars_to_usd=settings.DEFAULT_ARS_TO_USD,
		default_eur_to_usd=settings.DEFAULT_EUR_TO_USD,
	)

	if settings.REFRESH_INTERVAL_SECONDS > 0:
		deps.refresher = RateRefresher(deps.rate_service, settings.REFRESH_INTERVAL_SECONDS)

	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.refresher:
		await deps.refresher.stop()
	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.http_client:
		await deps.http_client.aclose()

	deps.refresher = None
	deps.redis_client = None
	deps.http_client = None
	deps.rate_service = None
	logger.info('Cleanup complete')


def get_rate_service() -> ExchangeRateService:
	if deps.rate_service is None:
		raise RuntimeError('Exchange rate service not initialized')
	return deps.rate_service


def get_refresher() -> RateRefresher | None:
	return deps.refresher

