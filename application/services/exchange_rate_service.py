import asyncio
import logging

from application.services.rate_aggregator import RateAggregator
from domain.exceptions.rates import CacheError
from domain.models.rates import Currency, RateQueryResult, RateSnapshot
from infrastructure.cache.rate_cache import RateCache
from infrastructure.cache.redis_cache import RedisSnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_ARS_TO_USD = 1 / 1000
DEFAULT_EUR_TO_USD = 1.1

CURRENCY_SYMBOLS = {
	'USD': '$',
	'ARS': '$',
	'EUR': '€',
}


def format_amount(amount: float) -> str:
	"""Group thousands with commas and keep at most three fraction digits."""
	return f'{amount:,.3f}'.rstrip('0').rstrip('.')


class ExchangeRateService:
	"""Entry point for rates: cache lookup, aggregation, defaults and conversions.

	``get_exchange_rates`` never raises. Every failure is reported as
	``ok=False`` together with a usable default snapshot.
	"""

	def __init__(
		self,
		aggregator: RateAggregator,
		cache: RateCache,
		shared_store: RedisSnapshotStore | None = None,
		default_ars_to_usd: float = DEFAULT_ARS_TO_USD,
		default_eur_to_usd: float = DEFAULT_EUR_TO_USD,
	):
		self.aggregator = aggregator
		self.cache = cache
		self.shared_store = shared_store
		self.default_ars_to_usd = default_ars_to_usd
		self.default_eur_to_usd = default_eur_to_usd
		self.last_error: str | None = None
		self._inflight: asyncio.Task | None = None

	async def get_exchange_rates(self, force_refresh: bool = False) -> RateQueryResult:
		try:
			if not force_refresh:
				cached = self.cache.get_fresh()
				if cached is not None:
					return RateQueryResult(ok=True, snapshot=cached, from_cache=True)

				shared = await self._read_shared()
				if shared is not None:
					self.cache.store(shared)
					self.last_error = None
					return RateQueryResult(ok=True, snapshot=shared, from_cache=True)

			snapshot = await self._refresh()
		except Exception as e:
			logger.error(f'Error fetching exchange rates: {e}', exc_info=True)
			return self._degraded(f'Unexpected error: {e}')

		if snapshot is None:
			return self._degraded('Could not fetch exchange rates from any source')

		self.last_error = None
		return RateQueryResult(ok=True, snapshot=snapshot)

	def default_snapshot(self) -> RateSnapshot:
		return RateSnapshot(
			ars_to_usd=self.default_ars_to_usd,
			eur_to_usd=self.default_eur_to_usd,
			captured_at=self.cache.clock(),
			source='default',
		)

	def convert_price(self, amount: float, from_currency: str, to_currency: str = 'USD') -> float:
		"""Convert ``amount`` to USD with the cached snapshot.

		Only USD targets are supported; ``to_currency`` merely short-circuits
		same-currency calls. Without a cached snapshot, or for an unknown code,
		the amount is returned unchanged.
		"""
		snapshot = self.cache.snapshot
		if snapshot is None or from_currency == to_currency:
			return amount

		if from_currency == Currency.ARS:
			return amount * snapshot.ars_to_usd
		if from_currency == Currency.EUR:
			return amount * snapshot.eur_to_usd
		return amount

	def format_price_with_conversion(self, amount: float, currency: str) -> str:
		symbol = CURRENCY_SYMBOLS.get(currency, '€')
		return f'{symbol}{format_amount(amount)}'

	def status(self) -> dict:
		snapshot = self.cache.snapshot
		return {
			'has_snapshot': snapshot is not None,
			'fresh': self.cache.is_fresh(snapshot),
			'captured_at': snapshot.captured_at if snapshot else None,
			'age_seconds': self.cache.age_seconds(),
			'source': snapshot.source if snapshot else None,
			'last_error': self.last_error,
			'refresh_in_progress': self._inflight is not None and not self._inflight.done(),
		}

	async def _refresh(self) -> RateSnapshot | None:
		# Callers that miss the cache together share one aggregation round.
		if self._inflight is None or self._inflight.done():
			self._inflight = asyncio.create_task(self._aggregate_and_store())
		return await asyncio.shield(self._inflight)

	async def _aggregate_and_store(self) -> RateSnapshot | None:
		snapshot = await self.aggregator.aggregate()
		if snapshot is None:
			return None

		if not self.cache.store(snapshot):
			return self.cache.snapshot

		logger.info(
			f'Exchange rates fetched from {snapshot.source}: '
			f'USD->ARS={round(snapshot.usd_to_ars)} '
			f'EUR->USD={snapshot.eur_to_usd:.4f} '
			f'ARS->USD={snapshot.ars_to_usd:.6f} '
			f'at {snapshot.captured_at.isoformat()}'
		)
		await self._write_shared(snapshot)
		return snapshot

	async def _read_shared(self) -> RateSnapshot | None:
		if self.shared_store is None:
			return None
		try:
			snapshot = await self.shared_store.get_snapshot()
		except CacheError as e:
			logger.warning(f'Shared rate store unavailable: {e}')
			return None
		if snapshot is not None and snapshot.captured_at > self.cache.clock():
			logger.warning(f'Ignoring shared snapshot stamped in the future: {snapshot.captured_at.isoformat()}')
			return None
		return snapshot if self.cache.is_fresh(snapshot) else None

	async def _write_shared(self, snapshot: RateSnapshot) -> None:
		if self.shared_store is None:
			return
		try:
			await self.shared_store.set_snapshot(snapshot)
		except CacheError as e:
			logger.warning(f'Could not publish snapshot to shared store: {e}')

	def _degraded(self, message: str) -> RateQueryResult:
		self.last_error = message
		logger.error(f'Exchange rates unavailable, using defaults: {message}')
		return RateQueryResult(ok=False, snapshot=self.default_snapshot(), error_message=message)
