import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from domain.exceptions.rates import InvalidRateError
from domain.models.rates import RateSnapshot, SourceOutcome, utc_now
from infrastructure.providers.base import QuoteProvider

logger = logging.getLogger(__name__)


class RateAggregator:
	"""Builds one snapshot from the preferred pair, falling back in order.

	1. Preferred ARS and EUR sources run concurrently; both must succeed.
	2. Otherwise each combined fallback is tried in turn until one yields both sides.
	3. ``None`` when every attempt failed.

	No step is retried, and no failure propagates.
	"""

	def __init__(
		self,
		preferred_ars: QuoteProvider,
		preferred_eur: QuoteProvider,
		fallbacks: list[QuoteProvider],
		clock: Callable[[], datetime] = utc_now,
	):
		self.preferred_ars = preferred_ars
		self.preferred_eur = preferred_eur
		self.fallbacks = fallbacks
		self.clock = clock

	async def aggregate(self) -> RateSnapshot | None:
		snapshot = await self._try_preferred()
		if snapshot is not None:
			return snapshot

		for provider in self.fallbacks:
			outcome = await self._attempt(provider)
			if not outcome.success:
				logger.warning(f'Fallback {provider.name} failed: {outcome.failure_reason}')
				continue
			if not outcome.value.is_complete:
				logger.warning(f'Fallback {provider.name} returned an incomplete rate set')
				continue

			snapshot = self._build_snapshot(
				outcome.value.ars_to_usd, outcome.value.eur_to_usd, provider.name
			)
			if snapshot is not None:
				logger.info(f'Rates obtained from fallback {provider.name}')
				return snapshot

		logger.error('All exchange rate sources failed')
		return None

	async def _try_preferred(self) -> RateSnapshot | None:
		ars_outcome, eur_outcome = await asyncio.gather(
			self._attempt(self.preferred_ars),
			self._attempt(self.preferred_eur),
		)

		ars_to_usd = ars_outcome.value.ars_to_usd if ars_outcome.success else None
		eur_to_usd = eur_outcome.value.eur_to_usd if eur_outcome.success else None

		if ars_to_usd is None or eur_to_usd is None:
			reasons = [
				f'{outcome.source}: {outcome.failure_reason or "no value"}'
				for outcome, value in ((ars_outcome, ars_to_usd), (eur_outcome, eur_to_usd))
				if value is None
			]
			logger.warning(f'Preferred sources failed ({"; ".join(reasons)})')
			return None

		return self._build_snapshot(
			ars_to_usd, eur_to_usd, f'{ars_outcome.source}+{eur_outcome.source}'
		)

	async def _attempt(self, provider: QuoteProvider) -> SourceOutcome:
		try:
			return await provider.fetch()
		except Exception as e:
			logger.error(f'Provider {provider.name} raised: {e}', exc_info=True)
			return SourceOutcome.failure(provider.name, f'Unexpected error: {e}')

	def _build_snapshot(self, ars_to_usd: float, eur_to_usd: float, source: str) -> RateSnapshot | None:
		try:
			return RateSnapshot(
				ars_to_usd=ars_to_usd,
				eur_to_usd=eur_to_usd,
				captured_at=self.clock(),
				source=source,
			)
		except InvalidRateError as e:
			logger.warning(f'Discarding rates from {source}: {e}')
			return None
