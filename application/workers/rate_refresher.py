import asyncio
import contextlib
import logging
from datetime import datetime

from application.services.exchange_rate_service import ExchangeRateService
from domain.models.rates import RateQueryResult, utc_now

logger = logging.getLogger(__name__)


class RateRefresher:
	"""
	Background task that keeps the rate cache warm.

	Runs inside the API process; the interval should not be shorter than the
	cache freshness window, otherwise most cycles are plain cache hits.
	"""

	def __init__(self, service: ExchangeRateService, interval_seconds: float = 60):
		self.service = service
		self.interval_seconds = interval_seconds
		self.is_running = False
		self.cycles = 0
		self.last_result: RateQueryResult | None = None
		self.last_run_at: datetime | None = None
		self._task: asyncio.Task | None = None

	async def refresh_once(self) -> RateQueryResult:
		result = await self.service.get_exchange_rates()
		self.cycles += 1
		self.last_result = result
		self.last_run_at = utc_now()

		if result.ok:
			logger.debug(f'Refresh cycle #{self.cycles} ok (source={result.snapshot.source})')
		else:
			logger.warning(f'Refresh cycle #{self.cycles} degraded: {result.error_message}')
		return result

	async def run(self) -> None:
		self.is_running = True
		logger.info(f'Rate refresher started, interval {self.interval_seconds}s')

		while self.is_running:
			try:
				await self.refresh_once()
			except asyncio.CancelledError:
				logger.info('Rate refresher received cancellation signal')
				raise
			except Exception as e:
				logger.error(f'Error in refresh cycle: {e}', exc_info=True)

			await asyncio.sleep(self.interval_seconds)

		logger.info('Rate refresher stopped')

	def start(self) -> asyncio.Task:
		if self._task is None or self._task.done():
			self._task = asyncio.create_task(self.run())
		return self._task

	async def stop(self) -> None:
		self.is_running = False
		if self._task is None:
			return
		self._task.cancel()
		with contextlib.suppress(asyncio.CancelledError):
			await self._task
		self._task = None
		logger.info('Rate refresher stopped')

	def status(self) -> dict:
		return {
			'running': self._task is not None and not self._task.done(),
			'interval_seconds': self.interval_seconds,
			'cycles': self.cycles,
			'last_run_at': self.last_run_at,
			'last_ok': self.last_result.ok if self.last_result else None,
		}
