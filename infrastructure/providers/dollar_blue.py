import asyncio

from domain.models.rates import PartialRate
from infrastructure.providers.base import QuoteProvider
from infrastructure.providers.bluelytics import BluelyticsProvider, parse_blue_average
from infrastructure.providers.exchangerate_api import BASE_URL as EXCHANGERATE_API_URL
from infrastructure.providers.exchangerate_api import parse_eur_base_usd


class DollarBlueProvider(QuoteProvider):
	"""Combined source: Bluelytics blue ARS plus the EUR-base table of exchangerate-api.

	Both endpoints are requested concurrently; either failing fails the source.
	"""

	BLUE_URL = BluelyticsProvider.BASE_URL
	EUR_URL = f'{EXCHANGERATE_API_URL}/EUR'

	@property
	def name(self) -> str:
		return 'dollar-blue'

	async def fetch_rates(self) -> PartialRate:
		blue_data, eur_data = await asyncio.gather(
			self._request(self.BLUE_URL),
			self._request(self.EUR_URL),
		)
		return PartialRate(
			ars_to_usd=parse_blue_average(blue_data),
			eur_to_usd=parse_eur_base_usd(eur_data),
		)
