from domain.exceptions.rates import ProviderError
from domain.models.rates import PartialRate
from infrastructure.providers.base import QuoteProvider, invert_quote


def parse_blue_average(data: dict) -> float:
	"""USD value of one ARS from a Bluelytics payload (informal 'blue' market)."""
	blue = data.get('blue')
	if not isinstance(blue, dict):
		raise ProviderError('Missing blue quote in Bluelytics response')
	return invert_quote(blue.get('value_avg'), 'ARS blue average')


class BluelyticsProvider(QuoteProvider):
	"""Preferred ARS source: informal market average, published as ARS per USD."""

	BASE_URL = 'https://api.bluelytics.com.ar/v2/latest'

	@property
	def name(self) -> str:
		return 'bluelytics'

	async def fetch_rates(self) -> PartialRate:
		data = await self._request(self.BASE_URL)
		return PartialRate(ars_to_usd=parse_blue_average(data))
