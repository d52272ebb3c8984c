from domain.models.rates import PartialRate
from infrastructure.providers.base import QuoteProvider
from infrastructure.providers.exchangerate_api import parse_usd_base_table


class FXAPIProvider(QuoteProvider):
	BASE_URL = 'https://api.fxapi.com/v1/latest'

	@property
	def name(self) -> str:
		return 'fxapi'

	async def fetch_rates(self) -> PartialRate:
		data = await self._request(self.BASE_URL, {'base': 'USD', 'symbols': 'ARS,EUR'})
		return parse_usd_base_table(data, self.name)
