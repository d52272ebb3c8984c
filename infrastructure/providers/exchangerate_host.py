from domain.exceptions.rates import ProviderError
from domain.models.rates import PartialRate
from infrastructure.providers.base import QuoteProvider, positive_quote


class ExchangeRateHostProvider(QuoteProvider):
	"""Preferred EUR source: official EUR-base quote, already USD per EUR."""

	BASE_URL = 'https://api.exchangerate.host/latest'

	@property
	def name(self) -> str:
		return 'exchangerate.host'

	async def fetch_rates(self) -> PartialRate:
		data = await self._request(self.BASE_URL, {'base': 'EUR', 'symbols': 'USD'})

		if data.get('success') is False:
			error = data.get('error')
			info = error.get('info', 'Unknown error') if isinstance(error, dict) else error
			raise ProviderError(f'exchangerate.host API error: {info or "Unknown error"}')

		rates = data.get('rates') or {}
		return PartialRate(eur_to_usd=positive_quote(rates.get('USD'), 'EUR/USD'))
