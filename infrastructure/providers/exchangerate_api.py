from domain.exceptions.rates import ProviderError
from domain.models.rates import PartialRate
from infrastructure.providers.base import QuoteProvider, invert_quote, positive_quote

BASE_URL = 'https://api.exchangerate-api.com/v4/latest'


def _rates_table(data: dict, provider: str) -> dict:
	rates = data.get('rates')
	if not isinstance(rates, dict):
		raise ProviderError(f'Missing rates table in {provider} response')
	return rates


def parse_eur_base_usd(data: dict) -> float:
	"""USD value of one EUR from an EUR-base exchangerate-api table."""
	rates = _rates_table(data, 'exchangerate-api')
	return positive_quote(rates.get('USD'), 'EUR/USD')


def parse_usd_base_table(data: dict, provider: str) -> PartialRate:
	"""Invert a USD-base table (units per USD) into USD per ARS and per EUR."""
	rates = _rates_table(data, provider)
	return PartialRate(
		ars_to_usd=invert_quote(rates.get('ARS'), 'USD/ARS'),
		eur_to_usd=invert_quote(rates.get('EUR'), 'USD/EUR'),
	)


class ExchangeRateAPIProvider(QuoteProvider):
	"""Generic FX provider, USD-base table, no API key."""

	BASE_URL = BASE_URL

	@property
	def name(self) -> str:
		return 'exchangerate-api'

	async def fetch_rates(self) -> PartialRate:
		data = await self._request(f'{self.BASE_URL}/USD')
		return parse_usd_base_table(data, self.name)
