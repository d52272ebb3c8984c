import logging
import math
from abc import ABC, abstractmethod

import httpx

from domain.exceptions.rates import ProviderError
from domain.models.rates import PartialRate, SourceOutcome

logger = logging.getLogger(__name__)


def positive_quote(value, label: str) -> float:
	"""Validate a raw quote from a provider payload and return it as a float."""
	if value is None:
		raise ProviderError(f'Missing quote for {label}')
	if isinstance(value, bool):
		raise ProviderError(f'Invalid quote for {label}: {value!r}')
	try:
		number = float(value)
	except (TypeError, ValueError) as e:
		raise ProviderError(f'Invalid quote for {label}: {value!r}') from e
	if not math.isfinite(number) or number <= 0:
		raise ProviderError(f'Invalid quote for {label}: {value!r}')
	return number


def invert_quote(value, label: str) -> float:
	"""Turn a 'units per USD' quote into 'USD per unit'."""
	return 1 / positive_quote(value, label)


class QuoteProvider(ABC):
	"""A single upstream quote source.

	Subclasses implement ``fetch_rates`` and may raise ``ProviderError`` from it;
	``fetch`` is the public entry point and never raises.
	"""

	def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 5):
		self._owns_client = client is None
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	async def fetch_rates(self) -> PartialRate: ...

	async def fetch(self) -> SourceOutcome:
		try:
			value = await self.fetch_rates()
		except ProviderError as e:
			logger.warning(f'{self.name} failed: {e}')
			return SourceOutcome.failure(self.name, str(e))
		except Exception as e:
			logger.warning(f'{self.name} failed unexpectedly: {e}', exc_info=True)
			return SourceOutcome.failure(self.name, f'Unexpected error: {e}')

		logger.debug(f'{self.name} returned {value}')
		return SourceOutcome.ok(self.name, value)

	async def _request(self, url: str, params: dict | None = None) -> dict:
		try:
			response = await self._client.get(url, params=params)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'{self.name} request failed: {e.__class__.__name__}') from e
		except Exception as e:
			raise ProviderError(f'{self.name} response parsing error: {str(e)}') from e

		if not isinstance(data, dict):
			raise ProviderError(f'{self.name} response parsing error: expected a JSON object')
		return data

	async def close(self) -> None:
		if self._owns_client:
			await self._client.aclose()
