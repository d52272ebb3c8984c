from datetime import datetime

from pydantic import BaseModel, Field

from domain.models.rates import RateQueryResult


class RateQueryResponse(BaseModel):
	ok: bool = Field(..., description='False when every source failed and defaults are served')
	ars_to_usd: float = Field(..., description='USD value of one ARS')
	eur_to_usd: float = Field(..., description='USD value of one EUR')
	usd_to_ars: float = Field(..., description='ARS per USD')
	usd_to_eur: float = Field(..., description='EUR per USD')
	captured_at: datetime = Field(..., description='When the rates were captured')
	source: str = Field(..., description='Provider(s) that produced the rates')
	from_cache: bool = Field(False, description='Served without a network round')
	error: str | None = Field(None, description='Diagnostic message when ok is false')

	@classmethod
	def from_result(cls, result: RateQueryResult) -> 'RateQueryResponse':
		snapshot = result.snapshot
		return cls(
			ok=result.ok,
			ars_to_usd=snapshot.ars_to_usd,
			eur_to_usd=snapshot.eur_to_usd,
			usd_to_ars=snapshot.usd_to_ars,
			usd_to_eur=snapshot.usd_to_eur,
			captured_at=snapshot.captured_at,
			source=snapshot.source,
			from_cache=result.from_cache,
			error=result.error_message,
		)

	class ConfigDict:
		json_schema_extra = {
			'example': {
				'ok': True,
				'ars_to_usd': 0.000735,
				'eur_to_usd': 1.0842,
				'usd_to_ars': 1360.0,
				'usd_to_eur': 0.9223,
				'captured_at': '2025-09-27T10:30:00Z',
				'source': 'bluelytics+exchangerate.host',
				'from_cache': False,
				'error': None,
			}
		}


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field('USD', description='Target currency code')
	original_amount: float = Field(..., description='Original amount requested')
	converted_amount: float = Field(..., description='Converted amount')
	rates_available: bool = Field(..., description='False when no snapshot was cached yet')


class FormattedPriceResponse(BaseModel):
	currency: str = Field(..., description='Display currency code')
	amount: float = Field(..., description='Amount as requested')
	formatted: str = Field(..., description='Amount with currency symbol')


class HealthResponse(BaseModel):
	status: str = Field(..., description='healthy, degraded or unhealthy')
	timestamp: datetime
	cache: dict
	refresher: dict | None = None
	shared_store: str = Field(..., description='disabled, ok or unreachable')
