from .responses import (
	ConversionResponse,
	FormattedPriceResponse,
	HealthResponse,
	RateQueryResponse,
)

__all__ = [
	'ConversionResponse',
	'FormattedPriceResponse',
	'HealthResponse',
	'RateQueryResponse',
]
