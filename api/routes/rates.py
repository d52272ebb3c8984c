from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_rate_service
from api.schemas import ConversionResponse, FormattedPriceResponse, RateQueryResponse
from application.services import ExchangeRateService

router = APIRouter(prefix='/api', tags=['rates'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=5)]


@router.get(
	'/rates',
	response_model=RateQueryResponse,
	status_code=status.HTTP_200_OK,
	summary='Get current ARS and EUR rates against USD',
)
async def get_rates(
	service: Annotated[ExchangeRateService, Depends(get_rate_service)],
) -> RateQueryResponse:
	result = await service.get_exchange_rates()
	return RateQueryResponse.from_result(result)


@router.post(
	'/rates/refresh',
	response_model=RateQueryResponse,
	status_code=status.HTTP_200_OK,
	summary='Refresh rates, bypassing the cache',
)
async def refresh_rates(
	service: Annotated[ExchangeRateService, Depends(get_rate_service)],
) -> RateQueryResponse:
	result = await service.get_exchange_rates(force_refresh=True)
	return RateQueryResponse.from_result(result)


@router.get(
	'/convert/{currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert an amount to USD with the cached rates',
)
async def convert_price(
	currency: CurrencyCode,
	amount: Annotated[float, Path(ge=0)],
	service: Annotated[ExchangeRateService, Depends(get_rate_service)],
) -> ConversionResponse:
	currency = currency.upper()
	return ConversionResponse(
		from_currency=currency,
		to_currency='USD',
		original_amount=amount,
		converted_amount=service.convert_price(amount, currency),
		rates_available=service.cache.snapshot is not None,
	)


@router.get(
	'/format/{currency}/{amount}',
	response_model=FormattedPriceResponse,
	status_code=status.HTTP_200_OK,
	summary='Format an amount for display',
)
async def format_price(
	currency: CurrencyCode,
	amount: float,
	service: Annotated[ExchangeRateService, Depends(get_rate_service)],
) -> FormattedPriceResponse:
	currency = currency.upper()
	return FormattedPriceResponse(
		currency=currency,
		amount=amount,
		formatted=service.format_price_with_conversion(amount, currency),
	)
