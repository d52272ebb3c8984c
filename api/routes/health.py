from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_rate_service, get_refresher
from api.schemas import HealthResponse
from application.services import ExchangeRateService
from application.workers import RateRefresher
from domain.models.rates import utc_now

router = APIRouter(prefix='/api', tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Service health check')
async def health_check(
	service: Annotated[ExchangeRateService, Depends(get_rate_service)],
	refresher: Annotated[RateRefresher | None, Depends(get_refresher)],
) -> HealthResponse:
	"""
	- healthy: a fresh snapshot is cached
	- degraded: serving a stale snapshot, or the last attempt fell back to defaults
	- unhealthy: no snapshot at all
	"""
	cache_status = service.status()

	if service.shared_store is None:
		shared_store = 'disabled'
	else:
		shared_store = 'ok' if await service.shared_store.ping() else 'unreachable'

	if not cache_status['has_snapshot']:
		overall = 'unhealthy'
	elif cache_status['fresh'] and cache_status['last_error'] is None:
		overall = 'healthy'
	else:
		overall = 'degraded'

	return HealthResponse(
		status=overall,
		timestamp=utc_now(),
		cache=cache_status,
		refresher=refresher.status() if refresher else None,
		shared_store=shared_store,
	)
