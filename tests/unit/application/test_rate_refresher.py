# nosec B101


import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest

from application.services.exchange_rate_service import ExchangeRateService
from application.workers.rate_refresher import RateRefresher
from domain.models.rates import RateQueryResult, RateSnapshot

SNAPSHOT = RateSnapshot(
    ars_to_usd=0.001, eur_to_usd=1.1, captured_at=datetime(2025, 11, 5, 10, 30, tzinfo=UTC)
)


@pytest.fixture
def mock_service():
    service = Mock(spec=ExchangeRateService)
    service.get_exchange_rates = AsyncMock(return_value=RateQueryResult(ok=True, snapshot=SNAPSHOT))
    return service


@pytest.mark.asyncio
async def test_refresh_once_records_result(mock_service):
    refresher = RateRefresher(mock_service, interval_seconds=60)

    result = await refresher.refresh_once()

    assert result.ok is True
    assert refresher.cycles == 1
    assert refresher.last_result is result
    assert refresher.status()['last_ok'] is True
    mock_service.get_exchange_rates.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_refresh_once_records_degraded_result(mock_service):
    mock_service.get_exchange_rates.return_value = RateQueryResult(
        ok=False, snapshot=SNAPSHOT, error_message='Could not fetch exchange rates from any source'
    )
    refresher = RateRefresher(mock_service)

    await refresher.refresh_once()

    assert refresher.status()['last_ok'] is False


@pytest.mark.asyncio
async def test_run_loops_until_stopped(mock_service):
    refresher = RateRefresher(mock_service, interval_seconds=0.01)

    refresher.start()
    await asyncio.sleep(0.05)
    assert refresher.status()['running'] is True
    await refresher.stop()

    assert refresher.cycles >= 2
    assert refresher.status()['running'] is False


@pytest.mark.asyncio
async def test_run_survives_cycle_errors(mock_service):
    mock_service.get_exchange_rates.side_effect = [
        RuntimeError('boom'),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
        RateQueryResult(ok=True, snapshot=SNAPSHOT),
    ]
    refresher = RateRefresher(mock_service, interval_seconds=0.01)

    refresher.start()
    await asyncio.sleep(0.05)
    await refresher.stop()

    assert refresher.cycles >= 1
    assert refresher.last_result.ok is True


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(mock_service):
    refresher = RateRefresher(mock_service)

    await refresher.stop()

    assert refresher.status()['running'] is False
