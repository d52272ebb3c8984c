from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_service, get_refresher
from api.main import app
from application.services.exchange_rate_service import ExchangeRateService
from domain.models.rates import RateSnapshot
from infrastructure.cache.rate_cache import RateCache

NOW = datetime(2025, 11, 5, 10, 30, tzinfo=UTC)


def make_snapshot(source: str = 'bluelytics+exchangerate.host') -> RateSnapshot:
    return RateSnapshot(ars_to_usd=0.001, eur_to_usd=1.1, captured_at=NOW, source=source)


@pytest.fixture
def mock_aggregator():
    aggregator = AsyncMock()
    aggregator.aggregate.return_value = make_snapshot()
    return aggregator


@pytest.fixture
def rate_service(mock_aggregator):
    cache = RateCache(freshness=timedelta(seconds=60), clock=lambda: NOW)
    return ExchangeRateService(aggregator=mock_aggregator, cache=cache)


@pytest.fixture
def client(rate_service):
    app.dependency_overrides[get_rate_service] = lambda: rate_service
    app.dependency_overrides[get_refresher] = lambda: None
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
