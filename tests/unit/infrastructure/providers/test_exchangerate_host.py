# nosec B101


import pytest
import httpx

from infrastructure.providers.exchangerate_host import ExchangeRateHostProvider



@pytest.mark.asyncio
async def test_fetch_returns_official_eur_rate(mock_client, json_response):
    mock_client.get.return_value = json_response({
        'success': True,
        'base': 'EUR',
        'rates': {'USD': 1.1},
    })
    provider = ExchangeRateHostProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is True
    assert outcome.value.eur_to_usd == pytest.approx(1.1)
    assert outcome.value.ars_to_usd is None

    call_args = mock_client.get.call_args
    assert call_args[0][0] == 'https://api.exchangerate.host/latest'
    assert call_args[1]['params'] == {'base': 'EUR', 'symbols': 'USD'}


@pytest.mark.asyncio
async def test_fetch_api_error_payload_fails(mock_client, json_response):
    mock_client.get.return_value = json_response({
        'success': False,
        'error': {'code': 101, 'info': 'You have not supplied an API Access Key.'},
    })
    provider = ExchangeRateHostProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert 'API Access Key' in outcome.failure_reason


@pytest.mark.asyncio
async def test_fetch_missing_usd_rate_fails(mock_client, json_response):
    mock_client.get.return_value = json_response({'rates': {}})
    provider = ExchangeRateHostProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert 'Missing quote' in outcome.failure_reason


@pytest.mark.asyncio
async def test_fetch_rate_limited_fails(mock_client, status_error):
    mock_client.get.side_effect = status_error(429, 'Rate limit exceeded')
    provider = ExchangeRateHostProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert '429' in outcome.failure_reason


@pytest.mark.asyncio
async def test_fetch_timeout_fails(mock_client):
    mock_client.get.side_effect = httpx.TimeoutException('Request timed out')
    provider = ExchangeRateHostProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert 'TimeoutException' in outcome.failure_reason
