# nosec B101


import pytest
import httpx

from infrastructure.providers.bluelytics import BluelyticsProvider


BLUELYTICS_PAYLOAD = {
    'oficial': {'value_avg': 950.0, 'value_sell': 970.0, 'value_buy': 930.0},
    'blue': {'value_avg': 1000.0, 'value_sell': 1010.0, 'value_buy': 990.0},
    'last_update': '2025-11-05T10:30:00-03:00',
}


@pytest.mark.asyncio
async def test_fetch_inverts_blue_average(mock_client, json_response):
    mock_client.get.return_value = json_response(BLUELYTICS_PAYLOAD)
    provider = BluelyticsProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is True
    assert outcome.source == 'bluelytics'
    assert outcome.value.ars_to_usd == pytest.approx(0.001)
    assert outcome.value.eur_to_usd is None
    assert mock_client.get.call_args[0][0] == 'https://api.bluelytics.com.ar/v2/latest'


@pytest.mark.asyncio
async def test_fetch_missing_blue_section_fails(mock_client, json_response):
    mock_client.get.return_value = json_response({'oficial': {'value_avg': 950.0}})
    provider = BluelyticsProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert outcome.value is None
    assert 'blue' in outcome.failure_reason.lower()


@pytest.mark.asyncio
@pytest.mark.parametrize('value_avg', [0, -5, None, 'abc'])
async def test_fetch_rejects_unusable_average(mock_client, value_avg, json_response):
    mock_client.get.return_value = json_response({'blue': {'value_avg': value_avg}})
    provider = BluelyticsProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False


@pytest.mark.asyncio
async def test_fetch_network_error_returns_failure(mock_client):
    mock_client.get.side_effect = httpx.ConnectError('Connection refused')
    provider = BluelyticsProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert 'request failed' in outcome.failure_reason.lower()


@pytest.mark.asyncio
async def test_fetch_http_500_returns_failure(mock_client, status_error):
    mock_client.get.side_effect = status_error(500, 'Internal Server Error')
    provider = BluelyticsProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert 'HTTP error 500' in outcome.failure_reason


@pytest.mark.asyncio
async def test_fetch_invalid_json_returns_failure(mock_client, json_response):
    mock_client.get.return_value = json_response(ValueError('Invalid JSON'))
    provider = BluelyticsProvider(client=mock_client)

    outcome = await provider.fetch()

    assert outcome.success is False
    assert 'parsing error' in outcome.failure_reason.lower()


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open(mock_client):
    provider = BluelyticsProvider(client=mock_client)

    await provider.close()

    mock_client.aclose.assert_not_called()
