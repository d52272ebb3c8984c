"""
Shared fixtures for quote provider tests.
"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest


def _json_response(payload):
    response = Mock()
    response.raise_for_status = Mock()
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _status_error(status_code: int, text: str = 'error'):
    error_response = Mock()
    error_response.status_code = status_code
    error_response.text = text
    return httpx.HTTPStatusError('HTTP error', request=Mock(), response=error_response)


@pytest.fixture
def json_response():
    """Factory for a mocked 2xx response whose ``json()`` returns (or raises) ``payload``."""
    return _json_response


@pytest.fixture
def status_error():
    """Factory for an ``httpx.HTTPStatusError`` with the given status code."""
    return _status_error


@pytest.fixture
def mock_client():
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
def respond_with(mock_client):
    """Route mocked GETs by URL: ``respond_with({url: payload_or_exception})``."""

    def _configure(routes: dict):
        async def _get(url, params=None):
            result = routes[url]
            if isinstance(result, httpx.HTTPError):
                raise result
            return _json_response(result)

        mock_client.get.side_effect = _get
        return mock_client

    return _configure
