# nosec B101


from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from domain.exceptions.currency import FeedMalformedError, FeedUnavailableError
from domain.models.currency import RateTable
from infrastructure.providers.open_er_api import OpenERAPIProvider


def _client_returning(payload):
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    return mock_client


@pytest.mark.asyncio
async def test_fetch_rates_success_returns_rate_table():
    mock_client = _client_returning({
        'result': 'success',
        'base_code': 'ARS',
        'rates': {'ARS': 1, 'USD': 0.0011, 'EUR': 0.00095},
    })
    provider = OpenERAPIProvider(client=mock_client)

    table = await provider.fetch_rates('ARS')

    assert isinstance(table, RateTable)
    assert table.base == 'ARS'
    assert table.rates['USD'] == 0.0011
    assert table.rates['EUR'] == 0.00095
    mock_client.get.assert_called_once_with('https://open.er-api.com/v6/latest/ARS')


@pytest.mark.asyncio
async def test_fetch_rates_uses_configured_base_url():
    mock_client = _client_returning({'result': 'success', 'rates': {'EUR': 0.9}})
    provider = OpenERAPIProvider(base_url='http://localhost:8080/v6/', client=mock_client)

    await provider.fetch_rates('USD')

    mock_client.get.assert_called_once_with('http://localhost:8080/v6/latest/USD')


@pytest.mark.asyncio
async def test_fetch_rates_error_result_is_malformed():
    mock_client = _client_returning({'result': 'error', 'error-type': 'unsupported-code'})
    provider = OpenERAPIProvider(client=mock_client)

    with pytest.raises(FeedMalformedError) as exc_info:
        await provider.fetch_rates('XXX')

    assert 'unsupported-code' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_rates_missing_rates_is_malformed():
    provider = OpenERAPIProvider(client=_client_returning({'result': 'success'}))

    with pytest.raises(FeedMalformedError):
        await provider.fetch_rates('ARS')


@pytest.mark.asyncio
async def test_fetch_rates_non_positive_rate_is_malformed():
    provider = OpenERAPIProvider(
        client=_client_returning({'result': 'success', 'rates': {'USD': 0}})
    )

    with pytest.raises(FeedMalformedError):
        await provider.fetch_rates('ARS')


@pytest.mark.asyncio
async def test_fetch_rates_wrong_base_is_malformed():
    provider = OpenERAPIProvider(
        client=_client_returning({'result': 'success', 'base_code': 'USD', 'rates': {'EUR': 0.9}})
    )

    with pytest.raises(FeedMalformedError):
        await provider.fetch_rates('ARS')


@pytest.mark.asyncio
async def test_fetch_rates_invalid_json_is_malformed():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.side_effect = ValueError('Expecting value')
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response

    provider = OpenERAPIProvider(client=mock_client)

    with pytest.raises(FeedMalformedError):
        await provider.fetch_rates('ARS')


@pytest.mark.asyncio
async def test_fetch_rates_http_error_is_unavailable():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.status_code = 503
    mock_response.text = 'Service Unavailable'
    mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
        'Server error', request=Mock(), response=mock_response
    )
    mock_client.get.return_value = mock_response

    provider = OpenERAPIProvider(client=mock_client)

    with pytest.raises(FeedUnavailableError) as exc_info:
        await provider.fetch_rates('ARS')

    assert '503' in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize('error', [
    httpx.ConnectError('Failed to connect'),
    httpx.TimeoutException('Request timed out'),
])
async def test_fetch_rates_network_error_is_unavailable(error):
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.side_effect = error

    provider = OpenERAPIProvider(client=mock_client)

    with pytest.raises(FeedUnavailableError) as exc_info:
        await provider.fetch_rates('ARS')

    assert exc_info.value.has_snapshot is False


@pytest.mark.asyncio
async def test_close_closes_client():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    provider = OpenERAPIProvider(client=mock_client)

    await provider.close()

    mock_client.aclose.assert_awaited_once()
