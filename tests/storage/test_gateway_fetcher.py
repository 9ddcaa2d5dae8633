"""
Copyright 2024, Zep Software, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
from tenacity import wait_none

from contractkit_core.errors import ContentFetchError
from contractkit_core.storage.gateway_fetcher import (
    DEFAULT_GATEWAY_URL,
    IpfsGatewayConfig,
    IpfsGatewayFetcher,
)

GATEWAY = 'https://ipfs.example.com/ipfs/'


def response(status_code: int, content: bytes = b'') -> httpx.Response:
    return httpx.Response(
        status_code, content=content, request=httpx.Request('GET', f'{GATEWAY}QmHash')
    )


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(IpfsGatewayFetcher._get_with_retry.retry, 'wait', wait_none())


@pytest.fixture
def mock_httpx_client():
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock()
    return client


@pytest.fixture
def fetcher(mock_httpx_client):
    return IpfsGatewayFetcher(IpfsGatewayConfig(gateway_url=GATEWAY), client=mock_httpx_client)


class TestIpfsGatewayConfig:
    def test_default_gateway(self, monkeypatch):
        monkeypatch.delenv('IPFS_GATEWAY_URL', raising=False)
        assert IpfsGatewayConfig().gateway_url == DEFAULT_GATEWAY_URL

    def test_gateway_from_environment(self, monkeypatch):
        monkeypatch.setenv('IPFS_GATEWAY_URL', 'https://env.example.com/ipfs')
        assert IpfsGatewayConfig().gateway_url == 'https://env.example.com/ipfs/'

    def test_explicit_gateway_wins(self, monkeypatch):
        monkeypatch.setenv('IPFS_GATEWAY_URL', 'https://env.example.com/ipfs/')
        assert IpfsGatewayConfig(gateway_url=GATEWAY).gateway_url == GATEWAY


def test_resolve_url(fetcher):
    assert fetcher.resolve_url('ipfs://QmHash/0') == f'{GATEWAY}QmHash/0'
    assert fetcher.resolve_url('https://example.com/meta.json') == 'https://example.com/meta.json'


@pytest.mark.asyncio
async def test_fetch_returns_content(fetcher, mock_httpx_client):
    mock_httpx_client.get.return_value = response(200, b'{"name": "Token"}')

    assert await fetcher.fetch('ipfs://QmHash') == b'{"name": "Token"}'
    mock_httpx_client.get.assert_awaited_once_with(f'{GATEWAY}QmHash')


@pytest.mark.asyncio
async def test_missing_content_is_none(fetcher, mock_httpx_client):
    mock_httpx_client.get.return_value = response(404)

    assert await fetcher.fetch('ipfs://QmHash') is None
    assert mock_httpx_client.get.await_count == 1


@pytest.mark.asyncio
async def test_server_errors_are_retried(fetcher, mock_httpx_client):
    mock_httpx_client.get.side_effect = [response(503), response(200, b'ok')]

    assert await fetcher.fetch('ipfs://QmHash') == b'ok'
    assert mock_httpx_client.get.await_count == 2


@pytest.mark.asyncio
async def test_persistent_server_error_raises(fetcher, mock_httpx_client):
    mock_httpx_client.get.return_value = response(502)

    with pytest.raises(ContentFetchError) as exc_info:
        await fetcher.fetch('ipfs://QmHash')

    assert exc_info.value.identifier == 'ipfs://QmHash'
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
    assert mock_httpx_client.get.await_count == 3


@pytest.mark.asyncio
async def test_client_errors_are_not_retried(fetcher, mock_httpx_client):
    mock_httpx_client.get.return_value = response(400)

    with pytest.raises(ContentFetchError):
        await fetcher.fetch('ipfs://QmHash')
    assert mock_httpx_client.get.await_count == 1


@pytest.mark.asyncio
async def test_transport_errors_are_retried(fetcher, mock_httpx_client):
    mock_httpx_client.get.side_effect = httpx.ConnectError('connection refused')

    with pytest.raises(ContentFetchError, match='connection refused'):
        await fetcher.fetch('ipfs://QmHash')
    assert mock_httpx_client.get.await_count == 3


@pytest.mark.asyncio
async def test_close(fetcher, mock_httpx_client):
    await fetcher.close()
    mock_httpx_client.aclose.assert_awaited_once()
