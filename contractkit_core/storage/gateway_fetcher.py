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

import logging
import os

import httpx
from dotenv import load_dotenv
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_random_exponential

from ..errors import ContentFetchError
from ..identifiers import IPFS_SCHEME
from .client import ContentFetcher

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = 'https://gateway.ipfscdn.io/ipfs/'
DEFAULT_TIMEOUT = 30.0


def is_server_or_transport_error(exception: BaseException) -> bool:
    if isinstance(exception, httpx.TransportError):
        return True

    return (
        isinstance(exception, httpx.HTTPStatusError) and 500 <= exception.response.status_code < 600
    )


class IpfsGatewayConfig:
    def __init__(
        self,
        gateway_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        gateway_url = gateway_url or os.getenv('IPFS_GATEWAY_URL') or DEFAULT_GATEWAY_URL
        self.gateway_url = gateway_url if gateway_url.endswith('/') else f'{gateway_url}/'
        self.timeout = timeout


class IpfsGatewayFetcher(ContentFetcher):
    """Fetches ipfs:// content through an HTTP gateway."""

    def __init__(
        self,
        config: IpfsGatewayConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if config is None:
            config = IpfsGatewayConfig()
        self.config = config
        if client is None:
            self.client = httpx.AsyncClient(timeout=self.config.timeout, follow_redirects=True)
        else:
            self.client = client

    def resolve_url(self, locator: str) -> str:
        if locator.startswith(IPFS_SCHEME):
            return f'{self.config.gateway_url}{locator[len(IPFS_SCHEME) :]}'
        return locator

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_random_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(is_server_or_transport_error),
        after=lambda retry_state: logger.warning(
            f'Retrying gateway fetch after {retry_state.attempt_number} attempts...'
        ),
        reraise=True,
    )
    async def _get_with_retry(self, url: str) -> httpx.Response | None:
        response = await self.client.get(url)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response

    async def fetch(self, locator: str) -> bytes | None:
        url = self.resolve_url(locator)
        try:
            response = await self._get_with_retry(url)
        except httpx.HTTPError as e:
            raise ContentFetchError(locator, str(e)) from e

        if response is None:
            logger.debug(f'No content found for {locator}')
            return None
        return response.content

    async def close(self) -> None:
        await self.client.aclose()
