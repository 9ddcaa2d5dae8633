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

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:3000'
REVALIDATE_RELEASE_PATH = '/api/revalidate/release'


def default_base_url() -> str:
    base_url = os.getenv('REVALIDATE_BASE_URL')
    if base_url:
        return base_url
    vercel_url = os.getenv('VERCEL_URL')
    if vercel_url:
        return f'https://{vercel_url}'
    return DEFAULT_BASE_URL


class RevalidationClient:
    """Asks the release pages to rebuild after a publish or a profile edit."""

    def __init__(self, base_url: str | None = None, client: httpx.AsyncClient | None = None):
        self.base_url = (base_url or default_base_url()).rstrip('/')
        if client is None:
            self.client = httpx.AsyncClient(base_url=self.base_url)
        else:
            self.client = client

    async def revalidate_release(self, address: str | None, contract_name: str | None = None):
        params = {'address': address}
        if contract_name:
            params['contractName'] = contract_name

        response = await self.client.get(REVALIDATE_RELEASE_PATH, params=params)
        response.raise_for_status()
        logger.debug(f'Revalidated release pages for {address} {contract_name or ""}'.rstrip())

    async def close(self) -> None:
        await self.client.aclose()
