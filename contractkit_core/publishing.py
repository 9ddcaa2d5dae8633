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

from .cache.client import QueryCache, QueryKey
from .errors import PreconditionUnmetError
from .identifiers import BuiltIn, is_builtin_kind, normalize
from .registry.client import PublisherRegistryClient, require
from .registry.models import PrePublishMetadata, ProfileMetadata, PublishRequest
from .revalidation import RevalidationClient

logger = logging.getLogger(__name__)

PRE_PUBLISH_METADATA_KEY = 'pre-publish-metadata'
RELEASER_PROFILE_KEY = 'releaser-profile'


class PublishCoordinator:
    """
    Writes new releases and profile edits through the registry.

    After a successful write the matching cache entries are invalidated and the
    release pages are asked to revalidate. Both are best effort: the write has
    already landed on-chain, so their failures are logged and not raised.
    """

    def __init__(
        self,
        registry: PublisherRegistryClient,
        cache: QueryCache | None = None,
        revalidator: RevalidationClient | None = None,
    ):
        self.registry = registry
        self.cache = cache
        self.revalidator = revalidator

    async def fetch_pre_publish_metadata(
        self, locator: str, address: str | None
    ) -> PrePublishMetadata:
        if is_builtin_kind(locator):
            raise PreconditionUnmetError(
                'Skipping publish metadata fetch for built-in contract', locator
            )
        require(address, 'address is not defined', locator)
        ref = normalize(locator)
        return await self.registry.fetch_pre_publish_metadata(str(ref), address)

    async def publish(self, request: PublishRequest) -> None:
        if not self.registry.is_connected:
            raise PreconditionUnmetError(
                'registry is not ready or does not support publishing', request.metadata_locator
            )

        ref = normalize(request.metadata_locator)
        if isinstance(ref, BuiltIn):
            raise PreconditionUnmetError(
                'built-in contract kinds cannot be published', request.metadata_locator
            )

        await self.registry.publish(ref.uri, request.extra_metadata)
        logger.info(
            f'Published {ref.uri} as version {request.extra_metadata.version} '
            f'of {request.contract_name or "unnamed contract"}'
        )

        await self._invalidate((PRE_PUBLISH_METADATA_KEY, request.metadata_locator))
        await self._revalidate(self.registry.signer_address, request.contract_name)

    async def update_profile(self, profile: ProfileMetadata) -> None:
        await self.registry.update_publisher_profile(profile)

        address = self.registry.signer_address
        if not address:
            logger.warning('No signer address, skipping profile cache invalidation')
            return
        await self._invalidate((RELEASER_PROFILE_KEY, address))
        await self._revalidate(address)

    async def _invalidate(self, prefix: QueryKey) -> None:
        if self.cache is None:
            return
        try:
            dropped = await self.cache.invalidate(prefix)
            logger.debug(f'Invalidated {dropped} cache entries for {prefix}')
        except Exception as e:
            logger.error(f'Failed to invalidate cache entries for {prefix}: {e}')

    async def _revalidate(self, address: str | None, contract_name: str | None = None) -> None:
        if self.revalidator is None:
            return
        if not address:
            logger.warning('No signer address, skipping release page revalidation')
            return
        try:
            await self.revalidator.revalidate_release(address, contract_name)
        except Exception as e:
            logger.error(f'failed to revalidate: {e}')
