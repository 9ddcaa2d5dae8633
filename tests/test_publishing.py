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
from unittest.mock import AsyncMock

import httpx
import pytest

from contractkit_core.cache.memory_cache import InMemoryQueryCache
from contractkit_core.errors import InvalidIdentifierError, PreconditionUnmetError
from contractkit_core.publishing import (
    PRE_PUBLISH_METADATA_KEY,
    RELEASER_PROFILE_KEY,
    PublishCoordinator,
)
from contractkit_core.registry.models import (
    ExtraPublishMetadata,
    ProfileMetadata,
    PublishRequest,
)
from contractkit_core.revalidation import RevalidationClient
from tests.helpers_test import CONTRACT_NAME, PUBLISHER, SIGNER, FakeRegistryClient

LOCATOR = 'QmNewRelease'


def publish_request(locator: str = LOCATOR, contract_name: str | None = CONTRACT_NAME):
    return PublishRequest(
        metadata_locator=locator,
        extra_metadata=ExtraPublishMetadata(version='2.0.0', description='second release'),
        contract_name=contract_name,
    )


@pytest.fixture
def revalidator():
    return AsyncMock(spec=RevalidationClient)


async def seeded_cache() -> InMemoryQueryCache:
    cache = InMemoryQueryCache()
    await cache.set((PRE_PUBLISH_METADATA_KEY, LOCATOR, PUBLISHER), {'stale': True})
    await cache.set((PRE_PUBLISH_METADATA_KEY, LOCATOR, SIGNER), {'stale': True})
    await cache.set((PRE_PUBLISH_METADATA_KEY, 'QmOther', PUBLISHER), {'kept': True})
    await cache.set((RELEASER_PROFILE_KEY, SIGNER), {'name': 'old'})
    return cache


class TestPublish:
    @pytest.mark.asyncio
    async def test_builtin_kind_is_rejected_before_any_registry_call(self, revalidator):
        registry = FakeRegistryClient()
        coordinator = PublishCoordinator(registry, InMemoryQueryCache(), revalidator)

        with pytest.raises(PreconditionUnmetError, match='built-in'):
            await coordinator.publish(publish_request('nft-drop'))

        assert registry.calls == []
        revalidator.revalidate_release.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_connected(self, revalidator):
        registry = FakeRegistryClient(connected=False)
        coordinator = PublishCoordinator(registry, revalidator=revalidator)

        with pytest.raises(PreconditionUnmetError):
            await coordinator.publish(publish_request())

        assert registry.calls == []
        revalidator.revalidate_release.assert_not_called()

    @pytest.mark.parametrize('locator', ['', 'ipfs://undefined', 'undefined'])
    @pytest.mark.asyncio
    async def test_sentinel_locators_are_rejected(self, locator):
        registry = FakeRegistryClient()

        with pytest.raises(InvalidIdentifierError):
            await PublishCoordinator(registry).publish(publish_request(locator))
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_publish_writes_normalized_locator(self, revalidator):
        cache = await seeded_cache()
        registry = FakeRegistryClient()

        await PublishCoordinator(registry, cache, revalidator).publish(publish_request())

        [(operation, (locator, extra))] = registry.calls
        assert operation == 'publish'
        assert locator == f'ipfs://{LOCATOR}'
        assert extra.version == '2.0.0'

    @pytest.mark.asyncio
    async def test_publish_invalidates_pre_publish_entries_for_every_address(self, revalidator):
        cache = await seeded_cache()
        await PublishCoordinator(FakeRegistryClient(), cache, revalidator).publish(
            publish_request()
        )

        assert await cache.get((PRE_PUBLISH_METADATA_KEY, LOCATOR, PUBLISHER)) is None
        assert await cache.get((PRE_PUBLISH_METADATA_KEY, LOCATOR, SIGNER)) is None
        assert await cache.get((PRE_PUBLISH_METADATA_KEY, 'QmOther', PUBLISHER)) == {'kept': True}
        assert await cache.get((RELEASER_PROFILE_KEY, SIGNER)) == {'name': 'old'}

    @pytest.mark.asyncio
    async def test_publish_revalidates_signer_pages(self, revalidator):
        await PublishCoordinator(FakeRegistryClient(), revalidator=revalidator).publish(
            publish_request()
        )
        revalidator.revalidate_release.assert_awaited_once_with(SIGNER, CONTRACT_NAME)

    @pytest.mark.asyncio
    async def test_revalidation_failure_is_logged_not_raised(self, revalidator, caplog):
        cache = await seeded_cache()
        request = httpx.Request('GET', 'http://localhost:3000/api/revalidate/release')
        revalidator.revalidate_release.side_effect = httpx.ConnectError('refused', request=request)
        registry = FakeRegistryClient()

        with caplog.at_level(logging.ERROR, logger='contractkit_core.publishing'):
            await PublishCoordinator(registry, cache, revalidator).publish(publish_request())

        assert registry.operations() == ['publish']
        assert await cache.get((PRE_PUBLISH_METADATA_KEY, LOCATOR, PUBLISHER)) is None
        assert 'failed to revalidate' in caplog.text

    @pytest.mark.asyncio
    async def test_invalidation_failure_is_logged_not_raised(self, revalidator, caplog):
        cache = AsyncMock(spec=InMemoryQueryCache)
        cache.invalidate.side_effect = OSError('disk full')

        with caplog.at_level(logging.ERROR, logger='contractkit_core.publishing'):
            await PublishCoordinator(FakeRegistryClient(), cache, revalidator).publish(
                publish_request()
            )

        assert 'Failed to invalidate' in caplog.text
        revalidator.revalidate_release.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_without_signer_revalidation_is_skipped(self, revalidator):
        registry = FakeRegistryClient(signer=None)

        await PublishCoordinator(registry, revalidator=revalidator).publish(publish_request())

        assert registry.operations() == ['publish']
        revalidator.revalidate_release.assert_not_called()


class TestPrePublishMetadata:
    @pytest.mark.asyncio
    async def test_builtin_kind_is_rejected(self):
        registry = FakeRegistryClient()
        with pytest.raises(PreconditionUnmetError, match='built-in'):
            await PublishCoordinator(registry).fetch_pre_publish_metadata('marketplace', PUBLISHER)
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_missing_address(self):
        registry = FakeRegistryClient()
        with pytest.raises(PreconditionUnmetError, match='address'):
            await PublishCoordinator(registry).fetch_pre_publish_metadata(LOCATOR, None)
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_sentinel_locator(self):
        registry = FakeRegistryClient()
        with pytest.raises(InvalidIdentifierError):
            await PublishCoordinator(registry).fetch_pre_publish_metadata('undefined', PUBLISHER)
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_fetches_with_normalized_locator(self):
        registry = FakeRegistryClient(
            pre_publish={
                f'ipfs://{LOCATOR}': {
                    'preDeployMetadata': {'name': CONTRACT_NAME, 'metadataUri': 'ipfs://QmMeta'}
                }
            }
        )

        result = await PublishCoordinator(registry).fetch_pre_publish_metadata(LOCATOR, PUBLISHER)

        assert result.pre_deploy_metadata.name == CONTRACT_NAME
        assert result.latest_published is None
        assert registry.calls == [
            ('fetch_pre_publish_metadata', (f'ipfs://{LOCATOR}', PUBLISHER))
        ]


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_invalidates_profile_and_revalidates(self, revalidator):
        cache = await seeded_cache()
        registry = FakeRegistryClient()
        profile = ProfileMetadata(name='Alice', bio='Builds contracts')

        await PublishCoordinator(registry, cache, revalidator).update_profile(profile)

        assert registry.calls == [('update_publisher_profile', (profile,))]
        assert await cache.get((RELEASER_PROFILE_KEY, SIGNER)) is None
        assert await cache.get((PRE_PUBLISH_METADATA_KEY, LOCATOR, SIGNER)) == {'stale': True}
        revalidator.revalidate_release.assert_awaited_once_with(SIGNER, None)

    @pytest.mark.asyncio
    async def test_not_connected(self):
        registry = FakeRegistryClient(connected=False)
        with pytest.raises(PreconditionUnmetError):
            await PublishCoordinator(registry).update_profile(ProfileMetadata(name='Alice'))
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_without_signer_cache_is_left_alone(self, revalidator, caplog):
        registry = FakeRegistryClient(signer=None)
        cache = AsyncMock(spec=InMemoryQueryCache)

        with caplog.at_level(logging.WARNING, logger='contractkit_core.publishing'):
            await PublishCoordinator(registry, cache, revalidator).update_profile(
                ProfileMetadata(name='Alice')
            )

        assert registry.operations() == ['update_publisher_profile']
        cache.invalidate.assert_not_called()
        revalidator.revalidate_release.assert_not_called()
        assert 'skipping profile cache invalidation' in caplog.text
