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
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from pydantic import TypeAdapter

from .builtin.catalog import BUILTIN_CONTRACTS, BuiltinContractDetails, BuiltinKind
from .cache.client import QueryCache, QueryKey
from .cache.memory_cache import InMemoryQueryCache
from .cache.sqlite_cache import SQLiteQueryCache
from .config.factory import (
    create_content_fetcher,
    create_feature_catalog,
    create_query_cache,
    create_revalidation_client,
)
from .config.settings import ContractKitConfig
from .contractkit_types import ContractKitClients
from .extensions.abi_utils import (
    AbiFunction,
    extract_constructor_params_from_abi,
    extract_functions_from_abi,
)
from .extensions.catalog import DEFAULT_FEATURE_CATALOG, FeatureCatalog
from .extensions.detector import ExtensionReport, detect_extensions
from .metadata import AbiParameter, PublishMetadata
from .metadata_decoder import MetadataDecoder
from .publishing import PRE_PUBLISH_METADATA_KEY, RELEASER_PROFILE_KEY, PublishCoordinator
from .registry.client import PublisherRegistryClient
from .registry.models import (
    PrePublishMetadata,
    ProfileMetadata,
    PublishRequest,
    ReleaseHandle,
    ReleaseInfo,
    ReleaseRecord,
)
from .releases import VersionHistoryResolver
from .revalidation import RevalidationClient
from .storage.client import ContentFetcher
from .storage.gateway_fetcher import IpfsGatewayFetcher

logger = logging.getLogger(__name__)

T = TypeVar('T')

PUBLISH_METADATA_KEY = 'publish-metadata'
LATEST_RELEASE_KEY = 'latest-release'
ALL_RELEASES_KEY = 'all-releases'
PUBLISHED_CONTRACTS_KEY = 'published-contracts'
RELEASED_CONTRACT_KEY = 'released-contract'


class ContractKit:
    def __init__(
        self,
        registry: PublisherRegistryClient,
        fetcher: ContentFetcher | None = None,
        cache: QueryCache | None = None,
        revalidator: RevalidationClient | None = None,
        feature_catalog: FeatureCatalog | None = None,
        builtin_catalog: Mapping[BuiltinKind, BuiltinContractDetails] = BUILTIN_CONTRACTS,
    ):
        """
        Initialize a ContractKit instance.

        Parameters
        ----------
        registry : PublisherRegistryClient
            Client bound to the publisher registry of the target network.
        fetcher : ContentFetcher | None, optional
            Resolves ipfs:// locators. Defaults to an IpfsGatewayFetcher.
        cache : QueryCache | None, optional
            Memoizes resolution results. Defaults to an in-memory cache.
        revalidator : RevalidationClient | None, optional
            Asks release pages to rebuild after writes. Skipped when None.
        feature_catalog : FeatureCatalog | None, optional
            Capability tree used for extension detection. Defaults to the built-in catalog.
        builtin_catalog : Mapping[BuiltinKind, BuiltinContractDetails], optional
            Descriptions of the built-in contract kinds.
        """
        self.registry = registry
        self.fetcher = fetcher or IpfsGatewayFetcher()
        self.cache = cache or InMemoryQueryCache()
        self.revalidator = revalidator
        self.feature_catalog = feature_catalog or DEFAULT_FEATURE_CATALOG
        self.builtin_catalog = builtin_catalog

        self.clients = ContractKitClients(
            registry=self.registry,
            fetcher=self.fetcher,
            cache=self.cache,
            revalidator=self.revalidator,
        )

        self.decoder = MetadataDecoder(self.fetcher, self.builtin_catalog)
        self.releases = VersionHistoryResolver(self.registry)
        self.publisher = PublishCoordinator(self.registry, self.cache, self.revalidator)

    @classmethod
    def from_config(
        cls, registry: PublisherRegistryClient, config: ContractKitConfig | None = None
    ) -> 'ContractKit':
        if config is None:
            config = ContractKitConfig.from_env()

        return cls(
            registry,
            fetcher=create_content_fetcher(config.content),
            cache=create_query_cache(config.cache),
            revalidator=create_revalidation_client(config.revalidation),
            feature_catalog=create_feature_catalog(config.feature_catalog_path),
        )

    async def close(self):
        """Close the HTTP clients and cache connections owned by this instance."""
        if isinstance(self.clients.fetcher, IpfsGatewayFetcher):
            await self.clients.fetcher.close()
        if self.clients.revalidator is not None:
            await self.clients.revalidator.close()
        if isinstance(self.clients.cache, SQLiteQueryCache):
            self.clients.cache.close()

    async def _cached(
        self,
        key: QueryKey,
        fetch: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
        should_cache: Callable[[T], bool] | None = None,
    ) -> T:
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f'Cache hit for {key}')
            return adapter.validate_python(cached)

        value = await fetch()
        if should_cache is not None and not should_cache(value):
            logger.debug(f'Not caching transient result for {key}')
            return value
        await self.cache.set(key, adapter.dump_python(value, mode='json', by_alias=True))
        return value

    async def get_publish_metadata(self, contract_id: str) -> PublishMetadata:
        return await self._cached(
            (PUBLISH_METADATA_KEY, contract_id),
            lambda: self.decoder.decode(contract_id),
            TypeAdapter(PublishMetadata),
            should_cache=lambda metadata: not metadata.is_placeholder,
        )

    async def get_pre_publish_metadata(self, uri: str, address: str | None) -> PrePublishMetadata:
        return await self._cached(
            (PRE_PUBLISH_METADATA_KEY, uri, address),
            lambda: self.publisher.fetch_pre_publish_metadata(uri, address),
            TypeAdapter(PrePublishMetadata),
        )

    async def get_publisher_profile(self, address: str) -> ProfileMetadata:
        return await self._cached(
            (RELEASER_PROFILE_KEY, address),
            lambda: self.registry.get_publisher_profile(address),
            TypeAdapter(ProfileMetadata),
        )

    async def get_latest_release(self, publisher: str, contract_name: str) -> ReleaseRecord:
        return await self._cached(
            (LATEST_RELEASE_KEY, publisher, contract_name),
            lambda: self.releases.resolve_latest(publisher, contract_name),
            TypeAdapter(ReleaseRecord),
        )

    async def get_all_releases(self, publisher: str, contract_name: str) -> list[ReleaseRecord]:
        return await self._cached(
            (ALL_RELEASES_KEY, publisher, contract_name),
            lambda: self.releases.resolve_all(publisher, contract_name),
            TypeAdapter(list[ReleaseRecord]),
        )

    async def get_published_contracts(self, address: str) -> list[ReleaseHandle]:
        return await self._cached(
            (PUBLISHED_CONTRACTS_KEY, address),
            lambda: self.registry.get_all_published(address),
            TypeAdapter(list[ReleaseHandle]),
        )

    async def get_release_info(self, handle: ReleaseHandle) -> ReleaseInfo:
        return await self._cached(
            (RELEASED_CONTRACT_KEY, handle.id, handle.metadata_uri),
            lambda: self.registry.fetch_release_info(handle),
            TypeAdapter(ReleaseInfo),
        )

    def detect_extensions(self, abi: Any) -> ExtensionReport:
        return detect_extensions(self.feature_catalog, abi)

    async def get_contract_extensions(self, contract_id: str) -> ExtensionReport:
        metadata = await self.get_publish_metadata(contract_id)
        return self.detect_extensions(metadata.abi)

    async def get_released_contract_functions(self, handle: ReleaseHandle) -> list[AbiFunction]:
        metadata = await self.get_publish_metadata(handle.metadata_uri)
        if metadata.abi is None:
            return []
        return extract_functions_from_abi(metadata.abi, metadata.compiler_metadata)

    async def get_constructor_params(self, contract_id: str) -> list[AbiParameter]:
        metadata = await self.get_publish_metadata(contract_id)
        if metadata.abi is None:
            return []
        return extract_constructor_params_from_abi(metadata.abi)

    async def publish(self, request: PublishRequest) -> None:
        await self.publisher.publish(request)

    async def update_profile(self, profile: ProfileMetadata) -> None:
        await self.publisher.update_profile(profile)
