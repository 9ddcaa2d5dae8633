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

from ..cache.client import QueryCache
from ..cache.memory_cache import InMemoryQueryCache
from ..cache.sqlite_cache import SQLiteQueryCache
from ..extensions.catalog import DEFAULT_FEATURE_CATALOG, FeatureCatalog, load_feature_catalog
from ..revalidation import RevalidationClient
from ..storage.client import ContentFetcher
from ..storage.gateway_fetcher import IpfsGatewayConfig, IpfsGatewayFetcher
from .settings import CacheBackend, CacheConfig, ContentConfig, RevalidationConfig

logger = logging.getLogger(__name__)


def create_content_fetcher(config: ContentConfig) -> ContentFetcher:
    gateway_config = IpfsGatewayConfig(gateway_url=config.gateway_url, timeout=config.timeout)
    return IpfsGatewayFetcher(gateway_config)


def create_query_cache(config: CacheConfig) -> QueryCache:
    if config.backend == CacheBackend.SQLITE:
        if not config.directory:
            raise ValueError('directory is required for the sqlite cache backend')
        logger.info(f'Using sqlite query cache at {config.directory}')
        return SQLiteQueryCache(config.directory)
    return InMemoryQueryCache()


def create_revalidation_client(config: RevalidationConfig) -> RevalidationClient | None:
    if not config.enabled:
        return None
    return RevalidationClient(base_url=config.base_url)


def create_feature_catalog(path: str | None) -> FeatureCatalog:
    if path is None:
        return DEFAULT_FEATURE_CATALOG
    logger.info(f'Loading feature catalog from {path}')
    return load_feature_catalog(path)
