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

from .errors import ContractKitError
from .registry.client import PublisherRegistryClient
from .registry.models import ReleaseRecord

logger = logging.getLogger(__name__)


class VersionHistoryResolver:
    def __init__(self, registry: PublisherRegistryClient):
        self.registry = registry

    async def resolve_all(self, publisher: str, contract_name: str) -> list[ReleaseRecord]:
        """
        Returns every published version of a contract, most recent first.

        The registry lists versions oldest first. Release info is fetched one
        version at a time in that order and each record is prepended, so the
        result is reversed without sorting. If any version fails to resolve the
        whole call fails with that error, tagged with the version's id.
        """
        handles = await self.registry.get_all_versions(publisher, contract_name)

        releases: list[ReleaseRecord] = []
        for handle in handles:
            try:
                info = await self.registry.fetch_release_info(handle)
            except ContractKitError as e:
                e.version_id = handle.id
                logger.error(
                    f'Failed to resolve version {handle.id} of {publisher}/{contract_name}: {e}'
                )
                raise

            releases.insert(0, ReleaseRecord.from_release(handle, info, publisher))

        logger.debug(f'Resolved {len(releases)} versions of {publisher}/{contract_name}')
        return releases

    async def resolve_latest(self, publisher: str, contract_name: str) -> ReleaseRecord:
        handle = await self.registry.get_latest_version(publisher, contract_name)
        info = await self.registry.fetch_release_info(handle)
        return ReleaseRecord.from_release(handle, info, publisher)
