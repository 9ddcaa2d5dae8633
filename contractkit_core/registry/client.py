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
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import (
    ContractKitError,
    MalformedMetadataError,
    PreconditionUnmetError,
    RegistryUnavailableError,
)
from ..metadata import describe_validation_error
from .models import (
    ExtraPublishMetadata,
    PrePublishMetadata,
    ProfileMetadata,
    ReleaseHandle,
    ReleaseInfo,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')
M = TypeVar('M', bound=BaseModel)


def require(value: Any, message: str, identifier: str | None = None) -> None:
    if not value:
        raise PreconditionUnmetError(message, identifier)


class PublisherRegistryClient(ABC):
    """
    Client for an on-chain publisher registry, bound to one deployment network.

    Public methods validate their inputs and the connection before issuing any
    call, raising PreconditionUnmetError. Failures inside the underscore hooks
    are surfaced as RegistryUnavailableError so callers can tell retryable
    infrastructure faults from caller mistakes.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @property
    def signer_address(self) -> str | None:
        """Address of the account publishing through this client, if any."""
        return None

    @abstractmethod
    async def _get_latest_version(self, publisher: str, contract_name: str) -> ReleaseHandle:
        pass

    @abstractmethod
    async def _get_all_versions(self, publisher: str, contract_name: str) -> list[ReleaseHandle]:
        pass

    @abstractmethod
    async def _get_all_published(self, publisher: str) -> list[ReleaseHandle]:
        pass

    @abstractmethod
    async def _fetch_release_info(self, handle: ReleaseHandle) -> dict[str, Any]:
        pass

    @abstractmethod
    async def _fetch_pre_publish_metadata(self, locator: str, publisher: str) -> dict[str, Any]:
        pass

    @abstractmethod
    async def _publish(self, locator: str, extra_metadata: ExtraPublishMetadata) -> None:
        pass

    @abstractmethod
    async def _get_publisher_profile(self, publisher: str) -> dict[str, Any]:
        pass

    @abstractmethod
    async def _update_publisher_profile(self, profile: ProfileMetadata) -> None:
        pass

    def _require_connection(self, operation: str) -> None:
        if not self.is_connected:
            raise PreconditionUnmetError(f'registry is not connected, cannot {operation}')

    async def _call(self, operation: str, call: Awaitable[T], identifier: str | None = None) -> T:
        try:
            return await call
        except ContractKitError:
            raise
        except Exception as e:
            logger.error(f'Registry call {operation} failed for {identifier}: {e}')
            raise RegistryUnavailableError(operation, str(e), identifier) from e

    def _validate(self, model: type[M], raw: Any, locator: str) -> M:
        if isinstance(raw, model):
            return raw
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise MalformedMetadataError(locator, describe_validation_error(e)) from e

    async def get_latest_version(self, publisher: str, contract_name: str) -> ReleaseHandle:
        self._require_connection('get_latest_version')
        require(publisher, 'publisher address is not defined')
        require(contract_name, 'contract name is not defined', publisher)
        return await self._call(
            'get_latest_version',
            self._get_latest_version(publisher, contract_name),
            f'{publisher}/{contract_name}',
        )

    async def get_all_versions(self, publisher: str, contract_name: str) -> list[ReleaseHandle]:
        self._require_connection('get_all_versions')
        require(publisher, 'publisher address is not defined')
        require(contract_name, 'contract name is not defined', publisher)
        return await self._call(
            'get_all_versions',
            self._get_all_versions(publisher, contract_name),
            f'{publisher}/{contract_name}',
        )

    async def get_all_published(self, publisher: str) -> list[ReleaseHandle]:
        """Every contract the publisher has released, skipping entries without an id."""
        self._require_connection('get_all_published')
        require(publisher, 'publisher address is not defined')
        handles = await self._call(
            'get_all_published', self._get_all_published(publisher), publisher
        )
        return [handle for handle in handles or [] if handle.id]

    async def fetch_release_info(self, handle: ReleaseHandle) -> ReleaseInfo:
        self._require_connection('fetch_release_info')
        require(handle, 'release is not defined')
        raw = await self._call(
            'fetch_release_info', self._fetch_release_info(handle), handle.metadata_uri
        )
        return self._validate(ReleaseInfo, raw, handle.metadata_uri)

    async def fetch_pre_publish_metadata(self, locator: str, publisher: str) -> PrePublishMetadata:
        self._require_connection('fetch_pre_publish_metadata')
        require(locator, 'metadata locator is not defined')
        require(publisher, 'address is not defined', locator)
        raw = await self._call(
            'fetch_pre_publish_metadata',
            self._fetch_pre_publish_metadata(locator, publisher),
            locator,
        )
        return self._validate(PrePublishMetadata, raw, locator)

    async def publish(self, locator: str, extra_metadata: ExtraPublishMetadata) -> None:
        self._require_connection('publish')
        require(locator, 'metadata locator is not defined')
        await self._call('publish', self._publish(locator, extra_metadata), locator)

    async def get_publisher_profile(self, publisher: str) -> ProfileMetadata:
        self._require_connection('get_publisher_profile')
        require(publisher, 'address is not defined')
        raw = await self._call(
            'get_publisher_profile', self._get_publisher_profile(publisher), publisher
        )
        return self._validate(ProfileMetadata, raw or {}, publisher)

    async def update_publisher_profile(self, profile: ProfileMetadata) -> None:
        self._require_connection('update_publisher_profile')
        await self._call(
            'update_publisher_profile',
            self._update_publisher_profile(profile),
            self.signer_address,
        )
