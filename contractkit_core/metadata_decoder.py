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

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .builtin.catalog import BUILTIN_CONTRACTS, BuiltinContractDetails, BuiltinKind
from .errors import MalformedMetadataError, UnknownBuiltinKindError
from .identifiers import BuiltIn, ContentLocator, ContractKindRef, normalize
from .metadata import (
    DEFAULT_IMAGE,
    PLACEHOLDER_NAME,
    CompilerMetadata,
    FlatPublishMetadata,
    PreDeployMetadata,
    PublishMetadata,
    describe_validation_error,
    remove_none_values,
    unique,
)
from .storage.client import ContentFetcher

logger = logging.getLogger(__name__)


def load_json_document(locator: str, raw: bytes | str) -> dict[str, Any]:
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedMetadataError(locator, f'invalid JSON: {e}') from e

    if not isinstance(document, dict):
        raise MalformedMetadataError(locator, 'expected a JSON object')
    return document


def builtin_metadata(
    kind: BuiltinKind, catalog: Mapping[BuiltinKind, BuiltinContractDetails] = BUILTIN_CONTRACTS
) -> PublishMetadata:
    details = catalog.get(kind)
    if details is None:
        raise UnknownBuiltinKindError(kind.value)

    return PublishMetadata(
        name=details.title,
        image=details.icon,
        description=details.description,
        deploy_disabled=details.coming_soon,
    )


def placeholder_metadata() -> PublishMetadata:
    return PublishMetadata(name=PLACEHOLDER_NAME, image=DEFAULT_IMAGE)


def parse_compiler_metadata(locator: str, raw: dict[str, Any]) -> CompilerMetadata:
    try:
        return CompilerMetadata.model_validate(raw)
    except ValidationError as e:
        raise MalformedMetadataError(locator, describe_validation_error(e)) from e


def info_from_compiler_metadata(compiler_metadata: CompilerMetadata) -> dict[str, str]:
    devdoc = compiler_metadata.devdoc
    return remove_none_values(
        {
            'title': devdoc.title,
            'author': devdoc.author,
            'details': devdoc.details,
            'notice': compiler_metadata.userdoc.notice,
        }
    )


def licenses_from_compiler_metadata(compiler_metadata: CompilerMetadata) -> list[str]:
    sources = compiler_metadata.sources or {}
    return unique([source.license for source in sources.values() if source.license])


class MetadataDecoder:
    """
    Turns a contract identifier into PublishMetadata.

    Built-in kinds are answered from the static catalog without touching the
    content network. Content locators are fetched and decoded; content that is
    not available yet yields a placeholder rather than an error.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        catalog: Mapping[BuiltinKind, BuiltinContractDetails] = BUILTIN_CONTRACTS,
    ):
        self.fetcher = fetcher
        self.catalog = catalog

    async def decode(self, ref: 'ContractKindRef | str') -> PublishMetadata:
        ref = normalize(ref)
        if isinstance(ref, BuiltIn):
            return builtin_metadata(ref.kind, self.catalog)
        return await self._decode_content(ref)

    async def _decode_content(self, ref: ContentLocator) -> PublishMetadata:
        raw = await self.fetcher.fetch(ref.uri)
        if raw is None:
            logger.debug(f'Metadata for {ref.uri} not available yet, returning placeholder')
            return placeholder_metadata()

        document = load_json_document(ref.uri, raw)
        if 'metadataUri' in document:
            return await self._decode_pre_deploy(ref.uri, document)
        return self._decode_flat(ref.uri, document)

    async def _decode_pre_deploy(self, locator: str, document: dict[str, Any]) -> PublishMetadata:
        try:
            pre_deploy = PreDeployMetadata.model_validate(document)
        except ValidationError as e:
            raise MalformedMetadataError(locator, describe_validation_error(e)) from e

        compiler_raw = await self.fetcher.fetch(pre_deploy.metadata_uri)
        if compiler_raw is None:
            raise MalformedMetadataError(
                locator, f'compiler metadata {pre_deploy.metadata_uri} not found'
            )
        compiler_metadata = load_json_document(pre_deploy.metadata_uri, compiler_raw)
        compiler = parse_compiler_metadata(pre_deploy.metadata_uri, compiler_metadata)

        bytecode = None
        if pre_deploy.bytecode_uri:
            bytecode_raw = await self.fetcher.fetch(pre_deploy.bytecode_uri)
            if bytecode_raw is not None:
                bytecode = bytecode_raw.decode('utf-8', errors='replace').strip()

        info = info_from_compiler_metadata(compiler)
        return PublishMetadata(
            name=pre_deploy.name,
            image=pre_deploy.image or DEFAULT_IMAGE,
            description=info.get('title', ''),
            abi=compiler.output.abi if compiler.output else [],
            bytecode=bytecode,
            info=info,
            licenses=licenses_from_compiler_metadata(compiler),
            compiler_metadata=compiler_metadata,
        )

    def _decode_flat(self, locator: str, document: dict[str, Any]) -> PublishMetadata:
        try:
            flat = FlatPublishMetadata.model_validate(document)
        except ValidationError as e:
            raise MalformedMetadataError(locator, describe_validation_error(e)) from e

        info = remove_none_values(flat.info)
        if flat.metadata is not None:
            parse_compiler_metadata(locator, flat.metadata)

        return PublishMetadata(
            name=flat.name,
            image=flat.image or DEFAULT_IMAGE,
            description=info.get('title', ''),
            abi=flat.abi,
            bytecode=flat.bytecode,
            info=info,
            licenses=unique(flat.licenses or []),
            compiler_metadata=flat.metadata,
        )
