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

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..metadata import PreDeployMetadata


class ReleaseHandle(BaseModel):
    """A registry entry for one published version of a contract."""

    id: str = ''
    timestamp: int = 0
    metadata_uri: str = Field(alias='metadataUri')

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ReleaseInfo(BaseModel):
    name: str
    version: str = ''
    description: str | None = None
    publisher: str | None = None
    tags: list[str] = Field(default_factory=list)
    readme: str | None = None
    changelog: str | None = None
    license: str | None = None

    model_config = ConfigDict(frozen=True, extra='ignore')


class ReleaseRecord(BaseModel):
    id: str
    version: str
    contract_name: str
    publisher_address: str
    metadata_uri: str
    description: str = ''
    tags: list[str] = Field(default_factory=list)
    timestamp: int = 0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_release(
        cls, handle: ReleaseHandle, info: ReleaseInfo, publisher: str
    ) -> 'ReleaseRecord':
        return cls(
            id=handle.id,
            version=info.version or '',
            contract_name=info.name or '',
            publisher_address=info.publisher or publisher,
            metadata_uri=handle.metadata_uri,
            description=info.description or '',
            tags=list(info.tags or []),
            timestamp=handle.timestamp,
        )


class ExtraPublishMetadata(BaseModel):
    version: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    readme: str | None = None
    changelog: str | None = None
    license: str | None = None

    @field_validator('version')
    @classmethod
    def validate_version(cls, v):
        if not v or not v.strip():
            raise ValueError('version must be a non-empty string')
        return v.strip()


class PublishRequest(BaseModel):
    metadata_locator: str
    extra_metadata: ExtraPublishMetadata
    contract_name: str | None = None


class ProfileMetadata(BaseModel):
    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    website: str | None = None
    twitter: str | None = None
    telegram: str | None = None
    facebook: str | None = None
    github: str | None = None
    medium: str | None = None
    linkedin: str | None = None
    reddit: str | None = None
    discord: str | None = None

    model_config = ConfigDict(extra='ignore')


class PrePublishMetadata(BaseModel):
    pre_deploy_metadata: PreDeployMetadata = Field(alias='preDeployMetadata')
    latest_published: ReleaseInfo | None = Field(
        default=None, alias='latestPublishedContractMetadata'
    )

    model_config = ConfigDict(populate_by_name=True)
