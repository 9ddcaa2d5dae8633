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

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

PLACEHOLDER_NAME = 'Loading...'
DEFAULT_IMAGE = 'custom'


class AbiParameter(BaseModel):
    name: str = ''
    type: str
    internal_type: str | None = Field(default=None, alias='internalType')
    indexed: bool | None = None
    components: list['AbiParameter'] | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    @property
    def canonical_type(self) -> str:
        """Type as it appears in a selector, with tuples expanded to their components."""
        if self.type.startswith('tuple'):
            inner = ','.join(c.canonical_type for c in self.components or [])
            return f'({inner}){self.type[len("tuple") :]}'
        return self.type


class AbiEntry(BaseModel):
    type: str = 'function'
    name: str = ''
    inputs: list[AbiParameter] = Field(default_factory=list)
    outputs: list[AbiParameter] = Field(default_factory=list)
    state_mutability: str | None = Field(default=None, alias='stateMutability')
    anonymous: bool | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    @property
    def signature(self) -> str:
        return f'{self.name}({",".join(p.canonical_type for p in self.inputs)})'


AbiAdapter = TypeAdapter(list[AbiEntry])


class NatspecDoc(BaseModel):
    """devdoc or userdoc section of solc compiler output."""

    title: str | None = None
    author: str | None = None
    details: str | None = None
    notice: str | None = None
    methods: dict[str, dict[str, Any]] = Field(default_factory=dict)

    model_config = ConfigDict(extra='ignore')


class CompilerOutput(BaseModel):
    abi: list[AbiEntry] = Field(default_factory=list)
    devdoc: NatspecDoc | None = None
    userdoc: NatspecDoc | None = None

    model_config = ConfigDict(extra='ignore')


class SourceInfo(BaseModel):
    license: str | None = None

    model_config = ConfigDict(extra='ignore')


class CompilerMetadata(BaseModel):
    """The parts of solc metadata JSON that publish metadata is built from."""

    output: CompilerOutput | None = None
    sources: dict[str, SourceInfo] | None = None

    model_config = ConfigDict(extra='ignore')

    @property
    def devdoc(self) -> NatspecDoc:
        return (self.output and self.output.devdoc) or NatspecDoc()

    @property
    def userdoc(self) -> NatspecDoc:
        return (self.output and self.output.userdoc) or NatspecDoc()


class PublishMetadata(BaseModel):
    name: str
    image: str = DEFAULT_IMAGE
    description: str | None = None
    abi: list[AbiEntry] | None = None
    bytecode: str | None = None
    deploy_disabled: bool = False
    info: dict[str, str] = Field(default_factory=dict)
    licenses: list[str] = Field(default_factory=list)
    compiler_metadata: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_placeholder(self) -> bool:
        """True for the stand-in returned while content has not reached the network yet."""
        return self.name == PLACEHOLDER_NAME and self.abi is None and self.bytecode is None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)


class PreDeployMetadata(BaseModel):
    """Document a publisher uploads before publishing: points at compiler output and bytecode."""

    name: str
    metadata_uri: str = Field(alias='metadataUri')
    bytecode_uri: str | None = Field(default=None, alias='bytecodeUri')
    image: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')


class FlatPublishMetadata(BaseModel):
    name: str
    image: str | None = None
    abi: list[AbiEntry] | None = None
    bytecode: str | None = None
    info: dict[str, str | None] | None = None
    licenses: list[str] | None = None
    metadata: dict[str, Any] | None = None

    model_config = ConfigDict(extra='ignore')


def remove_none_values(obj: dict[str, Any] | None) -> dict[str, Any]:
    return {key: value for key, value in (obj or {}).items() if value is not None}


def unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def describe_validation_error(error: ValidationError) -> str:
    return '; '.join(
        f'{".".join(str(part) for part in err["loc"]) or "<root>"}: {err["msg"]}'
        for err in error.errors()
    )
