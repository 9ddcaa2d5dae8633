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

from pydantic import BaseModel, ConfigDict

from .builtin.catalog import BuiltinKind
from .errors import InvalidIdentifierError

IPFS_SCHEME = 'ipfs://'
UNDEFINED_LOCATOR = f'{IPFS_SCHEME}undefined'

_BUILTIN_TAGS = {kind.value: kind for kind in BuiltinKind}


class BuiltIn(BaseModel):
    kind: BuiltinKind

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.kind.value


class ContentLocator(BaseModel):
    uri: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.uri

    @property
    def content_hash(self) -> str:
        return self.uri[len(IPFS_SCHEME) :]


ContractKindRef = BuiltIn | ContentLocator


def is_builtin_kind(ref: str | None) -> bool:
    return ref is not None and ref in _BUILTIN_TAGS


def normalize(ref: 'str | ContractKindRef | None') -> ContractKindRef:
    """
    Canonicalizes a contract identifier into a built-in kind or an ipfs:// locator.

    Built-in tags must match exactly. Anything else is treated as a content hash
    and prefixed with the ipfs scheme unless it already carries it.

    Raises:
        InvalidIdentifierError: If the identifier is empty or resolves to the
            ``ipfs://undefined`` sentinel.
    """
    if isinstance(ref, BuiltIn | ContentLocator):
        return ref

    if not ref:
        raise InvalidIdentifierError(ref)

    builtin = _BUILTIN_TAGS.get(ref)
    if builtin is not None:
        return BuiltIn(kind=builtin)

    uri = ref if ref.startswith(IPFS_SCHEME) else f'{IPFS_SCHEME}{ref}'
    if uri == UNDEFINED_LOCATOR or uri == IPFS_SCHEME:
        raise InvalidIdentifierError(ref)

    return ContentLocator(uri=uri)


def to_content_hash(ref: str) -> str:
    """Returns the normalized identifier as a plain string, keeping built-in tags as-is."""
    return str(normalize(ref))
