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

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

SIGNATURE_KINDS = ('function', 'event')


class FeatureDefinition(BaseModel):
    """
    A named on-chain capability and the interface fragment a contract must expose to have it.

    Fragment entries are written as ``'<kind> <name>(<types>)'``, for example
    ``'function mintTo(address,string)'`` or ``'event Transfer(address,address,uint256)'``.
    """

    name: str
    interface: tuple[str, ...] = ()
    features: tuple['FeatureDefinition', ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator('interface', mode='before')
    @classmethod
    def normalize_signatures(cls, value):
        signatures = []
        for signature in value or ():
            kind, _, rest = str(signature).strip().partition(' ')
            if kind not in SIGNATURE_KINDS or not rest:
                raise ValueError(
                    f'interface entry {signature!r} must start with one of {SIGNATURE_KINDS}'
                )
            signatures.append(f'{kind} {"".join(rest.split())}')
        return tuple(signatures)


FeatureCatalog = tuple[FeatureDefinition, ...]

FeatureCatalogAdapter = TypeAdapter(FeatureCatalog)


def feature(name: str, interface: list[str], *features: FeatureDefinition) -> FeatureDefinition:
    return FeatureDefinition(name=name, interface=tuple(interface), features=features)


def _batch_mintable(name: str) -> FeatureDefinition:
    return feature(name, ['function multicall(bytes[])'])


DEFAULT_FEATURE_CATALOG: FeatureCatalog = (
    feature(
        'ERC20',
        [
            'function totalSupply()',
            'function balanceOf(address)',
            'function allowance(address,address)',
            'function approve(address,uint256)',
            'function transfer(address,uint256)',
            'function transferFrom(address,address,uint256)',
        ],
        feature(
            'ERC20Mintable',
            ['function mintTo(address,uint256)'],
            _batch_mintable('ERC20BatchMintable'),
        ),
        feature('ERC20Burnable', ['function burn(uint256)', 'function burnFrom(address,uint256)']),
        feature(
            'ERC20SignatureMintable',
            [
                'function mintWithSignature((address,address,uint256,uint256,address,uint128,uint128,bytes32),bytes)',
                'function verify((address,address,uint256,uint256,address,uint128,uint128,bytes32),bytes)',
            ],
        ),
    ),
    feature(
        'ERC721',
        [
            'function balanceOf(address)',
            'function ownerOf(uint256)',
            'function approve(address,uint256)',
            'function getApproved(uint256)',
            'function setApprovalForAll(address,bool)',
            'function isApprovedForAll(address,address)',
            'function transferFrom(address,address,uint256)',
            'function safeTransferFrom(address,address,uint256)',
        ],
        feature(
            'ERC721Supply',
            ['function totalSupply()'],
            feature('ERC721Enumerable', ['function tokenOfOwnerByIndex(address,uint256)']),
        ),
        feature(
            'ERC721Mintable',
            ['function mintTo(address,string)'],
            _batch_mintable('ERC721BatchMintable'),
        ),
        feature('ERC721Burnable', ['function burn(uint256)']),
        feature(
            'ERC721SignatureMintable',
            [
                'function mintWithSignature((address,address,uint256,address,uint256,string,uint256,uint256,address,uint128,uint128,bytes32),bytes)',
                'function verify((address,address,uint256,address,uint256,string,uint256,uint256,address,uint128,uint128,bytes32),bytes)',
            ],
        ),
    ),
    feature(
        'ERC1155',
        [
            'function balanceOf(address,uint256)',
            'function balanceOfBatch(address[],uint256[])',
            'function setApprovalForAll(address,bool)',
            'function isApprovedForAll(address,address)',
            'function safeTransferFrom(address,address,uint256,uint256,bytes)',
            'function safeBatchTransferFrom(address,address,uint256[],uint256[],bytes)',
        ],
        feature('ERC1155Enumerable', ['function nextTokenIdToMint()']),
        feature(
            'ERC1155Mintable',
            ['function mintTo(address,uint256,string,uint256)'],
            _batch_mintable('ERC1155BatchMintable'),
        ),
        feature(
            'ERC1155Burnable',
            [
                'function burn(address,uint256,uint256)',
                'function burnBatch(address,uint256[],uint256[])',
            ],
        ),
    ),
    feature('ContractMetadata', ['function contractURI()', 'function setContractURI(string)']),
    feature(
        'Permissions',
        [
            'function hasRole(bytes32,address)',
            'function getRoleAdmin(bytes32)',
            'function grantRole(bytes32,address)',
            'function revokeRole(bytes32,address)',
            'function renounceRole(bytes32,address)',
        ],
        feature(
            'PermissionsEnumerable',
            ['function getRoleMember(bytes32,uint256)', 'function getRoleMemberCount(bytes32)'],
        ),
    ),
    feature(
        'Royalty',
        [
            'function royaltyInfo(uint256,uint256)',
            'function getDefaultRoyaltyInfo()',
            'function setDefaultRoyaltyInfo(address,uint256)',
        ],
    ),
    feature(
        'PrimarySale',
        ['function primarySaleRecipient()', 'function setPrimarySaleRecipient(address)'],
    ),
    feature(
        'PlatformFee',
        ['function getPlatformFeeInfo()', 'function setPlatformFeeInfo(address,uint256)'],
    ),
)


def load_feature_catalog(path: str | Path) -> FeatureCatalog:
    """Load a feature catalog from a YAML file holding a list of feature definitions.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If an entry is not a valid feature definition
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'Feature catalog not found: {path}')

    with open(path) as f:
        entries = yaml.safe_load(f)

    return FeatureCatalogAdapter.validate_python(entries or [])
