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

from collections.abc import Mapping
from enum import Enum, IntEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class BuiltinKind(str, Enum):
    NFT_DROP = 'nft-drop'
    SIGNATURE_DROP = 'signature-drop'
    MARKETPLACE = 'marketplace'
    EDITION_DROP = 'edition-drop'
    MULTIWRAP = 'multiwrap'
    TOKEN = 'token'
    EDITION = 'edition'
    TOKEN_DROP = 'token-drop'
    SPLIT = 'split'
    NFT_COLLECTION = 'nft-collection'
    VOTE = 'vote'
    PACK = 'pack'
    CUSTOM = 'custom'


class ChainId(IntEnum):
    MAINNET = 1
    RINKEBY = 4
    GOERLI = 5
    OPTIMISM = 10
    BINANCE_SMART_CHAIN_MAINNET = 56
    BINANCE_SMART_CHAIN_TESTNET = 97
    POLYGON = 137
    FANTOM = 250
    FANTOM_TESTNET = 4002
    ARBITRUM = 42161
    AVALANCHE_FUJI_TESTNET = 43113
    AVALANCHE = 43114
    MUMBAI = 80001
    ARBITRUM_TESTNET = 421611
    OPTIMISM_TESTNET = 69


class BuiltinContractDetails(BaseModel):
    title: str
    description: str
    icon: str = Field(description='Icon reference, resolved to an asset by the presentation layer')
    contract_type: BuiltinKind
    href: str
    coming_soon: bool = False
    disabled_chains: tuple[ChainId, ...] = ()
    erc: str | None = None
    audit: str | None = None

    model_config = ConfigDict(frozen=True)


_ERC721_AUDIT = 'QmNgNaLwzgMxcx9r6qDvJmTFam6xxUxX7Vp8E99oRt7i74'
_ERC1155_AUDIT = 'QmWfueeKQrggrVQNjWkF4sYJECp56vNnuAXCPVecFFKz2j'

_PACK_DISABLED_CHAINS = (
    ChainId.RINKEBY,
    ChainId.MAINNET,
    ChainId.POLYGON,
    ChainId.FANTOM,
    ChainId.AVALANCHE,
    ChainId.OPTIMISM,
    ChainId.ARBITRUM,
    ChainId.ARBITRUM_TESTNET,
    ChainId.OPTIMISM_TESTNET,
)

BUILTIN_CONTRACTS: Mapping[BuiltinKind, BuiltinContractDetails] = MappingProxyType(
    {
        BuiltinKind.NFT_DROP: BuiltinContractDetails(
            title='NFT Drop',
            description='One NFT, one owner',
            icon='nft-drop',
            contract_type=BuiltinKind.NFT_DROP,
            erc='ERC721',
            audit=_ERC721_AUDIT,
            href='/contracts/new/pre-built/drop/nft-drop',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.SIGNATURE_DROP: BuiltinContractDetails(
            title='Signature Drop',
            description='ERC721A NFTs that other people can claim',
            icon='nft-drop',
            contract_type=BuiltinKind.SIGNATURE_DROP,
            erc='ERC721A',
            audit=_ERC1155_AUDIT,
            href='/contracts/new/pre-built/drop/signature-drop',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.MARKETPLACE: BuiltinContractDetails(
            title='Marketplace',
            description='Marketplace for ERC721/ERC1155 NFTs',
            icon='marketplace',
            contract_type=BuiltinKind.MARKETPLACE,
            audit=_ERC721_AUDIT,
            href='/contracts/new/pre-built/marketplace/marketplace',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.EDITION_DROP: BuiltinContractDetails(
            title='Edition Drop',
            description='One NFT, multiple owners',
            icon='edition-drop',
            contract_type=BuiltinKind.EDITION_DROP,
            erc='ERC1155',
            audit=_ERC1155_AUDIT,
            href='/contracts/new/pre-built/drop/edition-drop',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.MULTIWRAP: BuiltinContractDetails(
            title='Multiwrap',
            description='Bundle multiple ERC721/ERC1155/ERC20 tokens into a single ERC721',
            icon='token',
            contract_type=BuiltinKind.MULTIWRAP,
            erc='ERC721',
            audit=_ERC1155_AUDIT,
            href='/contracts/new/pre-built/token/multiwrap',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.TOKEN: BuiltinContractDetails(
            title='Token',
            description='ERC20 token',
            icon='token',
            contract_type=BuiltinKind.TOKEN,
            erc='ERC20',
            href='/contracts/new/pre-built/token/token',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.EDITION: BuiltinContractDetails(
            title='Edition',
            description='ERC1155 mintable NFTs',
            icon='edition',
            contract_type=BuiltinKind.EDITION,
            erc='ERC1155',
            href='/contracts/new/pre-built/token/edition',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.TOKEN_DROP: BuiltinContractDetails(
            title='Token Drop',
            description='ERC20 token that you can sell for other tokens',
            icon='token',
            contract_type=BuiltinKind.TOKEN_DROP,
            erc='ERC20',
            href='/contracts/new/pre-built/drop/token-drop',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.SPLIT: BuiltinContractDetails(
            title='Split',
            description='Fee splitting for your primary sales and royalties',
            icon='split',
            contract_type=BuiltinKind.SPLIT,
            href='/contracts/new/pre-built/governance/split',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.NFT_COLLECTION: BuiltinContractDetails(
            title='NFT Collection',
            description='ERC721 mintable NFTs',
            icon='nft-collection',
            contract_type=BuiltinKind.NFT_COLLECTION,
            erc='ERC721',
            href='/contracts/new/pre-built/token/nft-collection',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.VOTE: BuiltinContractDetails(
            title='Vote',
            description='On-chain ERC20-based voting',
            icon='vote',
            contract_type=BuiltinKind.VOTE,
            href='/contracts/new/pre-built/governance/vote',
            disabled_chains=(ChainId.RINKEBY,),
        ),
        BuiltinKind.PACK: BuiltinContractDetails(
            title='Pack',
            description='Bundle ERC721/ERC1155/ERC20 into a single token, with lootbox mechanics',
            icon='pack',
            contract_type=BuiltinKind.PACK,
            erc='ERC1155',
            href='/contracts/new/pre-built/token/pack',
            disabled_chains=_PACK_DISABLED_CHAINS,
        ),
        BuiltinKind.CUSTOM: BuiltinContractDetails(
            title='NOT IMPLEMENTED',
            description='NOT IMPLEMENTED',
            icon='custom',
            contract_type=BuiltinKind.CUSTOM,
            href='NOT IMPLEMENTED',
            disabled_chains=(ChainId.RINKEBY,),
        ),
    }
)


def is_deployable_on(
    kind: BuiltinKind,
    chain_id: int,
    catalog: Mapping[BuiltinKind, BuiltinContractDetails] = BUILTIN_CONTRACTS,
) -> bool:
    """Returns False when the built-in kind is disabled or coming soon on the given chain."""
    details = catalog.get(kind)
    if details is None or details.coming_soon:
        return False
    return chain_id not in details.disabled_chains
