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

from contractkit_core.extensions.abi_utils import (
    extract_constructor_params_from_abi,
    extract_functions_from_abi,
)
from tests.helpers_test import abi_event, abi_function

ABI = [
    {
        'type': 'constructor',
        'inputs': [
            {'name': '_defaultAdmin', 'type': 'address'},
            {'name': '_name', 'type': 'string'},
        ],
    },
    abi_function('mintTo', 'address', 'string'),
    abi_event('TokensMinted', 'address', 'uint256'),
    abi_function('name', outputs=('string',), stateMutability='view'),
    {'type': 'receive', 'stateMutability': 'payable'},
]

COMPILER_METADATA = {
    'output': {
        'userdoc': {'methods': {'mintTo(address,string)': {'notice': 'Mints a new token.'}}},
        'devdoc': {
            'methods': {
                'mintTo(address,string)': {'details': 'Caller needs the minter role.'},
                'name()': {'details': 'Collection name.'},
            }
        },
    }
}


class TestExtractFunctions:
    def test_only_functions_in_declaration_order(self):
        functions = extract_functions_from_abi(ABI)

        assert [f.name for f in functions] == ['mintTo', 'name']
        assert functions[0].signature == 'mintTo(address,string)'
        assert [p.type for p in functions[0].inputs] == ['address', 'string']
        assert functions[1].state_mutability == 'view'
        assert [p.type for p in functions[1].outputs] == ['string']

    def test_comments_prefer_notice_over_details(self):
        functions = extract_functions_from_abi(ABI, COMPILER_METADATA)

        assert functions[0].comment == 'Mints a new token.'
        assert functions[1].comment == 'Collection name.'

    def test_no_compiler_metadata_means_no_comments(self):
        assert all(f.comment is None for f in extract_functions_from_abi(ABI))


def test_constructor_params():
    params = extract_constructor_params_from_abi(ABI)
    assert [(p.name, p.type) for p in params] == [('_defaultAdmin', 'address'), ('_name', 'string')]


def test_constructor_params_without_constructor():
    assert extract_constructor_params_from_abi([abi_function('name')]) == []
