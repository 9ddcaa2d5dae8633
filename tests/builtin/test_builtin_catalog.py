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

from contractkit_core.builtin import BUILTIN_CONTRACTS, BuiltinKind, ChainId, is_deployable_on


def test_every_kind_has_catalog_entry():
    assert set(BUILTIN_CONTRACTS) == set(BuiltinKind)
    for kind, details in BUILTIN_CONTRACTS.items():
        assert details.contract_type == kind


def test_pack_is_disabled_on_mainnets():
    assert not is_deployable_on(BuiltinKind.PACK, ChainId.POLYGON)
    assert not is_deployable_on(BuiltinKind.PACK, ChainId.MAINNET)
    assert is_deployable_on(BuiltinKind.PACK, ChainId.MUMBAI)


def test_rinkeby_is_disabled_for_every_kind():
    assert not any(is_deployable_on(kind, ChainId.RINKEBY) for kind in BuiltinKind)


def test_coming_soon_is_never_deployable():
    catalog = {
        BuiltinKind.VOTE: BUILTIN_CONTRACTS[BuiltinKind.VOTE].model_copy(
            update={'coming_soon': True}
        )
    }
    assert not is_deployable_on(BuiltinKind.VOTE, ChainId.POLYGON, catalog)
    assert not is_deployable_on(BuiltinKind.TOKEN, ChainId.POLYGON, catalog)
