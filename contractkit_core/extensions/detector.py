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
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..metadata import AbiEntry
from .catalog import SIGNATURE_KINDS, FeatureCatalog, FeatureDefinition

logger = logging.getLogger(__name__)

ALWAYS_SUGGESTED = ('ContractMetadata', 'Permissions')
ROOT_PARENT = '__ROOT__'


class FeatureNode(BaseModel):
    name: str
    enabled: bool
    children: tuple['FeatureNode', ...] = ()

    model_config = ConfigDict(frozen=True)


class ExtensionReport(BaseModel):
    enabled: tuple[FeatureNode, ...] = ()
    suggested: tuple[FeatureNode, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def enabled_names(self) -> list[str]:
        return [node.name for node in self.enabled]

    @property
    def suggested_names(self) -> list[str]:
        return [node.name for node in self.suggested]


def abi_signatures(abi: Any) -> frozenset[str]:
    """
    Collects ``'<kind> <signature>'`` strings for every function and event in an ABI.

    Detection is advisory, so a missing ABI or unparseable entries never raise:
    the former yields an empty set, the latter are skipped.
    """
    if not isinstance(abi, Sequence) or isinstance(abi, str | bytes):
        if abi is not None:
            logger.warning(f'Ignoring ABI of unexpected type {type(abi).__name__}')
        return frozenset()

    signatures = set()
    for raw_entry in abi:
        if isinstance(raw_entry, AbiEntry):
            entry = raw_entry
        else:
            try:
                entry = AbiEntry.model_validate(raw_entry)
            except ValidationError:
                logger.warning(f'Skipping malformed ABI entry: {raw_entry!r}')
                continue

        if entry.type in SIGNATURE_KINDS and entry.name:
            signatures.add(f'{entry.type} {entry.signature}')

    return frozenset(signatures)


def _annotate(definition: FeatureDefinition, signatures: frozenset[str]) -> FeatureNode:
    return FeatureNode(
        name=definition.name,
        enabled=bool(definition.interface) and signatures.issuperset(definition.interface),
        children=tuple(_annotate(child, signatures) for child in definition.features),
    )


def detect_features(catalog: FeatureCatalog, abi: Any) -> tuple[FeatureNode, ...]:
    """Annotates every catalog node with whether the ABI implements its interface fragment."""
    signatures = abi_signatures(abi)
    return tuple(_annotate(definition, signatures) for definition in catalog)


def extract_extensions(
    features: Sequence[FeatureNode],
    enabled: tuple[FeatureNode, ...] = (),
    suggested: tuple[FeatureNode, ...] = (),
    parent: str = ROOT_PARENT,
) -> tuple[tuple[FeatureNode, ...], tuple[FeatureNode, ...]]:
    """
    Flattens an annotated feature tree into (enabled, suggested) in pre-order.

    A disabled node is suggested when its parent is already enabled, or when it
    is one of ALWAYS_SUGGESTED. Children are visited whether or not their parent
    is enabled.
    """
    for node in features:
        if node.enabled:
            enabled = (*enabled, node)
        elif any(f.name == parent for f in enabled) or node.name in ALWAYS_SUGGESTED:
            suggested = (*suggested, node)

        enabled, suggested = extract_extensions(node.children, enabled, suggested, node.name)

    return enabled, suggested


def detect_extensions(catalog: FeatureCatalog, abi: Any) -> ExtensionReport:
    enabled, suggested = extract_extensions(detect_features(catalog, abi))

    # a catalog may reuse a name in several branches
    enabled_names = {node.name for node in enabled}
    suggested = tuple(node for node in suggested if node.name not in enabled_names)

    return ExtensionReport(enabled=enabled, suggested=suggested)
