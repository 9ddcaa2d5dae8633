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

from .abi_utils import AbiFunction, extract_constructor_params_from_abi, extract_functions_from_abi
from .catalog import (
    DEFAULT_FEATURE_CATALOG,
    FeatureCatalog,
    FeatureDefinition,
    load_feature_catalog,
)
from .detector import (
    ALWAYS_SUGGESTED,
    ExtensionReport,
    FeatureNode,
    detect_extensions,
    detect_features,
    extract_extensions,
)

__all__ = [
    'ALWAYS_SUGGESTED',
    'DEFAULT_FEATURE_CATALOG',
    'AbiFunction',
    'ExtensionReport',
    'FeatureCatalog',
    'FeatureDefinition',
    'FeatureNode',
    'detect_extensions',
    'detect_features',
    'extract_constructor_params_from_abi',
    'extract_extensions',
    'extract_functions_from_abi',
    'load_feature_catalog',
]
