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

import os
from enum import Enum
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from ..revalidation import default_base_url
from ..storage.gateway_fetcher import DEFAULT_GATEWAY_URL, DEFAULT_TIMEOUT

load_dotenv()


class CacheBackend(str, Enum):
    MEMORY = 'memory'
    SQLITE = 'sqlite'


class ContentConfig(BaseModel):
    """Configuration for the content-addressed storage gateway.

    Examples:
        >>> config = ContentConfig(gateway_url='https://ipfs.io/ipfs/')
    """

    gateway_url: str | None = Field(
        default=None,
        description='Gateway for ipfs:// locators. Falls back to IPFS_GATEWAY_URL.',
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description='Per-request timeout in seconds',
    )

    @model_validator(mode='after')
    def set_defaults(self) -> 'ContentConfig':
        if self.gateway_url is None:
            self.gateway_url = os.getenv('IPFS_GATEWAY_URL', DEFAULT_GATEWAY_URL)
        return self


class RevalidationConfig(BaseModel):
    enabled: bool = Field(
        default=True,
        description='Whether to ask the release pages to rebuild after publishes',
    )
    base_url: str | None = Field(
        default=None,
        description='Base URL of the site serving release pages. Falls back to the environment.',
    )

    @model_validator(mode='after')
    def set_defaults(self) -> 'RevalidationConfig':
        if self.base_url is None:
            self.base_url = default_base_url()
        return self


class CacheConfig(BaseModel):
    backend: CacheBackend = Field(
        default=CacheBackend.MEMORY,
        description='Where memoized query results are kept',
    )
    directory: str | None = Field(
        default=None,
        description='Directory for the sqlite backend',
    )

    @model_validator(mode='after')
    def validate_cache_config(self) -> 'CacheConfig':
        if self.backend == CacheBackend.SQLITE and not self.directory:
            raise ValueError('directory is required for the sqlite cache backend')
        return self


class ContractKitConfig(BaseModel):
    """Main ContractKit configuration.

    Examples:
        >>> cache = CacheConfig(backend=CacheBackend.SQLITE, directory='./cache')
        >>> config = ContractKitConfig(cache=cache)

        >>> # Load from YAML file
        >>> config = ContractKitConfig.from_yaml('contractkit.yaml')

        >>> # Load from environment (looks for CONTRACTKIT_CONFIG_PATH)
        >>> config = ContractKitConfig.from_env()
    """

    content: ContentConfig = Field(default_factory=ContentConfig)
    revalidation: RevalidationConfig = Field(default_factory=RevalidationConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    feature_catalog_path: str | None = Field(
        default=None,
        description='YAML feature catalog replacing the built-in one',
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> 'ContractKitConfig':
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f'Configuration file not found: {path}')

        with open(path) as f:
            config_dict = yaml.safe_load(f)

        if config_dict is None:
            config_dict = {}

        return cls(**config_dict)

    @classmethod
    def from_env(cls, env_var: str = 'CONTRACTKIT_CONFIG_PATH') -> 'ContractKitConfig':
        config_path = os.getenv(env_var)
        if config_path:
            return cls.from_yaml(config_path)

        for default_file in ['.contractkit.yaml', '.contractkit.yml', 'contractkit.yaml']:
            if Path(default_file).exists():
                return cls.from_yaml(default_file)

        return cls()

    def to_yaml(self, path: str | Path) -> None:
        config_dict = self.model_dump(exclude_none=True, mode='json')

        with open(Path(path), 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
