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

from contractkit_core.cache.client import QueryCache
from contractkit_core.registry.client import PublisherRegistryClient
from contractkit_core.revalidation import RevalidationClient
from contractkit_core.storage.client import ContentFetcher


class ContractKitClients(BaseModel):
    registry: PublisherRegistryClient
    fetcher: ContentFetcher
    cache: QueryCache
    revalidator: RevalidationClient | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)
