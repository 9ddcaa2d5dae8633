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

from abc import ABC, abstractmethod
from typing import Any

QueryKey = tuple[Any, ...]


def key_matches(key: QueryKey, prefix: QueryKey) -> bool:
    return len(key) >= len(prefix) and tuple(key[: len(prefix)]) == tuple(prefix)


class QueryCache(ABC):
    """
    Memoized results of resolution calls, keyed by ``(operation, *arguments)``.

    Values are JSON-compatible. Invalidation is by key prefix, so
    ``('pre-publish-metadata', uri)`` drops the entry for every address.
    """

    @abstractmethod
    async def get(self, key: QueryKey) -> Any | None:
        pass

    @abstractmethod
    async def set(self, key: QueryKey, value: Any) -> None:
        pass

    @abstractmethod
    async def invalidate(self, prefix: QueryKey) -> int:
        """Drop every entry whose key starts with prefix. Returns how many were dropped."""
        pass
