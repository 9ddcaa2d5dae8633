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

from typing import Any

from .client import QueryCache, QueryKey, key_matches


class InMemoryQueryCache(QueryCache):
    def __init__(self):
        self._entries: dict[QueryKey, Any] = {}

    async def get(self, key: QueryKey) -> Any | None:
        return self._entries.get(tuple(key))

    async def set(self, key: QueryKey, value: Any) -> None:
        self._entries[tuple(key)] = value

    async def invalidate(self, prefix: QueryKey) -> int:
        stale = [key for key in self._entries if key_matches(key, prefix)]
        for key in stale:
            del self._entries[key]
        return len(stale)
