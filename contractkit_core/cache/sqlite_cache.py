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

import contextlib
import json
import logging
import os
import sqlite3
import typing

from .client import QueryCache, QueryKey, key_matches

logger = logging.getLogger(__name__)


class SQLiteQueryCache(QueryCache):
    """SQLite + JSON query cache that survives restarts.

    Only stores JSON-serializable data; keys are stored as JSON arrays.
    """

    def __init__(self, directory: str):
        os.makedirs(directory, exist_ok=True)
        db_path = os.path.join(directory, 'queries.db')
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.execute('CREATE TABLE IF NOT EXISTS queries (key TEXT PRIMARY KEY, value TEXT)')
        self._conn.commit()

    @staticmethod
    def _encode_key(key: QueryKey) -> str:
        return json.dumps(list(key))

    async def get(self, key: QueryKey) -> typing.Any | None:
        row = self._conn.execute(
            'SELECT value FROM queries WHERE key = ?', (self._encode_key(key),)
        ).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning(f'Corrupted cache entry for key {key}, ignoring')
            return None

    async def set(self, key: QueryKey, value: typing.Any) -> None:
        try:
            serialized = json.dumps(value)
        except TypeError:
            logger.warning(f'Non-JSON-serializable cache value for key {key}, skipping')
            return
        self._conn.execute(
            'INSERT OR REPLACE INTO queries (key, value) VALUES (?, ?)',
            (self._encode_key(key), serialized),
        )
        self._conn.commit()

    async def invalidate(self, prefix: QueryKey) -> int:
        stale = []
        for (raw_key,) in self._conn.execute('SELECT key FROM queries').fetchall():
            with contextlib.suppress(json.JSONDecodeError):
                if key_matches(tuple(json.loads(raw_key)), prefix):
                    stale.append(raw_key)

        self._conn.executemany('DELETE FROM queries WHERE key = ?', [(key,) for key in stale])
        self._conn.commit()
        return len(stale)

    def close(self) -> None:
        self._conn.close()

    def __del__(self) -> None:
        with contextlib.suppress(Exception):
            self._conn.close()
