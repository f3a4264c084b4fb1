"""
In-memory news store.

Same contract as `PostgresNewsRepository`, backed by a list guarded by one
lock. Used for local runs without a database (`NEWS_STORE_BACKEND=memory`)
and in tests.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from uuid import UUID

from .errors import news_not_found
from .schemas import NewsRecord


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryNewsRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._news: list[NewsRecord] = []

    def _index_of(self, news_id: UUID) -> int:
        # Caller must hold the lock.
        for idx, item in enumerate(self._news):
            if item.id == news_id:
                return idx
        return -1

    async def create(self, record: NewsRecord) -> NewsRecord:
        now = _utc_now()
        stored = record.model_copy(
            update={
                "id": uuid.uuid4(),
                "tags": list(record.tags),
                "created_at": record.created_at or now,
                "updated_at": now,
            }
        )
        with self._lock:
            self._news.append(stored)
        return stored.model_copy(deep=True)

    async def find_by_id(self, news_id: UUID) -> NewsRecord:
        with self._lock:
            idx = self._index_of(news_id)
            if idx == -1:
                raise news_not_found(news_id)
            return self._news[idx].model_copy(deep=True)

    async def find_all(self, *, limit: int = 100, offset: int = 0) -> list[NewsRecord]:
        with self._lock:
            items = [item.model_copy(deep=True) for item in self._news]

        # Newest first, ties by id, matching the SQL store.
        items.sort(key=lambda item: (item.created_at, str(item.id)), reverse=True)
        return items[offset : offset + limit]

    async def update_by_id(self, news_id: UUID, record: NewsRecord) -> None:
        with self._lock:
            idx = self._index_of(news_id)
            if idx == -1:
                raise news_not_found(news_id)
            current = self._news[idx]
            self._news[idx] = current.model_copy(
                update={
                    "author": record.author,
                    "title": record.title,
                    "summary": record.summary,
                    "content": record.content,
                    "source": record.source,
                    "tags": list(record.tags),
                    "created_at": record.created_at or current.created_at,
                    "updated_at": _utc_now(),
                }
            )

    async def delete_by_id(self, news_id: UUID) -> None:
        with self._lock:
            idx = self._index_of(news_id)
            if idx == -1:
                return None
            del self._news[idx]

    def __len__(self) -> int:
        with self._lock:
            return len(self._news)
