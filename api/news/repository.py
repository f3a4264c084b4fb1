"""
News persistence.

`NewsRepository` is the storage interface the API depends on. The SQL
implementation below runs raw SQL over the shared asyncpg pool; the in-memory
one lives in `news/memory.py`.

Every deliberate failure is a `NewsStoreError` carrying the HTTP status the
caller should answer with.
"""

from __future__ import annotations

import asyncio
import uuid
from http import HTTPStatus
from typing import Any, Protocol
from uuid import UUID

import asyncpg

from core import db

from .errors import NewsStoreError, news_not_found
from .schemas import NewsRecord

# UnicodeEncodeError: asyncpg encodes text params to UTF-8 client-side.
_DB_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError, UnicodeEncodeError)

_COLUMNS = "id, author, title, summary, content, source, tags, created_at, updated_at"


class NewsRepository(Protocol):
    async def create(self, record: NewsRecord) -> NewsRecord: ...

    async def find_by_id(self, news_id: UUID) -> NewsRecord: ...

    async def find_all(self, *, limit: int = 100, offset: int = 0) -> list[NewsRecord]: ...

    async def update_by_id(self, news_id: UUID, record: NewsRecord) -> None: ...

    async def delete_by_id(self, news_id: UUID) -> None: ...


def _to_record(row: dict[str, Any]) -> NewsRecord:
    return NewsRecord(
        id=row["id"],
        author=str(row["author"]),
        title=str(row["title"]),
        summary=str(row["summary"]),
        content=str(row["content"]),
        source=str(row["source"]),
        tags=list(row["tags"] or []),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _store_error(exc: Exception) -> NewsStoreError:
    if isinstance(exc, asyncpg.UniqueViolationError):
        return NewsStoreError(exc, HTTPStatus.CONFLICT)
    return NewsStoreError(exc, HTTPStatus.INTERNAL_SERVER_ERROR)


class PostgresNewsRepository:
    async def create(self, record: NewsRecord) -> NewsRecord:
        news_id = uuid.uuid4()
        try:
            row = await db.fetch_one(
                f"""
                INSERT INTO news (id, author, title, summary, content, source, tags, created_at)
                VALUES ($1, $2, $3, $4, $5, $6, $7, COALESCE($8, now()))
                RETURNING {_COLUMNS}
                """,
                news_id,
                record.author,
                record.title,
                record.summary,
                record.content,
                record.source,
                list(record.tags),
                record.created_at,
            )
        except _DB_ERRORS as exc:
            raise _store_error(exc) from exc

        if row is None:
            raise NewsStoreError(RuntimeError("Failed to insert news."), HTTPStatus.INTERNAL_SERVER_ERROR)
        return _to_record(row)

    async def find_by_id(self, news_id: UUID) -> NewsRecord:
        try:
            row = await db.fetch_one(
                f"""
                SELECT {_COLUMNS}
                FROM news
                WHERE id = $1
                  AND deleted_at IS NULL
                """,
                news_id,
            )
        except _DB_ERRORS as exc:
            raise _store_error(exc) from exc

        if row is None:
            raise news_not_found(news_id)
        return _to_record(row)

    async def find_all(self, *, limit: int = 100, offset: int = 0) -> list[NewsRecord]:
        try:
            rows = await db.fetch_all(
                f"""
                SELECT {_COLUMNS}
                FROM news
                WHERE deleted_at IS NULL
                ORDER BY created_at DESC, id DESC
                LIMIT $1
                OFFSET $2
                """,
                limit,
                offset,
            )
        except _DB_ERRORS as exc:
            raise _store_error(exc) from exc
        return [_to_record(row) for row in rows]

    async def update_by_id(self, news_id: UUID, record: NewsRecord) -> None:
        try:
            row = await db.fetch_one(
                """
                UPDATE news
                SET author = $2,
                    title = $3,
                    summary = $4,
                    content = $5,
                    source = $6,
                    tags = $7,
                    created_at = COALESCE($8, created_at),
                    updated_at = now()
                WHERE id = $1
                  AND deleted_at IS NULL
                RETURNING id
                """,
                news_id,
                record.author,
                record.title,
                record.summary,
                record.content,
                record.source,
                list(record.tags),
                record.created_at,
            )
        except _DB_ERRORS as exc:
            raise _store_error(exc) from exc

        if row is None:
            raise news_not_found(news_id)

    async def delete_by_id(self, news_id: UUID) -> None:
        """
        Soft-delete a news row. Deleting a missing or already deleted id is a no-op.
        """
        try:
            await db.execute(
                """
                UPDATE news
                SET deleted_at = now()
                WHERE id = $1
                  AND deleted_at IS NULL
                """,
                news_id,
            )
        except _DB_ERRORS as exc:
            raise _store_error(exc) from exc
