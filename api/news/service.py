"""
News business logic.

Flow for every write:
1) validate the decoded body into a `NewsRecord`
2) hand it to the store
3) translate store failures into HTTP errors
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status

from .errors import NewsStoreError, NewsValidationError
from .repository import NewsRepository
from .schemas import NewsListResponse, NewsRecord, NewsRequest

logger = logging.getLogger(__name__)


def _validated(payload: NewsRequest) -> NewsRecord:
    try:
        return payload.to_record()
    except NewsValidationError as exc:
        logger.warning("request_validation_failed errors=%s", exc.errors)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


def _http_error(exc: NewsStoreError) -> HTTPException:
    # The storage cause stays in the logs; clients only see the status.
    return HTTPException(status_code=exc.status_code, detail=exc.status_phrase)


async def create_news(payload: NewsRequest, *, store: NewsRepository) -> NewsRecord:
    record = _validated(payload)
    try:
        created = await store.create(record)
    except NewsStoreError as exc:
        logger.error("news_create_failed status=%s error=%s", exc.status_code, exc)
        raise _http_error(exc) from exc

    logger.info("news_created news_id=%s", created.id)
    return created


async def get_news(news_id: UUID, *, store: NewsRepository) -> NewsRecord:
    try:
        return await store.find_by_id(news_id)
    except NewsStoreError as exc:
        logger.error("news_fetch_failed news_id=%s status=%s error=%s", news_id, exc.status_code, exc)
        raise _http_error(exc) from exc


async def list_news(*, store: NewsRepository, limit: int = 100, offset: int = 0) -> NewsListResponse:
    try:
        items = await store.find_all(limit=limit, offset=offset)
    except NewsStoreError as exc:
        logger.error("news_list_failed status=%s error=%s", exc.status_code, exc)
        raise _http_error(exc) from exc

    return NewsListResponse(news=items, limit=limit, offset=offset, count=len(items))


async def update_news(news_id: UUID, payload: NewsRequest, *, store: NewsRepository) -> dict:
    record = _validated(payload)
    if record.id is not None and record.id != news_id:
        logger.warning("request_validation_failed news_id=%s body_id=%s", news_id, record.id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="id in body does not match id in path",
        )

    try:
        await store.update_by_id(news_id, record)
    except NewsStoreError as exc:
        logger.error("news_update_failed news_id=%s status=%s error=%s", news_id, exc.status_code, exc)
        raise _http_error(exc) from exc

    logger.info("news_updated news_id=%s", news_id)
    return {"ok": True, "news_id": str(news_id)}


async def delete_news(news_id: UUID, *, store: NewsRepository) -> None:
    try:
        await store.delete_by_id(news_id)
    except NewsStoreError as exc:
        logger.error("news_delete_failed news_id=%s status=%s error=%s", news_id, exc.status_code, exc)
        raise _http_error(exc) from exc

    logger.info("news_deleted news_id=%s", news_id)
