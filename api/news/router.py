"""
News CRUD API endpoints.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from . import schemas, service
from .dependencies import get_news_repository
from .repository import NewsRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/news", status_code=status.HTTP_201_CREATED)
async def create_news(
    payload: schemas.NewsRequest,
    store: NewsRepository = Depends(get_news_repository),
) -> schemas.NewsRecord:
    logger.info("request received")
    return await service.create_news(payload, store=store)


@router.get("/news")
async def list_news(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    store: NewsRepository = Depends(get_news_repository),
) -> schemas.NewsListResponse:
    """
    List live news, newest first (soft-deleted rows are excluded).
    """
    logger.info("request received")
    return await service.list_news(store=store, limit=limit, offset=offset)


@router.get("/news/{news_id}")
async def get_news(
    news_id: UUID,
    store: NewsRepository = Depends(get_news_repository),
) -> schemas.NewsRecord:
    logger.info("request received")
    return await service.get_news(news_id, store=store)


@router.put("/news/{news_id}")
async def update_news(
    news_id: UUID,
    payload: schemas.NewsRequest,
    store: NewsRepository = Depends(get_news_repository),
) -> dict:
    logger.info("request received")
    return await service.update_news(news_id, payload, store=store)


@router.delete("/news/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_news(
    news_id: UUID,
    store: NewsRepository = Depends(get_news_repository),
) -> Response:
    logger.info("request received")
    await service.delete_news(news_id, store=store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
